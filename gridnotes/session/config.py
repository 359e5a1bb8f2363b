"""Session configuration."""

from ..simulations.markers import marker_count


class SessionConfig:
    """Fixed parameters of a session.

    Ratios are clamped into range; values with no sensible clamp raise.
    """

    def __init__(self,
                 side: int = 32,
                 tick_rate: float = 4.0,
                 note_period: int = 10,
                 channel: int = 1,
                 velocity: float = 0.8,
                 marker_ratio: float = 1 / 8,
                 life_seed_ratio: float = 0.5,
                 rain_limit_factor: int = 2,
                 padding_ratio: float = 0.01):
        """Initialize session configuration.

        Args:
            side: Cells per grid edge
            tick_rate: Ticks per second of wall-clock time
            note_period: Ticks per note cycle; notes start on tick 0 of the
                cycle and are released on its last tick
            channel: Channel of every note event (0-15)
            velocity: Note-on velocity (0.0-1.0)
            marker_ratio: Marker draws as a fraction of the cell count (0.0-1.0)
            life_seed_ratio: Life seed draws as a fraction of the cell count (0.0-1.0)
            rain_limit_factor: Rain stops spawning at ``rain_limit_factor * side`` drops
            padding_ratio: Cell padding as a fraction of its zone (0.0-0.5)

        Raises:
            ValueError: If side, tick_rate, note_period, channel or
                rain_limit_factor is out of range
        """
        if side < 1:
            raise ValueError("side must be positive")
        if tick_rate <= 0:
            raise ValueError("tick_rate must be positive")
        if note_period < 2:
            raise ValueError("note_period must be at least 2")
        if not 0 <= channel <= 15:
            raise ValueError("channel must be between 0 and 15")
        if rain_limit_factor < 1:
            raise ValueError("rain_limit_factor must be at least 1")

        self.side = side
        self.tick_rate = float(tick_rate)
        self.note_period = note_period
        self.channel = channel
        self.velocity = max(0.0, min(1.0, velocity))
        self.marker_ratio = max(0.0, min(1.0, marker_ratio))
        self.life_seed_ratio = max(0.0, min(1.0, life_seed_ratio))
        self.rain_limit_factor = rain_limit_factor
        self.padding_ratio = max(0.0, min(0.5, padding_ratio))

    @property
    def marker_draws(self) -> int:
        """Marker placements per (re)seed: side * side / 8 by default."""
        return marker_count(self.side, self.marker_ratio)

    def is_note_tick(self, tick: int) -> bool:
        return tick % self.note_period == 0

    def is_stop_tick(self, tick: int) -> bool:
        return tick % self.note_period == self.note_period - 1

    def copy(self) -> 'SessionConfig':
        """Create a copy of the configuration."""
        return SessionConfig(
            side=self.side,
            tick_rate=self.tick_rate,
            note_period=self.note_period,
            channel=self.channel,
            velocity=self.velocity,
            marker_ratio=self.marker_ratio,
            life_seed_ratio=self.life_seed_ratio,
            rain_limit_factor=self.rain_limit_factor,
            padding_ratio=self.padding_ratio,
        )

    def __repr__(self) -> str:
        return (f"SessionConfig(side={self.side}, tick_rate={self.tick_rate}, "
                f"note_period={self.note_period}, channel={self.channel})")
