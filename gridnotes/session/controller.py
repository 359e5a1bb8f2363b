"""Session controller.

Owns the grid, the selected simulation and note policy, and the tick
counter. One call to ``advance`` is one tick:

1. seed the selected rule if it has not been seeded since it was selected
2. step the rule to produce the next grid
3. run the note cadence (note-on on emission ticks, note-off on stop ticks)
4. hand the events to the sink

Control-surface calls (``set_simulation``, ``set_note_policy``,
``restart``, ``reseed``, ``resize``) are applied between ticks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
import logging

import numpy as np

from ..core.cell import Rect
from ..core.grid import Grid
from ..core.layout import layout_cells
from ..notes.events import NoteEvent
from ..notes.policy import NoteEmitter, NotePolicy
from ..notes.sink import EventSink, NullSink, deliver
from ..simulations import SimulationKind, create_simulation, reseed_markers
from .config import SessionConfig

logger = logging.getLogger(__name__)


class SeedState(Enum):
    """Seeding state of the selected simulation."""
    UNINITIALIZED = 0  # Next advance seeds the rule
    RUNNING = 1        # Seeded; advances only step


@dataclass
class TickResult:
    """Outcome of one ``Session.advance`` call."""
    tick: int
    grid: Grid
    events: List[NoteEvent] = field(default_factory=list)
    seeded: bool = False


class Session:
    """Single grid driven by one simulation rule and one note policy.

    Attributes:
        config: Session configuration
        grid: Current grid (replaced on every tick)
        simulation_kind: Selected simulation
        state: Seeding state of the selected simulation
        tick: Index of the last advanced tick (-1 before the first)
    """

    def __init__(self,
                 config: Optional[SessionConfig] = None,
                 simulation: SimulationKind = SimulationKind.MOVER,
                 note_policy: NotePolicy = NotePolicy.MIN,
                 sink: Optional[EventSink] = None,
                 bounds: Optional[Rect] = None,
                 rng: Optional[np.random.Generator] = None):
        """Initialize a session.

        Args:
            config: Session configuration (defaults if None)
            simulation: Initially selected simulation
            note_policy: Initially selected note policy
            sink: Receiver of note events (events are discarded if None)
            bounds: Initial window bounds for cell geometry
            rng: Random generator shared by seeding, rules and the RANDOM policy
        """
        self.config = config or SessionConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.sink = sink if sink is not None else NullSink()

        self.bounds = bounds
        rects = None
        if bounds is not None:
            rects = layout_cells(bounds, self.config.side, self.config.padding_ratio)
        self.grid = Grid(self.config.side, rects=rects)

        self.simulation_kind = simulation
        self.simulation = self._create_simulation(simulation)
        self.emitter = NoteEmitter(note_policy, self.config.channel, self.config.velocity, self.rng)

        self.state = SeedState.UNINITIALIZED
        self.tick = -1
        self.activated_at = 0

        logger.debug(f"Created session {self.config!r} with {simulation.value}/{note_policy.value}")

    def _create_simulation(self, kind: SimulationKind):
        return create_simulation(kind,
                                 rain_limit_factor=self.config.rain_limit_factor,
                                 life_seed_ratio=self.config.life_seed_ratio)

    @property
    def note_policy(self) -> NotePolicy:
        return self.emitter.policy

    @property
    def initialized(self) -> bool:
        return self.state is SeedState.RUNNING

    def advance(self, tick: Optional[int] = None) -> TickResult:
        """Run one tick.

        Args:
            tick: Tick index supplied by the clock (defaults to the next one)

        Returns:
            TickResult with the new grid and the events sent this tick
        """
        tick = self.tick + 1 if tick is None else tick
        seeded = False

        if self.state is SeedState.UNINITIALIZED:
            self._seed(tick)
            seeded = True

        self.grid = self.simulation.step(tick - self.activated_at, self.grid, self.rng)
        self.tick = tick

        events: List[NoteEvent] = []
        if self.config.is_note_tick(tick):
            events.extend(self.emitter.emit(self.grid))
        elif self.config.is_stop_tick(tick):
            events.extend(self.emitter.stop(self.grid))

        if events:
            deliver(self.sink, events)

        return TickResult(tick=tick, grid=self.grid, events=events, seeded=seeded)

    def _seed(self, tick: int) -> None:
        grid = self.simulation.seed(self.grid, self.rng)
        self.grid = reseed_markers(grid, self.rng, self.config.marker_draws)
        self.activated_at = tick
        self.state = SeedState.RUNNING
        logger.debug(f"Seeded {self.simulation_kind.value} at tick {tick}")

    def snapshot(self) -> Grid:
        """Copy of the current grid for renderers."""
        return self.grid.copy()

    # Control surface

    def set_simulation(self, kind: SimulationKind) -> None:
        """Select a simulation; it is seeded on the next advance.

        Cell flags are left as they are until the seed runs.
        """
        if not isinstance(kind, SimulationKind):
            raise TypeError(f"Expected SimulationKind, got {type(kind).__name__}")
        self.simulation_kind = kind
        self.simulation = self._create_simulation(kind)
        self.state = SeedState.UNINITIALIZED
        logger.info(f"Simulation switched to {kind.value}")

    def set_note_policy(self, policy: NotePolicy) -> None:
        if not isinstance(policy, NotePolicy):
            raise TypeError(f"Expected NotePolicy, got {type(policy).__name__}")
        self.emitter.policy = policy
        logger.info(f"Note policy switched to {policy.value}")

    def restart(self) -> None:
        """Re-seed the current simulation on the next advance."""
        self.state = SeedState.UNINITIALIZED
        logger.info(f"Restarting {self.simulation_kind.value}")

    def reseed(self) -> None:
        """Re-randomize the marked set; alive and active flags are untouched."""
        self.grid = reseed_markers(self.grid, self.rng, self.config.marker_draws)
        logger.info(f"Reseeded markers: {self.grid.count_marked()} marked cells")

    def resize(self, bounds: Rect) -> None:
        """Recompute cell geometry for new window bounds, keeping every flag."""
        if bounds == self.bounds:
            return
        self.bounds = bounds
        rects = layout_cells(bounds, self.config.side, self.config.padding_ratio)
        self.grid = Grid.rebuild_preserving(self.grid, rects=rects)
        logger.info(f"Resized to {bounds.w:.0f}x{bounds.h:.0f}")

    def __repr__(self) -> str:
        return (f"Session({self.simulation_kind.value}, {self.note_policy.value}, "
                f"tick={self.tick}, {self.grid!r})")
