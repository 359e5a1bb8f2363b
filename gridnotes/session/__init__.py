"""Session control: configuration, tick clock and the controller."""

from .clock import TickClock, tick_for_elapsed
from .config import SessionConfig
from .controller import SeedState, Session, TickResult

__all__ = [
    'SessionConfig',
    'TickClock',
    'tick_for_elapsed',
    'Session',
    'SeedState',
    'TickResult',
]
