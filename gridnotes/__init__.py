"""
gridnotes: cell-grid simulations that play notes.

A fixed square grid is driven by one of three rules (a moving cursor,
falling rain, the Game of Life). Alive cells landing on marked cells
trigger edge-gated note events for an external sink.
"""

from .core import Cell, CellPatch, Grid, Rect
from .notes import NoteEmitter, NoteOff, NoteOn, NotePolicy, EventSink
from .session import Session, SessionConfig, TickClock
from .simulations import SimulationKind

__version__ = "0.1.0"

__all__ = [
    'Cell',
    'CellPatch',
    'Grid',
    'Rect',
    'NoteOn',
    'NoteOff',
    'NotePolicy',
    'NoteEmitter',
    'EventSink',
    'Session',
    'SessionConfig',
    'TickClock',
    'SimulationKind',
]
