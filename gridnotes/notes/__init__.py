"""
Note emission: collisions between alive and marked cells become
edge-triggered note-on/note-off events.
"""

from .events import NoteEvent, NoteOff, NoteOn, note_for_position
from .policy import NoteEmitter, NotePolicy, collisions, select_index
from .sink import EventSink, JsonlSink, LoggingSink, NullSink, RecordingSink, deliver

__all__ = [
    'NoteEvent',
    'NoteOn',
    'NoteOff',
    'note_for_position',
    'NotePolicy',
    'NoteEmitter',
    'collisions',
    'select_index',
    'EventSink',
    'NullSink',
    'RecordingSink',
    'LoggingSink',
    'JsonlSink',
    'deliver',
]
