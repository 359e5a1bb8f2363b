"""Note events emitted by the note policy."""

from dataclasses import dataclass
from typing import Union

NOTE_RANGE = 128


def note_for_position(x: int, y: int) -> int:
    """Note number for a grid position.

    Anti-diagonals share a note: (1, 0) and (0, 1) both map to 1.
    """
    return (x + y) % NOTE_RANGE


@dataclass(frozen=True)
class NoteOn:
    """Start sounding ``note`` on ``channel``."""
    channel: int
    note: int
    velocity: float

    def __post_init__(self):
        if not 0 <= self.note < NOTE_RANGE:
            raise ValueError(f"note must be in 0..{NOTE_RANGE - 1}, got {self.note}")


@dataclass(frozen=True)
class NoteOff:
    """Stop sounding ``note`` on ``channel``."""
    channel: int
    note: int

    def __post_init__(self):
        if not 0 <= self.note < NOTE_RANGE:
            raise ValueError(f"note must be in 0..{NOTE_RANGE - 1}, got {self.note}")


NoteEvent = Union[NoteOn, NoteOff]
