"""Event sink contract and delivery.

Sinks receive note events fire-and-forget. A sink that raises does not
stop the session: the failure is logged and the event is dropped.
"""

from dataclasses import asdict
from pathlib import Path
from typing import Iterable, List, Union
import json
import logging

from .events import NoteEvent, NoteOff, NoteOn

logger = logging.getLogger(__name__)


class EventSink:
    """Receiver of note events (transport adapters subclass this)."""

    def note_on(self, event: NoteOn) -> None:
        raise NotImplementedError

    def note_off(self, event: NoteOff) -> None:
        raise NotImplementedError

    def send(self, event: NoteEvent) -> None:
        """Dispatch ``event`` to ``note_on`` or ``note_off``."""
        if isinstance(event, NoteOn):
            self.note_on(event)
        else:
            self.note_off(event)

    def close(self) -> None:
        """Release the transport; the base sink holds nothing."""

    def __enter__(self) -> 'EventSink':
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class NullSink(EventSink):
    """Discards every event."""

    def note_on(self, event: NoteOn) -> None:
        pass

    def note_off(self, event: NoteOff) -> None:
        pass


class RecordingSink(EventSink):
    """Keeps every received event in order."""

    def __init__(self):
        self.events: List[NoteEvent] = []

    def note_on(self, event: NoteOn) -> None:
        self.events.append(event)

    def note_off(self, event: NoteOff) -> None:
        self.events.append(event)

    def clear(self) -> None:
        self.events.clear()


class LoggingSink(EventSink):
    """Writes each event to a logger at INFO level."""

    def __init__(self, log: logging.Logger = logger):
        self.log = log

    def note_on(self, event: NoteOn) -> None:
        self.log.info(f"note_on  ch={event.channel} note={event.note} vel={event.velocity:.2f}")

    def note_off(self, event: NoteOff) -> None:
        self.log.info(f"note_off ch={event.channel} note={event.note}")


class JsonlSink(EventSink):
    """Appends each event as one JSON object per line.

    Lines look like ``{"type": "note_on", "channel": 1, "note": 12, "velocity": 0.8}``.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, 'a')

    def _write(self, record: dict) -> None:
        self._file.write(json.dumps(record) + '\n')
        self._file.flush()

    def note_on(self, event: NoteOn) -> None:
        self._write({"type": "note_on", **asdict(event)})

    def note_off(self, event: NoteOff) -> None:
        self._write({"type": "note_off", **asdict(event)})

    def close(self) -> None:
        self._file.close()


def deliver(sink: EventSink, events: Iterable[NoteEvent]) -> int:
    """Send ``events`` to ``sink``, swallowing send failures.

    Returns:
        Number of events the sink accepted
    """
    delivered = 0
    for event in events:
        try:
            sink.send(event)
        except Exception as e:
            logger.warning(f"Dropped {type(event).__name__} {event.note}: {e}")
            continue
        delivered += 1
    return delivered
