"""Event model and sinks.

An ``Event`` is one subunit-style test status: a test id, a status and,
for skips that carry a reason, a ``reason`` text attachment.  Sinks
receive finished events through a single ``report`` call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Protocol

from subunit.v2 import StreamResultToBytes

# Statuses the parser produces
EVENT_STATUSES = frozenset({"exists", "success", "fail", "skip"})

REASON_MIME_TYPE = "text/plain;charset=utf8"
REASON_FILE_NAME = "reason"


@dataclass(frozen=True)
class Event:
    """A single test status event."""

    test_id: str
    status: str
    mime_type: str | None = None
    file_name: str | None = None
    file_bytes: bytes | None = None

    @property
    def reason(self) -> str | None:
        """The skip reason, decoded, or None if no reason is attached."""
        if self.file_name != REASON_FILE_NAME or self.file_bytes is None:
            return None
        return self.file_bytes.decode("utf-8")


def make_event(test_id: str, status: str, reason: str | None = None) -> Event:
    """Build an event, attaching *reason* to skip events.

    Raises:
        ValueError: If *status* is not one of ``EVENT_STATUSES``.
    """
    if status not in EVENT_STATUSES:
        raise ValueError(f"Unknown event status: {status}")
    if status == "skip" and reason:
        return Event(
            test_id=test_id,
            status=status,
            mime_type=REASON_MIME_TYPE,
            file_name=REASON_FILE_NAME,
            file_bytes=reason.encode("utf-8"),
        )
    return Event(test_id=test_id, status=status)


class Sink(Protocol):
    """Receives finished events."""

    def report(self, event: Event) -> None:
        ...


class SubunitSink:
    """Writes events as subunit v2 packets to a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self._result = StreamResultToBytes(stream)

    def report(self, event: Event) -> None:
        self._result.status(
            test_id=event.test_id,
            test_status=event.status,
            file_name=event.file_name,
            file_bytes=event.file_bytes,
            mime_type=event.mime_type,
            eof=event.file_bytes is not None,
        )
        self.stream.flush()


class RecordingSink:
    """Keeps every reported event in memory."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    def report(self, event: Event) -> None:
        self.events.append(event)

    def clear(self) -> None:
        self.events.clear()
