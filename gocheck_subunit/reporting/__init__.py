"""Event sinks: subunit v2 output, in-memory recording, and YAML summaries."""

from gocheck_subunit.reporting.sink import Event, RecordingSink, Sink, SubunitSink, make_event
from gocheck_subunit.reporting.summary import SummarySink

__all__ = [
    "Event",
    "RecordingSink",
    "Sink",
    "SubunitSink",
    "SummarySink",
    "make_event",
]
