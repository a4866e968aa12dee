"""Unit tests for events and sinks."""

from __future__ import annotations

import io
from typing import Any

import pytest
from subunit import ByteStreamToStreamResult
from testtools import StreamResult

from gocheck_subunit.reporting.sink import (
    EVENT_STATUSES,
    REASON_FILE_NAME,
    REASON_MIME_TYPE,
    Event,
    RecordingSink,
    SubunitSink,
    make_event,
)


class _StatusRecorder(StreamResult):
    """Collects the status calls decoded from a subunit stream."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[dict[str, Any]] = []

    def status(
        self, test_id=None, test_status=None, test_tags=None, runnable=True,
        file_name=None, file_bytes=None, eof=False, mime_type=None,
        route_code=None, timestamp=None,
    ) -> None:
        self.calls.append({
            "test_id": test_id,
            "test_status": test_status,
            "file_name": file_name,
            "file_bytes": file_bytes,
            "eof": eof,
            "mime_type": mime_type,
        })


def _decode(data: bytes) -> list[dict[str, Any]]:
    recorder = _StatusRecorder()
    ByteStreamToStreamResult(io.BytesIO(data)).run(recorder)
    return recorder.calls


class TestMakeEvent:
    """Tests for building events."""

    @pytest.mark.parametrize("status", sorted(EVENT_STATUSES - {"skip"}))
    def test_plain_statuses_have_no_attachment(self, status):
        event = make_event("testSuite.TestA", status, reason="ignored")
        assert event == Event(test_id="testSuite.TestA", status=status)

    def test_skip_with_reason(self):
        event = make_event("testSuite.TestSkip", "skip", "no network")
        assert event.mime_type == REASON_MIME_TYPE
        assert event.file_name == REASON_FILE_NAME
        assert event.file_bytes == b"no network"
        assert event.reason == "no network"

    def test_skip_without_reason(self):
        event = make_event("testSuite.TestSkip", "skip")
        assert event.file_bytes is None
        assert event.reason is None

    def test_skip_empty_reason_has_no_attachment(self):
        assert make_event("testSuite.TestSkip", "skip", "").file_bytes is None

    def test_unknown_status(self):
        with pytest.raises(ValueError, match="Unknown event status"):
            make_event("testSuite.TestA", "xfail")

    def test_reason_is_utf8(self):
        event = make_event("testSuite.TestSkip", "skip", "café")
        assert event.file_bytes == "café".encode("utf-8")


class TestRecordingSink:
    """Tests for the in-memory sink."""

    def test_records_in_order(self):
        sink = RecordingSink()
        first = make_event("testSuite.TestA", "exists")
        second = make_event("testSuite.TestA", "success")
        sink.report(first)
        sink.report(second)
        assert sink.events == [first, second]

    def test_clear(self):
        sink = RecordingSink()
        sink.report(make_event("testSuite.TestA", "exists"))
        sink.clear()
        assert sink.events == []


class TestSubunitSink:
    """Tests for subunit v2 serialization."""

    def test_status_packet(self):
        stream = io.BytesIO()
        SubunitSink(stream).report(make_event("testSuite.TestFail", "fail"))
        calls = _decode(stream.getvalue())
        assert len(calls) == 1
        assert calls[0]["test_id"] == "testSuite.TestFail"
        assert calls[0]["test_status"] == "fail"

    def test_skip_reason_attachment(self):
        stream = io.BytesIO()
        SubunitSink(stream).report(
            make_event("testSuite.TestSkip", "skip", "skip reason")
        )
        calls = _decode(stream.getvalue())
        assert len(calls) == 1
        call = calls[0]
        assert call["test_id"] == "testSuite.TestSkip"
        assert call["test_status"] == "skip"
        assert call["file_name"] == "reason"
        assert bytes(call["file_bytes"]) == b"skip reason"
        assert call["mime_type"] == "text/plain;charset=utf8"
        assert call["eof"]

    def test_events_in_order(self):
        stream = io.BytesIO()
        sink = SubunitSink(stream)
        sink.report(make_event("testSuite.TestA", "exists"))
        sink.report(make_event("testSuite.TestA", "success"))
        calls = _decode(stream.getvalue())
        assert [(c["test_id"], c["test_status"]) for c in calls] == [
            ("testSuite.TestA", "exists"),
            ("testSuite.TestA", "success"),
        ]

