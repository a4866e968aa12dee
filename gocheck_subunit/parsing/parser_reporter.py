"""Streaming gocheck output parser that reports subunit-style events.

``ParserReporter`` consumes arbitrary byte chunks of gocheck output,
splits them into lines, classifies each line and reports at most one
event per line to a sink.  Three policies sit between classification and
reporting:

* Fixture methods (``SetUp*``/``TearDown*``) are never reported.  A
  skipped ``SetUp*`` is remembered so the dependent test's skip can carry
  the fixture's reason.
* While the run is rebooting, or has just come back from a reboot, only
  skips with a reboot skip reason are reported.  With no marker set, a
  reboot skip is itself dropped and the skips that follow it are dropped
  too, until a test passes or fails again.
* A ``SKIP`` line without an inline reason waits for a continuation line
  at the same ``file:line`` that carries the reason.
"""

from __future__ import annotations

from dataclasses import dataclass

from gocheck_subunit.lifecycle.reboot import (
    REBOOT_SKIP_REASONS,
    RebootMarkers,
    RebootStatus,
)
from gocheck_subunit.parsing.classifier import (
    LineMatch,
    classify_line,
    is_fixture,
    is_setup,
    is_test_id,
)
from gocheck_subunit.reporting.sink import Sink, make_event


@dataclass
class PendingSkip:
    """The single in-flight multi-line skip.

    With ``reason`` unset, ``test_id`` is waiting for a continuation line
    at ``location`` to supply its reason.  For a skipped fixture
    (``fixture`` set) ``test_id`` is the dependent test, and once the
    reason is known the next reason-less skip at the same location
    inherits it; ``reported`` names a test that already got its skip
    event and must not be reported twice.
    """

    location: str
    test_id: str | None = None
    reason: str | None = None
    fixture: bool = False
    reported: str | None = None


class ParserReporter:
    """Parses gocheck output and reports one event per recognized line.

    Not safe for concurrent writes: callers feed chunks of a single
    stream, in order, one ``write`` at a time.
    """

    def __init__(
        self,
        sink: Sink,
        reboot_status: RebootStatus | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self.sink = sink
        self.reboot_status = (
            reboot_status if reboot_status is not None else RebootMarkers()
        )
        self.encoding = encoding
        self.warnings: list[str] = []
        self._buffer = b""
        self._current_test: str | None = None
        self._pending: PendingSkip | None = None
        self._reboot_skipped = False

    @property
    def pending(self) -> PendingSkip | None:
        return self._pending

    @property
    def current_test(self) -> str | None:
        """The last non-fixture test announced by a Running line."""
        return self._current_test

    def write(self, data: bytes) -> int:
        """Consume a chunk of output, reporting events for complete lines.

        Args:
            data: Any number of complete or partial lines.

        Returns:
            The number of bytes accepted, always ``len(data)``.
        """
        self._buffer += data
        *lines, self._buffer = self._buffer.split(b"\n")
        for raw in lines:
            self._process_line(raw.decode(self.encoding, errors="replace"))
        return len(data)

    def flush(self) -> None:
        """Process any trailing partial line and settle the pending skip.

        Called once the stream has ended.  A skip still waiting for its
        reason is reported without one.
        """
        if self._buffer:
            raw, self._buffer = self._buffer, b""
            self._process_line(raw.decode(self.encoding, errors="replace"))
        self._settle_pending()

    def _process_line(self, line: str) -> None:
        match = classify_line(line)
        if match is None:
            return

        if match.kind == "skip" and match.reason is None:
            self._bare_skip(match)
            return

        # Any other recognized line closes an open multi-line skip.
        self._settle_pending()

        if match.kind == "exists" and not is_fixture(match.test_id):
            self._current_test = match.test_id
        if match.kind in ("success", "fail") and not is_fixture(match.test_id):
            self._reboot_skipped = False

        if match.kind == "skip" and is_setup(match.test_id):
            self._pending = PendingSkip(
                location=match.location, reason=match.reason, fixture=True,
            )
            return

        if is_fixture(match.test_id):
            return

        self._report(match.test_id, match.kind, match.reason)

    def _bare_skip(self, match: LineMatch) -> None:
        """Handle ``SKIP: file:line: text`` without an inline reason."""
        text = match.test_id
        pending = self._pending

        if pending is not None and pending.location == match.location:
            if pending.reason is None and text == pending.test_id:
                # The test's own skip line; keep waiting for the reason
                return
            if (
                pending.reason is None
                and pending.test_id is None
                and is_test_id(text)
                and not is_fixture(text)
            ):
                # Skipped fixture with no running test; this is its dependent
                pending.test_id = text
                return
            if pending.reason is None:
                # Continuation line carrying the reason
                self._pending = None
                if pending.test_id is not None:
                    self._report(pending.test_id, "skip", text)
                if pending.fixture:
                    self._pending = PendingSkip(
                        location=pending.location,
                        reason=text,
                        fixture=True,
                        reported=pending.test_id,
                    )
                return
            if pending.fixture and pending.reason is not None and is_test_id(text):
                if not is_fixture(text):
                    # Test skipped because its fixture was skipped
                    self._pending = None
                    if text != pending.reported:
                        self._report(text, "skip", pending.reason)
                    return

        if not is_test_id(text):
            # Reason text with nothing waiting for it
            return

        self._settle_pending()
        if is_setup(text):
            self._pending = PendingSkip(
                location=match.location,
                test_id=self._current_test,
                fixture=True,
            )
        elif not is_fixture(text):
            self._pending = PendingSkip(location=match.location, test_id=text)

    def _settle_pending(self) -> None:
        """Drop the pending skip, reporting a test still waiting for a reason."""
        pending, self._pending = self._pending, None
        if pending is None or pending.reason is not None:
            return
        if pending.test_id is not None:
            self._report(pending.test_id, "skip")

    def _suppressed(self, status: str, reason: str | None) -> bool:
        marked = (
            self.reboot_status.is_rebooting()
            or self.reboot_status.is_after_reboot()
        )
        if status == "skip" and reason in REBOOT_SKIP_REASONS:
            # Reboot skips only describe a reboot while a marker holds
            return not marked
        if status == "skip" and self._reboot_skipped:
            return True
        return marked

    def _report(self, test_id: str, status: str, reason: str | None = None) -> None:
        suppressed = self._suppressed(status, reason)
        if status == "skip" and reason in REBOOT_SKIP_REASONS:
            self._reboot_skipped = True
        if suppressed:
            return
        event = make_event(test_id, status, reason)
        try:
            self.sink.report(event)
        except OSError as e:
            self.warnings.append(
                f"sink: failed to report {status} for {test_id}: {e}"
            )
