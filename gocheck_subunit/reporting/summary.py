"""Run summary for reported events.

``SummarySink`` sits in front of another sink, forwards every event and
keeps per-status counts plus the failed and skipped tests, so a YAML
summary of the run can be written once the stream has ended.
"""

from __future__ import annotations

import datetime
from pathlib import Path
from typing import Any

import yaml

from gocheck_subunit.reporting.sink import EVENT_STATUSES, Event, Sink


class SummarySink:
    """Forwards events to *inner* and tallies them.

    Events the inner sink fails to deliver are not counted.
    """

    def __init__(self, inner: Sink) -> None:
        self.inner = inner
        self.counts: dict[str, int] = {status: 0 for status in sorted(EVENT_STATUSES)}
        self.failed: list[str] = []
        self.skipped: list[dict[str, Any]] = []

    def report(self, event: Event) -> None:
        self.inner.report(event)
        self.counts[event.status] = self.counts.get(event.status, 0) + 1
        if event.status == "fail":
            self.failed.append(event.test_id)
        elif event.status == "skip":
            entry: dict[str, Any] = {"test_id": event.test_id}
            if event.reason is not None:
                entry["reason"] = event.reason
            self.skipped.append(entry)

    def generate_summary(self) -> dict[str, Any]:
        """Generate the summary data structure.

        Returns:
            Dictionary suitable for YAML serialization.
        """
        now = datetime.datetime.now(tz=datetime.timezone.utc).isoformat()
        summary: dict[str, Any] = {
            "generated_at": now,
            "total": sum(self.counts.values()),
            "counts": dict(self.counts),
        }
        if self.failed:
            summary["failed"] = list(self.failed)
        if self.skipped:
            summary["skipped"] = [dict(s) for s in self.skipped]
        return {"summary": summary}

    def write_yaml(self, path: Path) -> None:
        """Write the summary to a YAML file.

        Args:
            path: Output file path; parent directories are created.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(
                self.generate_summary(),
                f,
                default_flow_style=False,
                sort_keys=False,
            )
