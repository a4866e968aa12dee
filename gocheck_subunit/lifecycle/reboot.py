"""Reboot marker introspection.

Tests that reboot the machine leave two markers behind: a file that is
present while a reboot is pending, and an environment variable set by the
test harness once the machine is back up.  While either marker is active
the reporter suppresses ordinary events, except for skips carrying one of
the reboot skip reasons below.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Protocol

# Skip reasons emitted by tests around a reboot
SKIP_DURING_REBOOT = "waiting for reboot"
SKIP_AFTER_REBOOT = "test run after reboot"
REBOOT_SKIP_REASONS = frozenset({SKIP_DURING_REBOOT, SKIP_AFTER_REBOOT})

DEFAULT_REBOOT_MARK_ENV = "ADT_REBOOT_MARK"
DEFAULT_NEEDS_REBOOT_FILE = "/tmp/needs-reboot"


class RebootStatus(Protocol):
    """Answers whether the test run is affected by a reboot."""

    def is_rebooting(self) -> bool:
        ...

    def is_after_reboot(self) -> bool:
        ...


class RebootMarkers:
    """Reads the reboot markers from the filesystem and environment.

    Both queries are evaluated fresh on every call; nothing is cached,
    so a marker created or removed mid-run takes effect on the next line.
    """

    def __init__(
        self,
        needs_reboot_file: str | Path = DEFAULT_NEEDS_REBOOT_FILE,
        reboot_mark_env: str = DEFAULT_REBOOT_MARK_ENV,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.needs_reboot_file = Path(needs_reboot_file)
        self.reboot_mark_env = reboot_mark_env
        self._environ = environ

    def is_rebooting(self) -> bool:
        """True while the needs-reboot marker file exists."""
        return self.needs_reboot_file.exists()

    def is_after_reboot(self) -> bool:
        """True while the reboot mark environment variable is non-empty."""
        environ = self._environ if self._environ is not None else os.environ
        return bool(environ.get(self.reboot_mark_env, ""))


@dataclass
class StaticRebootStatus:
    """Fixed reboot answers, for callers that know the state up front."""

    rebooting: bool = False
    after_reboot: bool = False

    def is_rebooting(self) -> bool:
        return self.rebooting

    def is_after_reboot(self) -> bool:
        return self.after_reboot
