"""Reporter configuration file.

A JSON object whose keys locate the reboot markers and tune how the
command line reader consumes its input.  Missing keys take their
defaults; a file that cannot be used is reported through ``warnings``
and the defaults apply.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from gocheck_subunit.lifecycle.reboot import (
    DEFAULT_NEEDS_REBOOT_FILE,
    DEFAULT_REBOOT_MARK_ENV,
    RebootMarkers,
)

DEFAULT_CONFIG: dict[str, Any] = {
    "reboot_mark_env": DEFAULT_REBOOT_MARK_ENV,
    "needs_reboot_file": DEFAULT_NEEDS_REBOOT_FILE,
    "chunk_size": 4096,
    "summary_file": None,
}


class ReporterConfig:
    """Settings read from an optional JSON file over ``DEFAULT_CONFIG``."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self.warnings: list[str] = []
        self._settings: dict[str, Any] = dict(DEFAULT_CONFIG)
        if path is not None and path.exists():
            self._settings.update(self._read(path))

    def _read(self, path: Path) -> dict[str, Any]:
        try:
            loaded = json.loads(path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            self.warnings.append(f"config: ignoring {path}: {e}")
            return {}
        if not isinstance(loaded, dict):
            self.warnings.append(f"config: ignoring {path}: not a JSON object")
            return {}

        known = {}
        for key, value in loaded.items():
            if key in DEFAULT_CONFIG:
                known[key] = value
            else:
                self.warnings.append(f"config: unknown key {key!r} in {path}")
        return known

    @property
    def reboot_mark_env(self) -> str:
        """Environment variable that marks a post-reboot run."""
        return str(self._settings["reboot_mark_env"])

    @property
    def needs_reboot_file(self) -> Path:
        """Marker file that exists while a reboot is pending."""
        return Path(self._settings["needs_reboot_file"])

    @property
    def chunk_size(self) -> int:
        """Input read size in bytes."""
        size = int(self._settings["chunk_size"])
        if size <= 0:
            raise ValueError(f"chunk_size must be positive, got {size}")
        return size

    @property
    def summary_file(self) -> Path | None:
        val = self._settings["summary_file"]
        return Path(val) if val else None

    def reboot_markers(self) -> RebootMarkers:
        """Build the reboot marker reader for this configuration."""
        return RebootMarkers(
            needs_reboot_file=self.needs_reboot_file,
            reboot_mark_env=self.reboot_mark_env,
        )
