"""Run environment: reboot markers and reporter configuration."""

from gocheck_subunit.lifecycle.config import DEFAULT_CONFIG, ReporterConfig
from gocheck_subunit.lifecycle.reboot import (
    REBOOT_SKIP_REASONS,
    SKIP_AFTER_REBOOT,
    SKIP_DURING_REBOOT,
    RebootMarkers,
    RebootStatus,
    StaticRebootStatus,
)

__all__ = [
    "DEFAULT_CONFIG",
    "REBOOT_SKIP_REASONS",
    "RebootMarkers",
    "RebootStatus",
    "ReporterConfig",
    "SKIP_AFTER_REBOOT",
    "SKIP_DURING_REBOOT",
    "StaticRebootStatus",
]
