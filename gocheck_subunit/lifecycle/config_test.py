"""Unit tests for the config module."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any

import pytest

from gocheck_subunit.lifecycle.config import DEFAULT_CONFIG, ReporterConfig


def _config_file(tmpdir: str, content: Any) -> Path:
    path = Path(tmpdir) / "reporter.json"
    path.write_text(content if isinstance(content, str) else json.dumps(content))
    return path


class TestReporterConfigLoad:
    """Tests for reading ReporterConfig files."""

    def test_no_path_uses_defaults(self):
        """No path gives default config values."""
        cfg = ReporterConfig(None)
        assert cfg.reboot_mark_env == DEFAULT_CONFIG["reboot_mark_env"]
        assert cfg.needs_reboot_file == Path("/tmp/needs-reboot")
        assert cfg.chunk_size == 4096
        assert cfg.summary_file is None
        assert cfg.warnings == []

    def test_nonexistent_path_uses_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            cfg = ReporterConfig(Path(tmpdir) / "missing.json")
            assert cfg.reboot_mark_env == "ADT_REBOOT_MARK"
            assert cfg.warnings == []

    def test_load_from_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            cfg = ReporterConfig(_config_file(tmpdir, {
                "reboot_mark_env": "REBOOT_MARK",
                "needs_reboot_file": "/run/needs-reboot",
                "summary_file": "out/summary.yaml",
            }))
            assert cfg.reboot_mark_env == "REBOOT_MARK"
            assert cfg.needs_reboot_file == Path("/run/needs-reboot")
            assert cfg.summary_file == Path("out/summary.yaml")

    def test_partial_file_fills_defaults(self):
        """Missing keys in config file are filled from defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            cfg = ReporterConfig(_config_file(tmpdir, {"chunk_size": 1}))
            assert cfg.chunk_size == 1
            assert cfg.reboot_mark_env == "ADT_REBOOT_MARK"  # default

    def test_corrupted_file_uses_defaults(self):
        """Corrupted JSON falls back to defaults and says so."""
        with tempfile.TemporaryDirectory() as tmpdir:
            cfg = ReporterConfig(_config_file(tmpdir, "{ invalid json }"))
            assert cfg.chunk_size == DEFAULT_CONFIG["chunk_size"]
            assert len(cfg.warnings) == 1
            assert "ignoring" in cfg.warnings[0]

    def test_non_dict_file_uses_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            cfg = ReporterConfig(_config_file(tmpdir, [1, 2, 3]))
            assert cfg.reboot_mark_env == DEFAULT_CONFIG["reboot_mark_env"]
            assert cfg.warnings == [
                f"config: ignoring {Path(tmpdir) / 'reporter.json'}: not a JSON object"
            ]

    def test_unknown_key_warned_and_ignored(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            cfg = ReporterConfig(_config_file(tmpdir, {
                "chunk_size": 16,
                "max_reruns": 3,
            }))
            assert cfg.chunk_size == 16
            assert len(cfg.warnings) == 1
            assert "'max_reruns'" in cfg.warnings[0]

    @pytest.mark.parametrize("size", [0, -1])
    def test_invalid_chunk_size(self, size):
        with tempfile.TemporaryDirectory() as tmpdir:
            cfg = ReporterConfig(_config_file(tmpdir, {"chunk_size": size}))
            with pytest.raises(ValueError, match="chunk_size"):
                cfg.chunk_size


class TestRebootMarkers:
    """Tests for building the reboot marker reader from config."""

    def test_markers_follow_config(self, monkeypatch):
        with tempfile.TemporaryDirectory() as tmpdir:
            marker = Path(tmpdir) / "marker"
            cfg = ReporterConfig(_config_file(tmpdir, {
                "reboot_mark_env": "CUSTOM_MARK",
                "needs_reboot_file": str(marker),
            }))
            markers = cfg.reboot_markers()

            monkeypatch.setenv("CUSTOM_MARK", "1")
            assert markers.is_after_reboot() is True
            assert markers.is_rebooting() is False
            marker.write_text("")
            assert markers.is_rebooting() is True
