"""Tests for configuration loading."""

import logging
from pathlib import Path

import pytest

from ganttline.config import STATE_FILE, Config, load_config
from ganttline.core.calendar import Period
from ganttline.core.drag import CommitMode


@pytest.fixture
def write_config(tmp_path):
    def _write(text: str) -> Path:
        path = tmp_path / "ganttline.conf"
        path.write_text(text)
        return path
    return _write


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.conf")
        assert config == Config()

    def test_all_keys(self, write_config, tmp_path):
        path = write_config(
            f"""
# Timeline settings
DOCUMENT_TITLE = "Release plan"  # shown as the export heading
DEFAULT_PERIOD = Quarter
VIEWPORT_WIDTH = 1440
HANDLE_WIDTH = 6
CELL_WIDTH = 4
DRAG_COMMIT = release
STATE_FILE = {tmp_path}/state.json
EXPORT_DIR = '{tmp_path}/exports'
"""
        )
        config = load_config(path)
        assert config.document_title == "Release plan"
        assert config.default_period is Period.QUARTER
        assert config.viewport_width == 1440.0
        assert config.handle_width == 6.0
        assert config.cell_width == 4
        assert config.drag_commit is CommitMode.RELEASE
        assert config.state_path == tmp_path / "state.json"
        assert config.export_path == tmp_path / "exports"

    def test_unquoted_inline_comment(self, write_config):
        config = load_config(write_config("VIEWPORT_WIDTH = 800 # pixels\n"))
        assert config.viewport_width == 800.0

    def test_ignores_unknown_keys_and_junk(self, write_config):
        config = load_config(write_config("COLOR = blue\nnot a setting\n\n"))
        assert config == Config()

    @pytest.mark.parametrize(
        "line",
        ["VIEWPORT_WIDTH = wide", "VIEWPORT_WIDTH = -5", "DEFAULT_PERIOD = decade", "DRAG_COMMIT = sometimes"],
    )
    def test_bad_values_keep_defaults(self, write_config, caplog, line):
        with caplog.at_level(logging.WARNING, logger="ganttline.config"):
            config = load_config(write_config(line + "\n"))
        assert config == Config()
        assert caplog.records

    def test_default_paths(self):
        config = Config()
        assert config.state_path == STATE_FILE
        assert config.export_path == Path.cwd()
