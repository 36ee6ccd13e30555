"""Configuration management for ganttline."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.calendar import Period
from .core.drag import CommitMode

logger = logging.getLogger(__name__)

GANTTLINE_HOME = Path(os.environ.get("GANTTLINE_HOME", Path.home() / ".ganttline"))
CONFIG_FILE = GANTTLINE_HOME / "ganttline.conf"
STATE_FILE = GANTTLINE_HOME / "state.json"


@dataclass
class Config:
    """ganttline configuration."""

    document_title: str = "Gantt Chart"
    default_period: Period = Period.SPRINT
    # Timeline width in pixels used to turn pointer positions into days
    viewport_width: float = 1200.0
    handle_width: float = 1.0
    cell_width: int = 3
    drag_commit: CommitMode = CommitMode.LIVE
    state_file: str = ""
    export_dir: str = ""

    @property
    def state_path(self) -> Path:
        if self.state_file:
            return Path(self.state_file).expanduser()
        return STATE_FILE

    @property
    def export_path(self) -> Path:
        if self.export_dir:
            return Path(self.export_dir).expanduser()
        return Path.cwd()


def _parse_number(key: str, value: str, default, cast):
    try:
        parsed = cast(value)
    except ValueError:
        logger.warning(f"Invalid {key.upper()} value {value!r}, using {default}")
        return default
    if parsed <= 0:
        logger.warning(f"{key.upper()} must be positive, using {default}")
        return default
    return parsed


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from ganttline.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()

        # Handle quoted values with inline comments: "value" # comment
        if value.startswith('"') or value.startswith("'"):
            quote = value[0]
            end_quote = value.find(quote, 1)
            value = value[1:end_quote] if end_quote != -1 else value[1:]
        elif "#" in value:
            value = value.split("#")[0].strip()

        match key:
            case "document_title":
                config.document_title = value or config.document_title
            case "default_period":
                try:
                    config.default_period = Period(value.lower())
                except ValueError:
                    logger.warning(f"Unknown DEFAULT_PERIOD {value!r}, using sprint")
            case "viewport_width":
                config.viewport_width = _parse_number(key, value, config.viewport_width, float)
            case "handle_width":
                config.handle_width = _parse_number(key, value, config.handle_width, float)
            case "cell_width":
                config.cell_width = _parse_number(key, value, config.cell_width, int)
            case "drag_commit":
                try:
                    config.drag_commit = CommitMode(value.lower())
                except ValueError:
                    logger.warning(f"Unknown DRAG_COMMIT {value!r}, using live")
            case "state_file":
                config.state_file = value
            case "export_dir":
                config.export_dir = value

    return config
