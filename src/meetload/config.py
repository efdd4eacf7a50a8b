"""Configuration management for meetload."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.durations import WorkWindow

logger = logging.getLogger(__name__)

MEETLOAD_HOME = Path(os.environ.get("MEETLOAD_HOME", Path.home() / "meetload"))
CONFIG_FILE = MEETLOAD_HOME / "config" / "meetload.conf"


@dataclass
class Config:
    """meetload configuration."""

    user_email: str = ""
    timezone: str = "Europe/Stockholm"
    work_hours: str = "08:00-17:00"
    ics_path: str = ""

    def work_window(self) -> WorkWindow:
        """Validated working-hours window; raises ValueError on bad values."""
        return WorkWindow.parse(self.work_hours, self.timezone)


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    # Handle quoted values with inline comments: "value" # comment
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            if end_quote != -1:
                return value[1:end_quote]
            return value[1:]

    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config() -> Config:
    """Load configuration from meetload.conf file."""
    config = Config()

    if not CONFIG_FILE.exists():
        return config

    for line in CONFIG_FILE.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "user_email":
                config.user_email = value
            case "timezone":
                config.timezone = value
            case "work_hours":
                config.work_hours = value
            case "ics_path":
                config.ics_path = value
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config
