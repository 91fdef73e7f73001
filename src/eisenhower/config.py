"""Configuration management for Eisenhower."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

EISENHOWER_HOME = Path(os.environ.get("EISENHOWER_HOME", Path.home() / "eisenhower"))
CONFIG_FILE = EISENHOWER_HOME / "config" / "eisenhower.conf"
DATA_DIR = EISENHOWER_HOME / "data"


@dataclass
class Config:
    """Eisenhower configuration."""

    data_dir: str = ""
    scope: str = "guest"
    default_board_name: str = "My Matrix"
    reminder_interval: int = 30  # seconds between reminder scans
    reminder_window: int = 60  # trailing window of the first scan
    timezone: str = ""
    # Telegram reminder delivery
    telegram_bot_token: str = ""
    telegram_chat_ids: list[int] = field(default_factory=list)

    @property
    def data_path(self) -> Path:
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from unquoted values."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _parse_seconds(key: str, value: str, default: int) -> int:
    try:
        seconds = int(value)
    except ValueError:
        logger.warning(f"Invalid {key.upper()} value: {value!r}, using {default}")
        return default
    if seconds <= 0:
        logger.warning(f"{key.upper()} must be positive, using {default}")
        return default
    return seconds


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from eisenhower.conf file."""
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
        value = _unquote(value.strip())

        match key:
            case "data_dir":
                config.data_dir = value
            case "scope":
                config.scope = value or config.scope
            case "default_board_name":
                config.default_board_name = value or config.default_board_name
            case "reminder_interval":
                config.reminder_interval = _parse_seconds(key, value, config.reminder_interval)
            case "reminder_window":
                config.reminder_window = _parse_seconds(key, value, config.reminder_window)
            case "timezone":
                config.timezone = value
            case "telegram_bot_token":
                config.telegram_bot_token = value
            case "telegram_chat_ids":
                try:
                    config.telegram_chat_ids = [int(c.strip()) for c in value.split(",") if c.strip()]
                except ValueError:
                    logger.warning(f"Invalid TELEGRAM_CHAT_IDS value: {value!r}")

    return config
