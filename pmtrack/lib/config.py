"""
Configuration loader for pmtrack.

Settings come from an optional pmtrack.env file. Every key has a default,
so a missing default file is not an error. Bad values fall back to their
default with a warning.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import envparse

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "pmtrack.env"
DEFAULT_MAX_IDENTIFIER = 65535
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class TrackerConfig:
    """Settings from pmtrack.env"""
    currency_symbol: str = "$"
    max_identifier: int = DEFAULT_MAX_IDENTIFIER  # Upper bound for prompted ids
    pause_after_action: bool = False  # Wait for Enter after each menu action
    log_level: str = "WARNING"


def _parse_max_identifier(raw: Optional[str]) -> int:
    if raw is None:
        return DEFAULT_MAX_IDENTIFIER
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        logger.warning(f"Invalid MAX_IDENTIFIER '{raw}', using {DEFAULT_MAX_IDENTIFIER}")
        return DEFAULT_MAX_IDENTIFIER
    return value


def _parse_pause(raw: Optional[str]) -> bool:
    if raw is None:
        return False
    try:
        return envparse.parse_bool(raw)
    except ValueError:
        logger.warning(f"Invalid PAUSE_AFTER_ACTION '{raw}', using false")
        return False


def _parse_log_level(raw: Optional[str]) -> str:
    if raw is None:
        return "WARNING"
    level = raw.strip().upper()
    if level not in VALID_LOG_LEVELS:
        logger.warning(f"Unknown LOG_LEVEL '{raw}', using WARNING")
        return "WARNING"
    return level


def config_from_env(env: dict) -> TrackerConfig:
    """Build TrackerConfig from parsed env values."""
    return TrackerConfig(
        currency_symbol=env.get("CURRENCY_SYMBOL", "$"),
        max_identifier=_parse_max_identifier(env.get("MAX_IDENTIFIER")),
        pause_after_action=_parse_pause(env.get("PAUSE_AFTER_ACTION")),
        log_level=_parse_log_level(env.get("LOG_LEVEL")),
    )


def load_config(config_path: Optional[Path] = None) -> TrackerConfig:
    """Load config from config_path, or from ./pmtrack.env if present.

    Raises:
        FileNotFoundError: an explicit config_path does not exist
        ValueError: the file is malformed
    """
    if config_path is None:
        default_path = Path.cwd() / DEFAULT_CONFIG_NAME
        if not default_path.exists():
            return TrackerConfig()
        config_path = default_path

    env = envparse.load_env(config_path)
    logger.debug(f"Loaded config from {config_path}")
    return config_from_env(env)
