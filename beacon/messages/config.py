import os
from pathlib import Path
from typing import Final

import tomlkit
from loguru import logger
from pydantic import ValidationError
from tomlkit.exceptions import TOMLKitError

from beacon.messages.data_types import MessageSettings
from beacon.messages.errors import MessageConfigError
from beacon.messages.primitives import LogLevel

CONFIG_DIR_NAME: Final[str] = ".beacon"
CONFIG_FILE_NAME: Final[str] = "messages.toml"

# Points at a settings file to use instead of ~/.beacon/messages.toml
CONFIG_PATH_ENV_VAR: Final[str] = "BEACON_MESSAGES_CONFIG"
# Overrides log_level from the settings file
LOG_LEVEL_ENV_VAR: Final[str] = "BEACON_MESSAGES_LOG_LEVEL"


def get_config_path() -> Path:
    """Get the settings file path ($BEACON_MESSAGES_CONFIG, or ~/.beacon/messages.toml)."""
    override = os.environ.get(CONFIG_PATH_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_settings(config_path: Path | None = None) -> MessageSettings:
    """Load message settings from a TOML file.

    Returns the defaults if the file does not exist.
    Raises MessageConfigError if the file exists but cannot be read, parsed, or validated.
    """
    path = config_path if config_path is not None else get_config_path()
    if not path.exists():
        logger.debug("No message settings at {}, using defaults", path)
        raw: dict = {}
    else:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MessageConfigError(f"Failed to read settings file {path}: {e}") from e
        try:
            raw = tomlkit.loads(text).unwrap()
        except TOMLKitError as e:
            raise MessageConfigError(f"Failed to parse settings file {path}: {e}") from e
        logger.debug("Loaded message settings from {}", path)

    log_level_override = os.environ.get(LOG_LEVEL_ENV_VAR)
    if log_level_override:
        raw["log_level"] = _parse_log_level(log_level_override)

    try:
        return MessageSettings.model_validate(raw)
    except ValidationError as e:
        raise MessageConfigError(f"Invalid settings in {path}: {e}") from e


def _parse_log_level(value: str) -> LogLevel:
    try:
        return LogLevel(value.strip().upper())
    except ValueError as e:
        choices = ", ".join(level.value for level in LogLevel)
        raise MessageConfigError(f"{LOG_LEVEL_ENV_VAR} must be one of {choices}, got {value!r}") from e
