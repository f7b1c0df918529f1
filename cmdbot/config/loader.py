"""Configuration loading utilities."""

from __future__ import annotations

import logging
import os

from pydantic import ValidationError

from ..constants import CONFIG_FILE
from ..errors.internal import ConfigError
from .key_value import read_key_value_file
from .model import BotConfig

REQUIRED_KEYS = ("nick", "pass", "channel")


def load_config(config_file: str | os.PathLike[str] | None = None) -> BotConfig:
    """Load and validate the bot configuration.

    Args:
        config_file: Path to the ``key:value`` config file. Defaults to
            ``CONFIG_FILE`` (``CMDBOT_CONF_FILE`` env var).

    Raises:
        ConfigError: file missing, a required key missing or a value invalid.
    """
    path = str(config_file or CONFIG_FILE)
    try:
        raw = read_key_value_file(path)
    except FileNotFoundError as e:
        raise ConfigError(
            f"No configuration file found at {path}. "
            "Copy config.ini_example to config.ini and fill it in.",
            data={"path": path},
        ) from e

    for key in REQUIRED_KEYS:
        if not raw.get(key, "").strip():
            raise ConfigError(f"Missing '{key}' in {path}", data={"path": path, "key": key})

    try:
        config = BotConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}", data={"path": path}) from e
    logging.info(f"✅ Configuration loaded nick={config.nick} channel={config.channel}")
    return config
