"""
Configuration constants for the Twitch command bot

This module contains all configurable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    """Retrieve a non-empty string from an environment variable, else the default."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


# IRC endpoint
IRC_SERVER = _get_env_str("IRC_SERVER", "irc.chat.twitch.tv")
IRC_PORT = _get_env_int("IRC_PORT", 6667)  # Plain-text Twitch IRC port

# Connection handling
IRC_CONNECT_TIMEOUT = _get_env_float(
    "IRC_CONNECT_TIMEOUT", 15.0
)  # Seconds allowed for a single TCP connect attempt
IRC_READ_SIZE = _get_env_int("IRC_READ_SIZE", 4096)  # Bytes per socket read
CONNECT_MAX_ATTEMPTS = _get_env_int(
    "CONNECT_MAX_ATTEMPTS", 5
)  # Connect attempts before giving up
CONNECT_MAX_BACKOFF_SECONDS = _get_env_int(
    "CONNECT_MAX_BACKOFF_SECONDS", 30
)  # Upper bound for the exponential wait between attempts

# Files
CONFIG_FILE = _get_env_str("CMDBOT_CONF_FILE", "config.ini")
DYNAMIC_CMDS_FILE = _get_env_str("CMDBOT_DYNAMIC_CMDS_FILE", "dynamic_cmds.ini")

# Bot command syntax
COMMAND_PREFIX = "!"
