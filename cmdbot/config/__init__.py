"""Configuration package: bot settings and the dynamic command store."""

from .key_value import (  # noqa: F401
    parse_key_value_text,
    read_key_value_file,
    write_key_value_file,
)
from .loader import load_config  # noqa: F401
from .model import BotConfig  # noqa: F401
from .store import DynamicCommandStore  # noqa: F401

__all__ = [
    "BotConfig",
    "DynamicCommandStore",
    "load_config",
    "parse_key_value_text",
    "read_key_value_file",
    "write_key_value_file",
]
