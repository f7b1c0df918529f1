"""Chat command table and the dispatcher handlers that drive it."""

from .builtin import BUILTIN_COMMANDS  # noqa: F401
from .handlers import (  # noqa: F401
    build_context,
    build_handlers,
    handle_ping,
    handle_privmsg,
    match_ping,
    match_privmsg,
)
from .registry import BotCommandEntry, CommandContext  # noqa: F401

__all__ = [
    "BUILTIN_COMMANDS",
    "BotCommandEntry",
    "CommandContext",
    "build_context",
    "build_handlers",
    "handle_ping",
    "handle_privmsg",
    "match_ping",
    "match_privmsg",
]
