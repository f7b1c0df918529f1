"""IRC subsystem package.

Contains the line parser (cursor, message parser, bot command tokenizer),
the dispatcher and the async client for Twitch IRC.
"""

from .async_irc import AsyncTwitchIRC  # noqa: F401
from .cursor import Cursor  # noqa: F401
from .dispatcher import Handler, IRCDispatcher  # noqa: F401
from .models import (  # noqa: F401
    BotCommand,
    Command,
    ConnectionState,
    ParsedMessage,
    Permissions,
    Source,
)
from .parser import parse_bot_command, parse_message, permissions_from_tags  # noqa: F401

__all__ = [
    "AsyncTwitchIRC",
    "BotCommand",
    "Command",
    "ConnectionState",
    "Cursor",
    "Handler",
    "IRCDispatcher",
    "ParsedMessage",
    "Permissions",
    "Source",
    "parse_bot_command",
    "parse_message",
    "permissions_from_tags",
]
