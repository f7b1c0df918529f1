"""Shared IRC data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    AUTHENTICATING = auto()
    JOINING = auto()
    READY = auto()


class Permissions(Enum):
    NONE = "none"
    MODERATOR = "moderator"
    BROADCASTER = "broadcaster"

    @property
    def is_privileged(self) -> bool:
        return self is not Permissions.NONE


@dataclass(slots=True)
class Source:
    """Sender prefix. ``nick`` is None for server-originated lines."""

    host: str
    nick: str | None = None


@dataclass(slots=True)
class Command:
    command: str
    channel: str | None = None


@dataclass(slots=True)
class BotCommand:
    """A ``!name arg ...`` invocation found in trailing parameters."""

    name: str
    args: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ParsedMessage:
    """One parsed protocol line.

    String fields are slices of ``raw``; ``bot_command`` refines
    ``parameters`` and ``permissions`` is derived from ``tags``.
    """

    raw: str
    command: Command
    tags: dict[str, str] | None = None
    permissions: Permissions = Permissions.NONE
    source: Source | None = None
    parameters: str | None = None
    bot_command: BotCommand | None = None

    @property
    def nick(self) -> str | None:
        return self.source.nick if self.source else None

    @property
    def channel(self) -> str | None:
        return self.command.channel
