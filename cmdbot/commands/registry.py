"""Command table types and lookup."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..config.store import DynamicCommandStore
from ..constants import COMMAND_PREFIX

if TYPE_CHECKING:  # pragma: no cover
    from ..irc.async_irc import AsyncTwitchIRC
    from ..irc.models import ParsedMessage

CommandHandler = Callable[
    ["CommandContext", "AsyncTwitchIRC", "ParsedMessage"], Awaitable[None]
]


@dataclass(frozen=True, slots=True)
class BotCommandEntry:
    name: str
    handler: CommandHandler
    aliases: tuple[str, ...] = ()
    privileged: bool = False

    def matches(self, name: str) -> bool:
        return name == self.name or name in self.aliases


@dataclass(slots=True)
class CommandContext:
    """State shared by command handlers, passed explicitly into dispatch."""

    store: DynamicCommandStore
    commands: list[BotCommandEntry] = field(default_factory=list)

    def find(self, name: str) -> BotCommandEntry | None:
        for entry in self.commands:
            if entry.matches(name):
                return entry
        return None

    def is_builtin(self, name: str) -> bool:
        return self.find(name) is not None

    def available_commands(self) -> list[str]:
        """Sorted ``!name`` list of built-in and dynamic commands."""
        names: Iterable[str] = [entry.name for entry in self.commands] + self.store.names()
        return sorted(f"{COMMAND_PREFIX}{name}" for name in names)
