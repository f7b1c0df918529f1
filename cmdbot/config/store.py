"""User-defined chat commands persisted to a ``key:value`` file."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Iterator

from .key_value import read_key_value_file, write_key_value_file


class DynamicCommandStore:
    """Mapping of command name to reply text with an explicit load/save contract.

    Nothing is written until :meth:`save` (or :meth:`async_save`) is called.
    """

    def __init__(self, path: str | os.PathLike[str]):
        self.path = str(path)
        self._commands: dict[str, str] = {}
        self._lock = asyncio.Lock()

    @staticmethod
    def is_valid_name(name: str) -> bool:
        return DynamicCommandStore.is_valid_reply(name) and not any(c in name for c in ": ")

    @staticmethod
    def is_valid_reply(text: str) -> bool:
        # Every boundary str.splitlines() knows, not only \r and \n.
        return text.splitlines() == [text]

    def load(self) -> None:
        """Load commands from disk, creating an empty file when missing."""
        try:
            self._commands = read_key_value_file(self.path)
        except FileNotFoundError:
            logging.info(f"📄 Creating empty command file path={self.path}")
            write_key_value_file(self.path, {}, backup=False)
            self._commands = {}
        logging.info(f"📚 Loaded dynamic commands count={len(self._commands)}")

    def save(self) -> None:
        write_key_value_file(self.path, self._commands)
        logging.debug(f"💾 Saved dynamic commands count={len(self._commands)}")

    async def async_save(self) -> None:
        """Run :meth:`save` in the default executor, one write at a time."""
        loop = asyncio.get_running_loop()
        async with self._lock:
            await loop.run_in_executor(None, self.save)

    def put(self, name: str, reply: str) -> None:
        if not self.is_valid_name(name):
            raise ValueError(f"invalid command name: {name!r}")
        if not self.is_valid_reply(reply):
            raise ValueError("command reply must be a single non-empty line")
        self._commands[name] = reply

    def remove(self, name: str) -> bool:
        return self._commands.pop(name, None) is not None

    def get(self, name: str) -> str | None:
        return self._commands.get(name)

    def names(self) -> list[str]:
        return list(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)
