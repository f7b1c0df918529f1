"""Line framing and handler dispatch."""

from __future__ import annotations

import inspect
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..errors.internal import ParsingError
from ..logging_config import error_aggregator
from ..logs.logger import logger
from .models import ParsedMessage
from .parser import parse_message

if TYPE_CHECKING:  # pragma: no cover
    from .async_irc import AsyncTwitchIRC

LINE_TERMINATOR = "\r\n"


@dataclass(slots=True)
class Handler:
    match: Callable[[ParsedMessage], bool]
    handle: Callable[[AsyncTwitchIRC, ParsedMessage], Awaitable[Any] | Any]
    name: str = ""

    def label(self) -> str:
        return self.name or getattr(self.handle, "__name__", "handler")


class IRCDispatcher:
    def __init__(self, client: AsyncTwitchIRC):
        self.client = client
        self.handlers: list[Handler] = []

    def register(self, handler: Handler) -> None:
        self.handlers.append(handler)

    async def process_incoming_data(self, buffer: str, new_data: str) -> str:
        """Handle every complete line in ``buffer + new_data``.

        Returns the trailing partial line, to be passed back in with the
        next chunk.
        """
        buffer += new_data
        self.client.last_server_activity = time.time()
        while LINE_TERMINATOR in buffer:
            line, buffer = buffer.split(LINE_TERMINATOR, 1)
            if line:
                await self.handle_line(line)
        return buffer

    async def handle_line(self, line: str) -> ParsedMessage | None:
        logger.log_event(
            "irc", "raw", level=logging.DEBUG, user=self.client.nick, raw=line
        )

        try:
            msg = parse_message(line)
        except ParsingError as e:
            logger.log_event(
                "irc",
                "parse_failed",
                level=logging.WARNING,
                user=self.client.nick,
                error_type=type(e).__name__,
                raw=line,
            )
            error_aggregator.record_error(
                "parsing", f"Skipping unparseable line: {str(e)}", {"line": line}
            )
            return None

        if msg.command.command == "PRIVMSG" and msg.parameters is not None:
            self._log_chat_message(msg)

        for handler in self.handlers:
            if not handler.match(msg):
                continue
            await self._run_handler(handler, msg)
        return msg

    def _log_chat_message(self, msg: ParsedMessage) -> None:
        author = msg.nick or "?"
        is_bot_message = bool(self.client.nick) and author.lower() == self.client.nick
        logger.log_event(
            "irc",
            "privmsg",
            level=logging.INFO if is_bot_message else logging.DEBUG,
            user=self.client.nick,
            channel=msg.channel,
            human=f"{author}: {msg.parameters}",
            author=author,
            self_message=is_bot_message,
        )

    async def _run_handler(self, handler: Handler, msg: ParsedMessage) -> None:
        try:
            result = handler.handle(self.client, msg)
            if inspect.isawaitable(result):
                await result
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "irc",
                "handler_error",
                level=logging.ERROR,
                user=self.client.nick,
                handler=handler.label(),
                error=str(e),
                error_type=type(e).__name__,
            )
