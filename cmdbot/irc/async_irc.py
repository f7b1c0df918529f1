"""Async Twitch IRC client."""

from __future__ import annotations

import asyncio
import codecs
import logging
import time

from ..constants import (
    CONNECT_MAX_ATTEMPTS,
    CONNECT_MAX_BACKOFF_SECONDS,
    IRC_CONNECT_TIMEOUT,
    IRC_PORT,
    IRC_READ_SIZE,
    IRC_SERVER,
)
from ..errors.handling import retry_network_operation
from ..errors.internal import NetworkError
from ..logs.logger import logger
from .dispatcher import Handler, IRCDispatcher
from .models import ConnectionState


class AsyncTwitchIRC:
    def __init__(self, server: str = IRC_SERVER, port: int = IRC_PORT):
        self.server = server
        self.port = port
        self.nick: str | None = None
        self.channel: str | None = None
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self.state = ConnectionState.DISCONNECTED
        self.running = False
        self.last_server_activity = 0.0
        self.message_buffer = ""
        # Reads may split a multi-byte character across chunks.
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self.dispatcher = IRCDispatcher(self)

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                user=self.nick,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    def register_handler(self, handler: Handler) -> None:
        self.dispatcher.register(handler)

    async def connect(self) -> None:
        """Open the TCP connection, retrying transient failures.

        Raises:
            NetworkError: when every attempt failed.
        """
        self._set_state(ConnectionState.CONNECTING)
        logger.log_event("irc", "connect_start", server=self.server, port=self.port)

        async def _open() -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
            return await asyncio.wait_for(
                asyncio.open_connection(self.server, self.port),
                timeout=IRC_CONNECT_TIMEOUT,
            )

        try:
            self.reader, self.writer = await retry_network_operation(
                _open,
                f"connect to {self.server}:{self.port}",
                max_attempts=CONNECT_MAX_ATTEMPTS,
                max_backoff=CONNECT_MAX_BACKOFF_SECONDS,
            )
        except NetworkError:
            self._set_state(ConnectionState.DISCONNECTED)
            raise
        self.last_server_activity = time.time()
        logger.log_event("irc", "connection_established", server=self.server)

    async def request_tags(self) -> None:
        await self.send_line("CAP REQ :twitch.tv/tags")

    async def authenticate(self, nick: str, password: str) -> None:
        self._set_state(ConnectionState.AUTHENTICATING)
        self.nick = nick.lower()
        await self.send_line(f"PASS {password}", secret=True)
        await self.send_line(f"NICK {self.nick}")

    async def join(self, channel: str) -> None:
        self._set_state(ConnectionState.JOINING)
        await self.send_line(f"JOIN {channel}")
        self.channel = channel
        self._set_state(ConnectionState.READY)
        logger.log_event("irc", "join_sent", user=self.nick, channel=channel)

    async def send_line(self, message: str, *, secret: bool = False) -> None:
        if self.writer is None:
            raise NetworkError("Cannot send: not connected")
        self.writer.write(f"{message}\r\n".encode())
        await self.writer.drain()
        shown = f"{message.split(' ', 1)[0]} <hidden>" if secret else message
        logger.log_event("irc", "sent", level=logging.DEBUG, user=self.nick, line=shown)

    async def privmsg(self, channel: str, text: str) -> None:
        await self.send_line(f"PRIVMSG {channel} :{text}")

    async def listen(self) -> None:
        """Read from the server and dispatch lines until the stream closes."""
        if self.reader is None:
            raise NetworkError("Cannot listen: not connected")
        self.running = True
        try:
            while self.running:
                data = await self.reader.read(IRC_READ_SIZE)
                if not data:
                    logger.log_event(
                        "irc", "connection_closed", level=logging.WARNING, user=self.nick
                    )
                    break
                self.message_buffer = await self.dispatcher.process_incoming_data(
                    self.message_buffer, self._decoder.decode(data)
                )
        finally:
            self.running = False

    async def disconnect(self) -> None:
        self.running = False
        if self.writer:
            try:
                self.writer.close()
                await self.writer.wait_closed()
            except OSError as e:
                logger.log_event(
                    "irc",
                    "disconnect_error",
                    level=logging.WARNING,
                    user=self.nick,
                    error=str(e),
                )
            finally:
                self.writer = None
                self.reader = None
        self.message_buffer = ""
        self._decoder.reset()
        self._set_state(ConnectionState.DISCONNECTED)
        logger.log_event("irc", "disconnected", level=logging.WARNING, user=self.nick)
