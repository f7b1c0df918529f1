"""
Tests for the async IRC client
"""

import asyncio
from unittest.mock import AsyncMock, Mock, patch

import pytest

from cmdbot.commands import build_context, build_handlers
from cmdbot.config.store import DynamicCommandStore
from cmdbot.errors.internal import NetworkError
from cmdbot.irc.async_irc import AsyncTwitchIRC
from cmdbot.irc.models import ConnectionState


def _make_writer() -> Mock:
    writer = Mock()
    writer.write = Mock()
    writer.drain = AsyncMock()
    writer.close = Mock()
    writer.wait_closed = AsyncMock()
    return writer


def _written(writer: Mock) -> list[str]:
    return [c.args[0].decode("utf-8") for c in writer.write.call_args_list]


class TestAsyncTwitchIRC:
    """Test AsyncTwitchIRC functionality"""

    def test_init(self):
        client = AsyncTwitchIRC()
        assert client.server == "irc.chat.twitch.tv"
        assert client.port == 6667
        assert client.nick is None
        assert client.reader is None
        assert client.writer is None
        assert client.state is ConnectionState.DISCONNECTED

    @pytest.mark.asyncio
    async def test_connect_and_handshake(self):
        reader = asyncio.StreamReader()
        writer = _make_writer()
        client = AsyncTwitchIRC()
        with patch(
            "asyncio.open_connection", AsyncMock(return_value=(reader, writer))
        ) as open_conn:
            await client.connect()
        open_conn.assert_awaited_once_with("irc.chat.twitch.tv", 6667)

        await client.request_tags()
        await client.authenticate("MyBot", "oauth:secret")
        await client.join("#room")

        assert _written(writer) == [
            "CAP REQ :twitch.tv/tags\r\n",
            "PASS oauth:secret\r\n",
            "NICK mybot\r\n",
            "JOIN #room\r\n",
        ]
        assert client.nick == "mybot"
        assert client.channel == "#room"
        assert client.state is ConnectionState.READY

    @pytest.mark.asyncio
    async def test_password_never_logged(self, caplog, monkeypatch):
        monkeypatch.setenv("DEBUG", "1")
        caplog.set_level("DEBUG", logger="cmdbot")
        client = AsyncTwitchIRC()
        client.writer = _make_writer()
        await client.authenticate("bot", "oauth:topsecret")
        assert not any("topsecret" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_connect_failure_raises_network_error(self, monkeypatch):
        monkeypatch.setattr("cmdbot.irc.async_irc.CONNECT_MAX_ATTEMPTS", 2)
        monkeypatch.setattr("cmdbot.irc.async_irc.CONNECT_MAX_BACKOFF_SECONDS", 0)
        client = AsyncTwitchIRC()
        failing = AsyncMock(side_effect=ConnectionRefusedError("refused"))
        with patch("asyncio.open_connection", failing):
            with pytest.raises(NetworkError):
                await client.connect()
        assert failing.await_count == 2
        assert client.state is ConnectionState.DISCONNECTED

    @pytest.mark.asyncio
    async def test_send_without_connection(self):
        client = AsyncTwitchIRC()
        with pytest.raises(NetworkError):
            await client.send_line("PING :x")

    @pytest.mark.asyncio
    async def test_listen_dispatches_until_eof(self, tmp_path):
        store = DynamicCommandStore(tmp_path / "cmds.ini")
        store.load()
        client = AsyncTwitchIRC()
        for handler in build_handlers(build_context(store)):
            client.register_handler(handler)
        client.reader = asyncio.StreamReader()
        client.writer = _make_writer()

        # A multi-byte character split across two reads, plus a broken line.
        payload = "PING :tmi.twitch.tv\r\n@bad;x=1 :a!a@h PRIVMSG #r :x\r\n:v!v@h PRIVMSG #r :!hi é\r\n".encode()
        split = payload.index("é".encode()) + 1
        client.reader.feed_data(payload[:split])
        client.reader.feed_data(payload[split:])
        client.reader.feed_eof()

        await client.listen()

        assert _written(client.writer) == [
            "PONG :tmi.twitch.tv\r\n",
            "PRIVMSG #r :Hi @v!\r\n",
        ]
        assert client.running is False

    @pytest.mark.asyncio
    async def test_disconnect_resets_state(self):
        client = AsyncTwitchIRC()
        writer = _make_writer()
        client.writer = writer
        client.reader = asyncio.StreamReader()
        client.message_buffer = "partial"
        await client.disconnect()
        writer.close.assert_called_once()
        assert client.writer is None
        assert client.reader is None
        assert client.message_buffer == ""
        assert client.state is ConnectionState.DISCONNECTED
