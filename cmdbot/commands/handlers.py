"""Dispatcher handlers: PING keep-alive and PRIVMSG bot commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..irc.dispatcher import Handler
from ..irc.models import ParsedMessage
from ..logs.logger import logger
from .builtin import BUILTIN_COMMANDS
from .registry import CommandContext

if TYPE_CHECKING:  # pragma: no cover
    from ..config.store import DynamicCommandStore
    from ..irc.async_irc import AsyncTwitchIRC


def match_ping(msg: ParsedMessage) -> bool:
    return msg.command.command == "PING"


async def handle_ping(client: AsyncTwitchIRC, msg: ParsedMessage) -> None:
    await client.send_line(f"PONG :{msg.parameters or ''}")


def match_privmsg(msg: ParsedMessage) -> bool:
    return msg.command.command == "PRIVMSG"


async def handle_privmsg(
    ctx: CommandContext, client: AsyncTwitchIRC, msg: ParsedMessage
) -> None:
    """Run the built-in or dynamic command named by ``msg.bot_command``."""
    if msg.source is None or msg.bot_command is None or msg.channel is None:
        return
    name = msg.bot_command.name

    entry = ctx.find(name)
    if entry is not None:
        if entry.privileged and not msg.permissions.is_privileged:
            logger.log_event(
                "command",
                "denied",
                level=logging.DEBUG,
                user=msg.nick,
                channel=msg.channel,
                name=name,
            )
            return
        logger.log_event(
            "command", "invoke", level=logging.DEBUG, user=msg.nick, channel=msg.channel, name=entry.name
        )
        await entry.handler(ctx, client, msg)
        return

    reply = ctx.store.get(name)
    if reply is not None:
        logger.log_event(
            "command", "dynamic_reply", level=logging.DEBUG, user=msg.nick, channel=msg.channel, name=name
        )
        await client.privmsg(msg.channel, reply)


def build_context(store: DynamicCommandStore) -> CommandContext:
    return CommandContext(store=store, commands=list(BUILTIN_COMMANDS))


def build_handlers(ctx: CommandContext) -> list[Handler]:
    async def _privmsg(client: AsyncTwitchIRC, msg: ParsedMessage) -> None:
        await handle_privmsg(ctx, client, msg)

    return [
        Handler(match=match_ping, handle=handle_ping, name="ping"),
        Handler(match=match_privmsg, handle=_privmsg, name="privmsg"),
    ]
