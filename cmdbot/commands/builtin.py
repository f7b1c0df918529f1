"""Built-in chat commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..logs.logger import logger
from .registry import BotCommandEntry, CommandContext

if TYPE_CHECKING:  # pragma: no cover
    from ..irc.async_irc import AsyncTwitchIRC
    from ..irc.models import ParsedMessage


async def cmd_hi(ctx: CommandContext, client: AsyncTwitchIRC, msg: ParsedMessage) -> None:
    await client.privmsg(msg.channel, f"Hi @{msg.nick}!")


async def cmd_cmds(ctx: CommandContext, client: AsyncTwitchIRC, msg: ParsedMessage) -> None:
    listing = ", ".join(ctx.available_commands())
    await client.privmsg(msg.channel, f"@{msg.nick} Available commands: {listing}")


async def cmd_add(ctx: CommandContext, client: AsyncTwitchIRC, msg: ParsedMessage) -> None:
    """``!add <name> <reply>``: store a reply command (moderators only)."""
    args = msg.bot_command.args
    if len(args) < 2:
        return
    name, reply = args[0], args[1]
    if ctx.is_builtin(name):
        logger.log_event(
            "command", "add_rejected", level=logging.WARNING, user=msg.nick,
            channel=msg.channel, name=name, reason="builtin",
        )
        return
    if not (ctx.store.is_valid_name(name) and ctx.store.is_valid_reply(reply)):
        logger.log_event(
            "command", "add_rejected", level=logging.WARNING, user=msg.nick,
            channel=msg.channel, name=name, reason="invalid",
        )
        return
    ctx.store.put(name, reply)
    await ctx.store.async_save()
    logger.log_event("command", "added", user=msg.nick, channel=msg.channel, name=name)
    await client.privmsg(msg.channel, f"@{msg.nick} Added command !{name}")


async def cmd_remove(ctx: CommandContext, client: AsyncTwitchIRC, msg: ParsedMessage) -> None:
    """``!remove <name>``: drop a stored command (moderators only)."""
    args = msg.bot_command.args
    if not args:
        return
    name = args[0]
    if not ctx.store.remove(name):
        return
    await ctx.store.async_save()
    logger.log_event("command", "removed", user=msg.nick, channel=msg.channel, name=name)
    await client.privmsg(msg.channel, f"@{msg.nick} Removed command !{name}")


BUILTIN_COMMANDS: tuple[BotCommandEntry, ...] = (
    BotCommandEntry(name="hi", handler=cmd_hi),
    BotCommandEntry(name="cmds", handler=cmd_cmds, aliases=("commands", "list")),
    BotCommandEntry(name="add", handler=cmd_add, privileged=True),
    BotCommandEntry(name="remove", handler=cmd_remove, privileged=True),
)
