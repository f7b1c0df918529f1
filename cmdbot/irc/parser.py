"""IRC message parsing utilities.

Grammar handled here (Twitch flavour, with IRCv3 tags)::

    message    := [tags] [source] command [SP channel] [SP ":" parameters]
    tags       := "@" entry *(";" entry) SP        ; entry := key "=" value
    source     := ":" (nick "!" host | host) SP
    botcmd     := "!" name [SP args]
    args       := (quoted | bare)*

The segments are positional, so each one is tried in order and a missing
optional segment simply leaves the cursor where it was.
"""

from __future__ import annotations

from ..constants import COMMAND_PREFIX
from ..errors.internal import (
    MalformedSourceError,
    MalformedTagsError,
    MissingCommandError,
    TokenizationError,
)
from .cursor import Cursor
from .models import BotCommand, Command, ParsedMessage, Permissions, Source


def parse_message(line: str) -> ParsedMessage:
    """Parse one protocol line (without its line terminator).

    Raises:
        MalformedTagsError: a tag entry has no '=', or no space ends the tags.
        MalformedSourceError: a ':sender' prefix is not followed by a space.
        MissingCommandError: no command token is left.
    """
    cursor = Cursor(line)

    tags = _parse_tags(cursor, line)
    permissions = permissions_from_tags(tags)
    source = _parse_source(cursor, line)
    command = _parse_command(cursor, line)

    parameters: str | None = None
    if cursor.match_byte(":") is not None:
        parameters = cursor.rest()

    bot_command = parse_bot_command(parameters) if parameters is not None else None

    return ParsedMessage(
        raw=line,
        tags=tags,
        permissions=permissions,
        source=source,
        command=command,
        parameters=parameters,
        bot_command=bot_command,
    )


def _parse_tags(cursor: Cursor, line: str) -> dict[str, str] | None:
    if cursor.match_byte("@") is None:
        return None
    tags: dict[str, str] = {}
    for entry in cursor.split_by(";", " "):
        key, sep, value = entry.partition("=")
        if not sep:
            raise MalformedTagsError(f"tag entry without '=': {entry!r}", line=line)
        tags[key] = value
    # split_by leaves the cursor inside the tag block when no space ends it.
    if cursor.text[cursor.pos - 1] != " ":
        raise MalformedTagsError("tag block not terminated by a space", line=line)
    return tags



def permissions_from_tags(tags: dict[str, str] | None) -> Permissions:
    """Classify the sender from the ``badges`` tag.

    ``broadcaster`` wins over ``moderator`` when both badges are present.
    """
    if not tags:
        return Permissions.NONE
    badges = tags.get("badges")
    if badges is None:
        return Permissions.NONE
    if "broadcaster" in badges:
        return Permissions.BROADCASTER
    if "moderator" in badges:
        return Permissions.MODERATOR
    return Permissions.NONE


def _parse_source(cursor: Cursor, line: str) -> Source | None:
    if cursor.match_byte(":") is None:
        return None
    sender = cursor.take_until(" ")
    if sender is None:
        raise MalformedSourceError("source prefix without a following command", line=line)
    nick, sep, host = sender.partition("!")
    if not sep:
        return Source(host=sender)
    return Source(host=host, nick=nick)


def _parse_command(cursor: Cursor, line: str) -> Command:
    command = cursor.take_until(" ")
    if command is None:
        command = cursor.rest()
    if not command:
        raise MissingCommandError("no command token", line=line)

    channel: str | None = None
    if cursor.peek_byte(":") is None:
        channel = cursor.take_until(" ")
        if channel is None:
            channel = cursor.rest()
    return Command(command=command, channel=channel)


def parse_bot_command(text: str) -> BotCommand | None:
    """Tokenize ``!name arg "quoted arg" ...``.

    Returns None when ``text`` is not a bot command invocation. Arguments are
    tried as a quoted token, then a space-delimited token, then the rest of
    the line, in that order. Two consecutive spaces produce an empty
    argument.

    Raises:
        TokenizationError: an alternative returned a token without consuming
            input.
    """
    cursor = Cursor(text)
    if cursor.match_byte(COMMAND_PREFIX) is None:
        return None

    name = cursor.take_until(" ")
    if name is None:
        name = cursor.rest()
    if name is None:
        return None

    args: list[str] = []
    while (arg := _next_argument(cursor)) is not None:
        args.append(arg)
    return BotCommand(name=name, args=args)


def _next_argument(cursor: Cursor) -> str | None:
    start = cursor.pos
    arg = cursor.take_delimited('"')
    if arg is None:
        arg = cursor.take_until(" ")
    if arg is None:
        arg = cursor.rest()
    if arg is not None and cursor.pos == start:
        raise TokenizationError(
            f"argument scan stalled at offset {start}", line=cursor.text
        )
    return arg
