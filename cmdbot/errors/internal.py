"""Centralized internal error hierarchy.

These exceptions provide semantic categories for the read/dispatch loop and
higher-level error handling. Parsing failures are reported as typed
exceptions so callers can tell "this line is broken" apart from "this line
simply has no optional segment".

Classes:
  InternalError              – Base for all internal errors.
  NetworkError               – Transient network/IO issues (safe to retry).
  ConfigError                – Missing or invalid configuration.
  ParsingError               – Base for protocol line parsing failures.
  MalformedTagsError         – A tag entry without '='.
  MalformedSourceError       – A ':sender' prefix with no following token.
  MissingCommandError        – No command token at all.
  TokenizationError          – Internal inconsistency in the bot command tokenizer.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors.

    This includes connection timeouts, resets, or a server closing the
    stream, all of which may be retried by the caller.
    """


class ConfigError(InternalError):
    """Exception raised when the bot configuration is missing or invalid."""


class ParsingError(InternalError):
    """Base class for failures while parsing a single protocol line.

    The offending line is kept in ``data["line"]`` so the dispatch loop can
    log it and move on to the next line.
    """

    def __init__(self, message: str, *, line: str | None = None) -> None:
        super().__init__(message, data={"line": line} if line is not None else None)

    @property
    def line(self) -> str | None:
        line = self.data.get("line")
        return line if isinstance(line, str) else None


class MalformedTagsError(ParsingError):
    """A '@...' tag block contains an entry without '='."""


class MalformedSourceError(ParsingError):
    """A ':sender' prefix is present but nothing follows it."""


class MissingCommandError(ParsingError):
    """No command token could be extracted from the line."""


class TokenizationError(ParsingError):
    """The bot command tokenizer stopped making progress over its input."""


__all__ = [
    "InternalError",
    "NetworkError",
    "ConfigError",
    "ParsingError",
    "MalformedTagsError",
    "MalformedSourceError",
    "MissingCommandError",
    "TokenizationError",
]
