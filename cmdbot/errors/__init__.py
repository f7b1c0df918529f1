"""Error hierarchy and error handling helpers."""

from .handling import is_retryable_error, log_error, retry_network_operation  # noqa: F401
from .internal import (  # noqa: F401
    ConfigError,
    InternalError,
    MalformedSourceError,
    MalformedTagsError,
    MissingCommandError,
    NetworkError,
    ParsingError,
    TokenizationError,
)

__all__ = [
    "ConfigError",
    "InternalError",
    "MalformedSourceError",
    "MalformedTagsError",
    "MissingCommandError",
    "NetworkError",
    "ParsingError",
    "TokenizationError",
    "is_retryable_error",
    "log_error",
    "retry_network_operation",
]
