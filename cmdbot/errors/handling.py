from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..logging_config import log_structured_error
from .internal import (
    ConfigError,
    InternalError,
    NetworkError,
    ParsingError,
)

T = TypeVar("T")

RETRYABLE_ERRORS = (NetworkError, OSError, ConnectionError, TimeoutError)


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    The error is categorized from its type so the error aggregator can count
    parse failures separately from network or configuration problems.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    error_type = "unknown"
    if isinstance(error, NetworkError | OSError | ConnectionError):
        error_type = "network"
    elif isinstance(error, ParsingError):
        error_type = "parsing"
    elif isinstance(error, ConfigError):
        error_type = "config"
    elif isinstance(error, InternalError):
        error_type = "internal"

    log_structured_error(
        error_type=error_type,
        message=f"{message}: {str(error)}",
        exception=error,
        context=context,
    )


def is_retryable_error(error: Exception) -> bool:
    """Check if an exception should trigger a retry."""
    return isinstance(error, RETRYABLE_ERRORS)


async def retry_network_operation(
    operation: Callable[[], Awaitable[T]],
    context: str,
    max_attempts: int = 3,
    max_backoff: float = 30,
) -> T:
    """Run a network operation with Tenacity-based exponential backoff.

    Only transient network failures are retried; anything else propagates
    unchanged on the first attempt.

    Args:
        operation: Async callable performing one attempt.
        context: Descriptive context for the operation.
        max_attempts: Maximum number of attempts.
        max_backoff: Upper bound in seconds for the wait between attempts.

    Returns:
        The result of the first successful attempt.

    Raises:
        NetworkError: If every attempt failed with a retryable error.
    """
    attempt_count = 0

    def before_retry(retry_state):
        nonlocal attempt_count
        attempt_count = retry_state.attempt_number
        if attempt_count > 1:
            logging.info(f"Retrying {context} (retry {attempt_count})")

    def after_retry(retry_state):
        if retry_state.outcome.failed:
            log_error(
                f"Retry failed for {context} (attempt {attempt_count})",
                retry_state.outcome.exception(),
                context={"retry_attempt": attempt_count, "operation": context},
            )

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, max=max_backoff),
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        before=before_retry,
        after=after_retry,
    )

    try:
        return await retrying(operation)
    except RetryError as e:
        last = e.last_attempt.exception()
        raise NetworkError(
            f"{context} failed after {max_attempts} attempts: {last}",
            data={"operation": context, "attempts": max_attempts},
        ) from last
