"""
Tests for error categorization and network retries
"""

import logging

import pytest

from cmdbot.errors.handling import is_retryable_error, log_error, retry_network_operation
from cmdbot.errors.internal import (
    ConfigError,
    MalformedTagsError,
    NetworkError,
)
from cmdbot.logging_config import error_aggregator


@pytest.fixture(autouse=True)
def _reset_aggregator():
    error_aggregator.reset()
    yield
    error_aggregator.reset()


def test_log_error_categorizes(caplog):
    caplog.set_level(logging.ERROR)
    log_error("Skipping line", MalformedTagsError("bad tag", line="@x"))
    log_error("Startup", ConfigError("missing nick"))
    log_error("Connect", OSError("refused"))

    summary = error_aggregator.get_error_summary()
    assert set(summary) == {"parsing", "config", "network"}
    assert any("[PARSING] Skipping line: bad tag" in r.getMessage() for r in caplog.records)


def test_parsing_error_exposes_line():
    err = MalformedTagsError("bad", line="@x;y")
    assert err.line == "@x;y"
    assert err.data == {"line": "@x;y"}


def test_is_retryable_error():
    assert is_retryable_error(NetworkError("x"))
    assert is_retryable_error(TimeoutError())
    assert not is_retryable_error(ValueError("x"))


@pytest.mark.asyncio
async def test_retry_succeeds_after_transient_failures():
    attempts = 0

    async def flaky():
        nonlocal attempts
        attempts += 1
        if attempts < 3:
            raise ConnectionRefusedError("not yet")
        return "ok"

    assert await retry_network_operation(flaky, "flaky op", max_attempts=5, max_backoff=0) == "ok"
    assert attempts == 3


@pytest.mark.asyncio
async def test_retry_exhausted_raises_network_error():
    async def always_fails():
        raise OSError("down")

    with pytest.raises(NetworkError, match="failed after 2 attempts"):
        await retry_network_operation(always_fails, "dead op", max_attempts=2, max_backoff=0)


@pytest.mark.asyncio
async def test_non_retryable_error_propagates_immediately():
    attempts = 0

    async def broken():
        nonlocal attempts
        attempts += 1
        raise ValueError("bug")

    with pytest.raises(ValueError):
        await retry_network_operation(broken, "broken op", max_attempts=5, max_backoff=0)
    assert attempts == 1
