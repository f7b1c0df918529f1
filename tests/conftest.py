import pytest

from cmdbot.logging_config import error_aggregator


@pytest.fixture(autouse=True)
def _reset_error_aggregator():
    """Keep error counts from leaking between tests."""
    error_aggregator.reset()
    yield
    error_aggregator.reset()
