from __future__ import annotations

from typing import TYPE_CHECKING, Any
from unittest.mock import Mock, patch

import pytest

from arequest.core.config import ClientConfig
from arequest.retry.policy import RetryIf, RetryPolicy
from arequest.utils.structured_logging import clear_correlation_id
from tests.helpers import TEST_URL, FakeCredentials, FakeQuery, create_failure

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep in the timed task module to make tests run
    faster."""
    with patch("arequest.tasks.timed.asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def fake_query() -> FakeQuery:
    """Create a query answering 200 to every attempt."""
    return FakeQuery()


@pytest.fixture
def failing_query() -> FakeQuery:
    """Create a query failing every attempt with a 503."""
    return FakeQuery([create_failure(503)])


@pytest.fixture
def always_retry() -> RetryPolicy:
    """Create a policy retrying on every error, up to 3 retries."""
    return RetryPolicy(max_retries=3, conditions=[RetryIf(lambda error: True)])


@pytest.fixture
def make_config() -> Callable[..., ClientConfig]:
    """Create a factory of client configs wired to a given query."""

    def factory(query: FakeQuery, **kwargs: Any) -> ClientConfig:
        return ClientConfig(authority=TEST_URL, credentials=FakeCredentials(query), **kwargs)

    return factory


@pytest.fixture(autouse=True)
def _clear_correlation_id() -> Generator[None, None, None]:
    yield
    clear_correlation_id()
