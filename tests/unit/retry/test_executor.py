r"""Unit tests for the synchronous retry executor."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from arequest.core.context import CallContext
from arequest.core.resolver import RequestConfig
from arequest.request import Request
from arequest.result import Result
from arequest.retry.executor import RetryExecutor
from arequest.retry.policy import RetryIf, RetryOnTimeout, RetryPolicy
from tests.helpers import TEST_URL, FakeQuery, create_failure, create_timeout_failure


def make_call(query: FakeQuery, policy: RetryPolicy | None = None) -> CallContext:
    return CallContext(
        request=Request(), config=RequestConfig(retry_policy=policy), query=query, url=TEST_URL
    )


def test_execute_success() -> None:
    query = FakeQuery()
    call = make_call(query)
    result = RetryExecutor().execute(call)

    assert result.status_code == 200
    assert result.previous is None
    assert call.attempts == 1
    assert call.remaining == 0


def test_execute_no_policy_single_attempt() -> None:
    query = FakeQuery([create_failure(503)])
    result = RetryExecutor().execute(make_call(query))

    assert query.attempts == 1
    assert result.error.status_code == 503


@pytest.mark.parametrize("max_retries", [0, 1, 2, 5])
def test_execute_exhausts_budget(max_retries: int) -> None:
    query = FakeQuery([create_failure(503)])
    policy = RetryPolicy(max_retries=max_retries, conditions=[RetryIf(lambda error: True)])
    call = make_call(query, policy)
    result = RetryExecutor().execute(call)

    assert query.attempts == max_retries + 1
    assert call.attempts == max_retries + 1
    assert result.attempts == max_retries + 1


def test_execute_retries_timeouts_only() -> None:
    query = FakeQuery([create_timeout_failure(), create_failure(500)])
    policy = RetryPolicy(max_retries=5, conditions=[RetryOnTimeout()])
    result = RetryExecutor().execute(make_call(query, policy))

    assert query.attempts == 2
    assert result.status_code == 500
    assert result.previous.status_code == 0
    assert result.previous.error.cause is not None


def test_execute_chain_oldest_last() -> None:
    query = FakeQuery(
        [create_failure(500), create_failure(502), Result(status_code=201, content="created")]
    )
    policy = RetryPolicy(max_retries=5, conditions=[RetryIf(lambda error: True)])
    result = RetryExecutor().execute(make_call(query, policy))

    assert [item.status_code for item in result.history()] == [201, 502, 500]


def test_execute_uses_decider() -> None:
    decider = Mock(decide=Mock(side_effect=lambda call, result: setattr(call, "remaining", 0)))
    query = FakeQuery([create_failure(503)])
    RetryExecutor(decider).execute(make_call(query))

    assert query.attempts == 1
    decider.decide.assert_called_once()
