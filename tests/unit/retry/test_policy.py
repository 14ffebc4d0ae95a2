from __future__ import annotations

from unittest.mock import Mock

import httpx
import pytest

from arequest.exceptions import TransportError
from arequest.retry.policy import (
    RetryIf,
    RetryOnConnectionError,
    RetryOnStatus,
    RetryOnTimeout,
    RetryPolicy,
)
from tests.helpers import TEST_URL


def make_error(status_code: int | None = None, cause: Exception | None = None) -> TransportError:
    return TransportError("GET", TEST_URL, "failed", status_code=status_code, cause=cause)


###################################
#     Tests for retry conditions  #
###################################


def test_retry_on_timeout() -> None:
    condition = RetryOnTimeout()

    assert condition.retry_if(make_error(cause=httpx.ReadTimeout("timed out")))
    assert condition.retry_if(make_error(cause=httpx.ConnectTimeout("timed out")))
    assert not condition.retry_if(make_error(cause=httpx.ConnectError("refused")))
    assert not condition.retry_if(make_error(status_code=504))


def test_retry_on_connection_error() -> None:
    condition = RetryOnConnectionError()

    assert condition.retry_if(make_error(cause=httpx.ConnectError("refused")))
    assert condition.retry_if(make_error(cause=httpx.RemoteProtocolError("closed")))
    assert not condition.retry_if(make_error(cause=httpx.ReadTimeout("timed out")))


@pytest.mark.parametrize("status_code", [429, 500, 502, 503, 504])
def test_retry_on_status_default_codes(status_code: int) -> None:
    assert RetryOnStatus().retry_if(make_error(status_code=status_code))


@pytest.mark.parametrize("status_code", [None, 400, 404, 501])
def test_retry_on_status_other_codes(status_code: int | None) -> None:
    assert not RetryOnStatus().retry_if(make_error(status_code=status_code))


def test_retry_on_status_custom_codes() -> None:
    condition = RetryOnStatus((404,))

    assert condition.retry_if(make_error(status_code=404))
    assert not condition.retry_if(make_error(status_code=503))


def test_retry_if_predicate() -> None:
    predicate = Mock(return_value=1)
    error = make_error(status_code=418)

    assert RetryIf(predicate).retry_if(error) is True
    predicate.assert_called_once_with(error)


################################
#     Tests for RetryPolicy    #
################################


def test_retry_policy_defaults() -> None:
    policy = RetryPolicy()

    assert policy.max_retries == 0
    assert policy.conditions == []


def test_retry_policy_negative_max_retries() -> None:
    with pytest.raises(ValueError, match=r"max_retries must be >= 0"):
        RetryPolicy(max_retries=-1)


def test_retry_policy_no_error_never_retries() -> None:
    condition = Mock(retry_if=Mock(return_value=True))
    policy = RetryPolicy(max_retries=3, conditions=[condition])

    assert not policy.should_retry(None)
    condition.retry_if.assert_not_called()


def test_retry_policy_without_conditions() -> None:
    assert not RetryPolicy(max_retries=3).should_retry(make_error(status_code=503))


def test_retry_policy_ors_every_condition() -> None:
    first = Mock(retry_if=Mock(return_value=True))
    second = Mock(retry_if=Mock(return_value=False))
    error = make_error(status_code=503)

    assert RetryPolicy(max_retries=1, conditions=[first, second]).should_retry(error)
    first.retry_if.assert_called_once_with(error)
    second.retry_if.assert_called_once_with(error)


def test_retry_policy_all_conditions_false() -> None:
    policy = RetryPolicy(max_retries=1, conditions=[RetryOnTimeout(), RetryOnStatus((500,))])
    assert not policy.should_retry(make_error(status_code=404))
