r"""Retry policies and the error conditions they are made of.

A policy is retry-worthy for an attempt iff at least one of its
conditions returns ``True`` for the transport error captured by that
attempt. Conditions are never evaluated for successful attempts.
"""

from __future__ import annotations

__all__ = [
    "RetryCondition",
    "RetryIf",
    "RetryOnConnectionError",
    "RetryOnStatus",
    "RetryOnTimeout",
    "RetryPolicy",
]

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from arequest.core.config import RETRY_STATUS_CODES
from arequest.core.validation import validate_max_retries

if TYPE_CHECKING:
    from collections.abc import Callable

    from arequest.exceptions import TransportError


class RetryCondition(ABC):
    """Predicate over the transport error of an attempt."""

    @abstractmethod
    def retry_if(self, error: TransportError) -> bool:
        """Indicate if the error is worth another attempt.

        Args:
            error: The transport error captured by the attempt.

        Returns:
            ``True`` to retry, otherwise ``False``.
        """


class RetryOnTimeout(RetryCondition):
    """Retry when the attempt timed out."""

    def retry_if(self, error: TransportError) -> bool:
        return isinstance(error.cause, httpx.TimeoutException)


class RetryOnConnectionError(RetryCondition):
    """Retry when the connection could not be established or was
    closed."""

    def retry_if(self, error: TransportError) -> bool:
        return isinstance(error.cause, (httpx.ConnectError, httpx.RemoteProtocolError))


class RetryOnStatus(RetryCondition):
    """Retry on protocol errors with one of the given status codes.

    Args:
        status_codes: The retryable HTTP status codes.

    Example:
        ```pycon
        >>> from arequest.exceptions import TransportError
        >>> from arequest.retry.policy import RetryOnStatus
        >>> condition = RetryOnStatus((503,))
        >>> condition.retry_if(TransportError("GET", "https://x", "failed", status_code=503))
        True
        >>> condition.retry_if(TransportError("GET", "https://x", "failed", status_code=404))
        False

        ```
    """

    def __init__(self, status_codes: tuple[int, ...] = RETRY_STATUS_CODES) -> None:
        self.status_codes = status_codes

    def retry_if(self, error: TransportError) -> bool:
        return error.status_code is not None and error.status_code in self.status_codes


class RetryIf(RetryCondition):
    """Retry when a custom predicate returns ``True``.

    Args:
        predicate: The predicate applied to the transport error.
    """

    def __init__(self, predicate: Callable[[TransportError], bool]) -> None:
        self.predicate = predicate

    def retry_if(self, error: TransportError) -> bool:
        return bool(self.predicate(error))


@dataclass
class RetryPolicy:
    """Retry policy of a client or a request.

    Attributes:
        max_retries: Maximum number of additional attempts. Must be >= 0.
        conditions: Ordered conditions; any of them may request a retry.

    Example:
        ```pycon
        >>> from arequest.retry.policy import RetryOnTimeout, RetryPolicy
        >>> policy = RetryPolicy(max_retries=3, conditions=[RetryOnTimeout()])
        >>> policy.max_retries
        3

        ```
    """

    max_retries: int = 0
    conditions: list[RetryCondition] = field(default_factory=list)

    def __post_init__(self) -> None:
        validate_max_retries(self.max_retries)

    def should_retry(self, error: TransportError | None) -> bool:
        """Evaluate every condition against the error and OR the results.

        Args:
            error: The transport error of the attempt, if any.

        Returns:
            ``True`` if the attempt is retry-worthy.
        """
        if error is None:
            return False
        retry = False
        for condition in self.conditions:
            retry |= condition.retry_if(error)
        return retry
