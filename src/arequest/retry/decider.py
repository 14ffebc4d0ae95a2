r"""Retry decision applied after every attempt of a call.

This module provides the RetryDecider class shared by the synchronous
and asynchronous executors, so both paths take the same decision for
the same outcome.
"""

from __future__ import annotations

__all__ = ["RetryDecider"]

import logging
from typing import TYPE_CHECKING

from arequest.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from arequest.core.context import CallContext
    from arequest.result import Result

logger: logging.Logger = logging.getLogger(__name__)


class RetryDecider:
    """Decides whether a call continues after an attempt.

    A retry is requested only when the attempt captured a transport
    error and at least one condition of the resolved retry policy
    matches it. A successful attempt always stops the call.

    Example:
        ```pycon
        >>> from arequest.core.context import CallContext
        >>> from arequest.core.resolver import RequestConfig
        >>> from arequest.query import HttpxQuery
        >>> from arequest.request import Request
        >>> from arequest.result import Result
        >>> from arequest.retry import RetryDecider
        >>> call = CallContext(Request(), RequestConfig(), HttpxQuery(), "https://x", remaining=3)
        >>> RetryDecider().decide(call, Result(status_code=200))
        False
        >>> call.remaining
        0

        ```
    """

    def decide(self, call: CallContext, result: Result) -> bool:
        """Apply the decision for the outcome of an attempt to the call.

        On retry, ``result`` becomes the predecessor of the next attempt
        and the budget is decremented; otherwise the budget is forced to
        0.

        Args:
            call: The state of the call, updated in place.
            result: The outcome of the attempt.

        Returns:
            ``True`` if another attempt must be made.
        """
        policy = call.config.retry_policy
        if policy is not None and policy.should_retry(result.error):
            call.previous = result
            call.remaining = max(call.remaining - 1, 0)
            log_structured(
                logger,
                logging.DEBUG,
                f"{call.query.method} request to {call.url} failed on attempt "
                f"{call.attempts}, {call.remaining} attempt(s) left: {result.error}",
                url=call.url,
                attempt=call.attempts,
                remaining=call.remaining,
                status_code=result.status_code,
                continuation=call.continuation,
            )
            return call.remaining > 0

        call.remaining = 0
        log_structured(
            logger,
            logging.DEBUG,
            f"{call.query.method} request to {call.url} stopped after {call.attempts} "
            f"attempt(s) with status {result.status_code}",
            url=call.url,
            attempts=call.attempts,
            status_code=result.status_code,
            success=result.error is None,
            continuation=call.continuation,
        )
        return False
