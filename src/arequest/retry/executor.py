r"""Synchronous retry executor.

This module provides the RetryExecutor class that runs the attempts of
one synchronous call in a loop bounded by the attempt budget.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
from typing import TYPE_CHECKING

from arequest.core.path import attempt
from arequest.retry.decider import RetryDecider

if TYPE_CHECKING:
    from arequest.core.context import CallContext
    from arequest.result import Result

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes the attempts of a synchronous call.

    The budget is ``max_retries + 1``: the first attempt plus up to
    ``max_retries`` retries. Each new result is linked to the result of
    the attempt before it, so the terminal result carries the full
    history of the call.

    Args:
        decider: The retry decider. A default one is created if omitted.

    Example:
        ```pycon
        >>> from arequest.retry import RetryExecutor
        >>> executor = RetryExecutor()
        >>> result = executor.execute(call)  # doctest: +SKIP

        ```
    """

    def __init__(self, decider: RetryDecider | None = None) -> None:
        self.decider = decider or RetryDecider()

    def execute(self, call: CallContext) -> Result:
        """Run the attempts of a call until the decider stops it.

        Args:
            call: The state of the call. Its budget is (re)initialized.

        Returns:
            The terminal result.

        Raises:
            UnsupportedConfigurationError: If the cache mode is unknown.
        """
        call.remaining = call.config.max_retries + 1
        result: Result | None = None
        while call.remaining > 0:
            result = attempt(call)
            call.attempts += 1
            result.previous = call.previous
            self.decider.decide(call, result)
        logger.debug(f"{call.query.method} request to {call.url} done in {call.attempts} attempt(s)")
        return result
