r"""Event-driven retry executor of asynchronous calls.

Each attempt runs as its own asyncio task. When it completes, a done
callback applies the retry decision and either issues a continuation
attempt or completes the call. Exactly one attempt of a call is
outstanding at any time and the completion handler runs exactly once.
"""

from __future__ import annotations

__all__ = ["AsyncOperation", "AsyncRetryExecutor"]

import asyncio
import logging
from functools import partial
from typing import TYPE_CHECKING, Any

from arequest.core.path import attempt_async, check_path
from arequest.exceptions import UnsupportedOperationError
from arequest.retry.decider import RetryDecider

if TYPE_CHECKING:
    from collections.abc import Callable

    from arequest.core.context import CallContext
    from arequest.request import Request
    from arequest.result import Result

logger: logging.Logger = logging.getLogger(__name__)


class AsyncOperation:
    r"""Handle of an asynchronous call, returned before it completes.

    The outcome is delivered through the completion callback of the call
    or by awaiting ``wait()``. Polling-style retrieval with ``result()``
    is not supported.

    Args:
        request: The request of the call.

    Example:
        ```pycon
        >>> import asyncio
        >>> from arequest import Request, RestClient
        >>> async def main():
        ...     client = RestClient()
        ...     operation = client.begin_request(
        ...         Request(path="https://api.example.com/a", expect_status_code=200)
        ...     )
        ...     response = await operation.wait()
        ...     return operation.is_completed, response.status_code
        ...
        >>> asyncio.run(main())
        (True, 200)

        ```
    """

    def __init__(self, request: Request) -> None:
        self.request = request
        self.response: Any = None
        self._error: BaseException | None = None
        self._done = asyncio.Event()

    @property
    def is_completed(self) -> bool:
        """Indicate if the call completed, successfully or not."""
        return self._done.is_set()

    @property
    def error(self) -> BaseException | None:
        """The error that aborted the call, if any.

        Transport errors never abort a call; they are carried by the
        terminal result of the response.
        """
        return self._error

    async def wait(self) -> Any:
        """Wait for the completion of the call.

        Returns:
            The response of the call.

        Raises:
            Exception: The error that aborted the call, if any.
        """
        await self._done.wait()
        if self._error is not None:
            raise self._error
        return self.response

    def result(self) -> Any:
        """Polling-style retrieval of the response.

        Raises:
            UnsupportedOperationError: Always.
        """
        msg = "Polling for the response is not supported, use the callback or wait()"
        raise UnsupportedOperationError(msg)

    def set_response(self, response: Any) -> None:
        """Complete the operation with a response."""
        self.response = response
        self._done.set()

    def set_error(self, error: BaseException) -> None:
        """Complete the operation with the error that aborted the call."""
        self._error = error
        self._done.set()

    def cancel(self) -> None:
        """Complete the operation as cancelled.

        The outcome of an attempt still in flight is discarded and the
        callback of the call is not invoked.
        """
        if not self.is_completed:
            self.set_error(asyncio.CancelledError())


class AsyncRetryExecutor:
    """Executes the attempts of an asynchronous call.

    The budget is ``max_retries``: after a retry-worthy attempt the
    budget is decremented and a continuation is issued only while it
    stays strictly positive. The first attempt is always issued.

    Continuations reuse the query and the URL of the call: the endpoint
    resolution and the mock rewriting of the original attempt are not
    repeated.

    Args:
        decider: The retry decider. A default one is created if omitted.
    """

    def __init__(self, decider: RetryDecider | None = None) -> None:
        self.decider = decider or RetryDecider()
        self._pending: set[asyncio.Task] = set()

    def start(
        self,
        call: CallContext,
        on_done: Callable[[CallContext, Result | None, BaseException | None], None],
    ) -> None:
        """Issue the first attempt of a call.

        Args:
            call: The state of the call. Its budget is (re)initialized.
            on_done: Called exactly once when the call stops, with the
                terminal result, or with the error that aborted the call.

        Raises:
            RuntimeError: If no event loop is running.
            UnsupportedConfigurationError: If the cache mode is unknown.
                No attempt is issued in this case.
        """
        check_path(call.config)
        loop = asyncio.get_running_loop()
        call.remaining = call.config.max_retries
        self._issue(loop, call, on_done)

    def _issue(
        self,
        loop: asyncio.AbstractEventLoop,
        call: CallContext,
        on_done: Callable[[CallContext, Result | None, BaseException | None], None],
    ) -> None:
        task = loop.create_task(attempt_async(call))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        task.add_done_callback(partial(self._on_attempt_done, loop, call, on_done))

    def _on_attempt_done(
        self,
        loop: asyncio.AbstractEventLoop,
        call: CallContext,
        on_done: Callable[[CallContext, Result | None, BaseException | None], None],
        task: asyncio.Task,
    ) -> None:
        if task.cancelled():
            on_done(call, None, asyncio.CancelledError())
            return
        error = task.exception()
        if error is not None:
            logger.debug(f"{call.query.method} request to {call.url} aborted: {error!r}")
            on_done(call, None, error)
            return

        result = task.result()
        call.attempts += 1
        result.previous = call.previous
        if self.decider.decide(call, result):
            call.continuation = True
            logger.debug(f"Issuing continuation attempt {call.attempts + 1} to {call.url}")
            self._issue(loop, call, on_done)
            return
        on_done(call, result, None)
