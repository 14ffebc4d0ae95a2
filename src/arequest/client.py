r"""Client issuing requests against a configured endpoint.

This module provides the RestClient class. One call site, synchronous
(``request``) or callback based (``begin_request``), applies whichever
of the retry, cache, multipart, recurring and mock behaviors the client
and the request configure.
"""

from __future__ import annotations

__all__ = ["RestClient"]

import asyncio
import logging
from functools import partial
from typing import TYPE_CHECKING, Any

from arequest.core.config import ClientConfig
from arequest.core.context import CallContext
from arequest.core.path import check_path
from arequest.core.resolver import resolve_config
from arequest.credentials import query_for
from arequest.exceptions import DeserializationError, UnsupportedOperationError
from arequest.mock.redirector import build_mock_request_url
from arequest.query.registry import TransportRegistry
from arequest.response import build_response
from arequest.retry.executor import RetryExecutor
from arequest.retry.executor_async import AsyncOperation, AsyncRetryExecutor
from arequest.serialization import serialize_entity
from arequest.tasks.integration import build_timed_task

if TYPE_CHECKING:
    from collections.abc import Callable

    from arequest.request import Request
    from arequest.response import Response
    from arequest.result import Result
    from arequest.tasks.timed import TimedTask

logger: logging.Logger = logging.getLogger(__name__)


class RestClient:
    r"""Client issuing requests with client-level defaults.

    Every field of the request overrides the matching client default
    independently. The attempt budget and the result chain of a call
    belong to that call only, so one client can be shared by concurrent
    calls.

    Args:
        config: The client-level defaults. If ``None``, a default
            ``ClientConfig`` is used.
        transports: The transport registry of the client. If ``None``,
            a new empty registry is created.

    Example:
        ```pycon
        >>> from arequest import ClientConfig, Request, RestClient
        >>> client = RestClient(ClientConfig(authority="https://api.example.com"))
        >>> response = client.request(
        ...     Request(path="/users/1", expect_status_code=200, expect_content='{"id": 1}')
        ... )
        >>> response.status_code, response.content
        (200, '{"id": 1}')

        ```
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transports: TransportRegistry | None = None,
    ) -> None:
        self.config: ClientConfig = config or ClientConfig()
        self._transports = transports if transports is not None else TransportRegistry()
        self._executor = RetryExecutor()
        self._async_executor = AsyncRetryExecutor()
        self._active_task: TimedTask | None = None

    @property
    def transports(self) -> TransportRegistry:
        """The transport registry of the client."""
        return self._transports

    @property
    def active_task(self) -> TimedTask | None:
        """The last recurring task started by the client, if any."""
        return self._active_task

    def request(self, request: Request, response_type: type | None = None) -> Response:
        """Issue a request and wait for its response.

        Args:
            request: The request to issue.
            response_type: The type the body is deserialized into. If
                ``None``, ``request.response_entity_type`` is used.

        Returns:
            The response built from the terminal attempt. Transport
                errors are not raised; they are carried by
                ``response.result``.

        Raises:
            DeserializationError: If the deserializer fails.
            UnsupportedConfigurationError: If the cache mode is unknown.
            ValueError: If the request is invalid.
        """
        call = self._prepare(request)
        result = self._executor.execute(call)
        return build_response(result, request, call.config, response_type)

    def begin_request(
        self,
        request: Request,
        callback: Callable[[Request, Response], Any] | None = None,
        response_type: type | None = None,
    ) -> AsyncOperation:
        """Issue a request without waiting for its response.

        Must be called with a running event loop. The callback fires
        exactly once per call, when the retries stop. For a recurring
        request it fires once per cycle, and the operation completes when
        the task finishes.

        Args:
            request: The request to issue.
            callback: Called with the request and its response.
            response_type: The type the body is deserialized into. If
                ``None``, ``request.response_entity_type`` is used.

        Returns:
            The handle of the call.

        Raises:
            RuntimeError: If no event loop is running.
            UnsupportedConfigurationError: If the cache mode or the
                rate-limiting rule is unknown.
            ValueError: If the request is invalid.

        Example:
            ```pycon
            >>> import asyncio
            >>> from arequest import Request, RestClient
            >>> async def main():
            ...     received = []
            ...     client = RestClient()
            ...     operation = client.begin_request(
            ...         Request(path="https://api.example.com/a", expect_status_code=404),
            ...         callback=lambda request, response: received.append(response.status_code),
            ...     )
            ...     await operation.wait()
            ...     return received
            ...
            >>> asyncio.run(main())
            [404]

            ```
        """
        call = self._prepare(request)
        operation = AsyncOperation(request)
        options = call.config.task_options
        if not call.continuation and options is not None and options.is_recurring:
            self._begin_task(call, operation, callback, response_type)
        else:
            self._begin_call(call, operation, callback, response_type)
        return operation

    def end_request(self, operation: AsyncOperation) -> Response:
        """Polling-style retrieval of the response of an asynchronous call.

        Raises:
            UnsupportedOperationError: Always.
        """
        msg = "end_request is not supported, use the callback of begin_request or wait()"
        raise UnsupportedOperationError(msg)

    def _prepare(self, request: Request) -> CallContext:
        config = resolve_config(self.config, request)
        url = request.build_endpoint(self.config.authority)
        query = query_for(config.credentials, url, request, config.info, config.method)
        query.method = config.method
        query.headers = dict(config.headers)
        query.parameters = dict(config.parameters)
        query.user_agent = config.user_agent
        query.proxy = config.proxy
        query.timeout = config.timeout
        query.entity = serialize_entity(
            config.serializer, request.entity, request.request_entity_type
        )
        query.transports = self._transports
        if request.expects_mock:
            url = build_mock_request_url(request, query, url, self._transports, config.serializer)
        logger.debug(f"Prepared {config.method} request to {url}")
        return CallContext(request=request, config=config, query=query, url=url)

    def _begin_call(
        self,
        call: CallContext,
        operation: AsyncOperation,
        callback: Callable[[Request, Response], Any] | None,
        response_type: type | None,
    ) -> None:
        self._async_executor.start(
            call, partial(self._complete, operation, callback, response_type)
        )

    def _complete(
        self,
        operation: AsyncOperation,
        callback: Callable[[Request, Response], Any] | None,
        response_type: type | None,
        call: CallContext,
        result: Result | None,
        error: BaseException | None,
    ) -> None:
        if operation.is_completed:
            logger.debug(f"Outcome of the cancelled call to {call.url} discarded")
            return
        if error is not None:
            operation.set_error(error)
            return
        try:
            response = build_response(result, call.request, call.config, response_type)
        except DeserializationError as exc:
            logger.debug(f"Callback of {call.url} not invoked: {exc}")
            operation.set_error(exc)
            return
        if callback is not None:
            try:
                callback(call.request, response)
            except Exception as exc:
                logger.debug(f"Callback of {call.url} raised {exc!r}")
                operation.set_error(exc)
                return
        operation.set_response(response)

    def _begin_task(
        self,
        call: CallContext,
        operation: AsyncOperation,
        callback: Callable[[Request, Response], Any] | None,
        response_type: type | None,
    ) -> None:
        check_path(call.config)

        async def cycle() -> Response:
            # Each cycle is a call of its own, sharing the prepared query
            cycle_call = CallContext(
                request=call.request, config=call.config, query=call.query, url=call.url
            )
            cycle_operation = AsyncOperation(call.request)
            self._begin_call(cycle_call, cycle_operation, callback, response_type)
            try:
                return await cycle_operation.wait()
            except asyncio.CancelledError:
                cycle_operation.cancel()
                raise

        task = build_timed_task(call.config.task_options, cycle)
        self._active_task = task
        runner = task.start()
        runner.add_done_callback(partial(_complete_from_task, operation, task))


def _complete_from_task(operation: AsyncOperation, task: TimedTask, runner: asyncio.Task) -> None:
    if runner.cancelled():
        operation.set_response(task.last_result)
    elif runner.exception() is not None:
        operation.set_error(runner.exception())
    else:
        operation.set_response(runner.result())
