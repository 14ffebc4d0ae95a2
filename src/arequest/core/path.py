r"""Selection and invocation of the execution path of an attempt.

Exactly one path is chosen per attempt, in fixed priority order:
cached, then multipart, then plain.
"""

from __future__ import annotations

__all__ = [
    "ExecutionPath",
    "apply_multipart_method",
    "attempt",
    "attempt_async",
    "check_path",
    "expiry_for",
    "select_path",
]

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

from arequest.caching import AbsoluteExpiry, CacheMode, NoExpiry, SlidingExpiry
from arequest.exceptions import UnsupportedConfigurationError

if TYPE_CHECKING:
    from arequest.caching import CacheOptions, ExpiryPolicy
    from arequest.core.context import CallContext
    from arequest.core.resolver import RequestConfig
    from arequest.query.base import BaseQuery
    from arequest.result import Result

logger: logging.Logger = logging.getLogger(__name__)


class ExecutionPath(Enum):
    """Execution paths of an attempt."""

    CACHED = "cached"
    MULTIPART = "multipart"
    PLAIN = "plain"


def select_path(config: RequestConfig) -> ExecutionPath:
    """Select the execution path of an attempt.

    Args:
        config: The effective configuration of the call.

    Returns:
        ``CACHED`` if a cache and cache options both resolve, else
            ``MULTIPART`` if post parameters are present, else ``PLAIN``.

    Example:
        ```pycon
        >>> from arequest.core.path import select_path
        >>> from arequest.core.resolver import RequestConfig
        >>> from arequest.request import PostParameter
        >>> select_path(RequestConfig())
        <ExecutionPath.PLAIN: 'plain'>
        >>> select_path(RequestConfig(post_parameters=(PostParameter("a", "1"),)))
        <ExecutionPath.MULTIPART: 'multipart'>

        ```
    """
    if config.cache is not None and config.cache_options is not None:
        return ExecutionPath.CACHED
    if config.post_parameters:
        return ExecutionPath.MULTIPART
    return ExecutionPath.PLAIN


def expiry_for(options: CacheOptions) -> ExpiryPolicy:
    """Build the expiry policy of a cached result.

    Args:
        options: The cache options.

    Returns:
        The expiry policy matching the cache mode.

    Raises:
        UnsupportedConfigurationError: If the cache mode is unknown.
    """
    if options.mode is CacheMode.NO_EXPIRATION:
        return NoExpiry()
    if options.mode is CacheMode.ABSOLUTE_EXPIRATION:
        return AbsoluteExpiry(datetime.now(tz=timezone.utc) + options.duration)
    if options.mode is CacheMode.SLIDING_EXPIRATION:
        return SlidingExpiry(options.duration)
    msg = f"Unknown cache mode: {options.mode!r}"
    raise UnsupportedConfigurationError(msg)


def check_path(config: RequestConfig) -> ExecutionPath:
    """Select the execution path and check that it can be taken.

    Args:
        config: The effective configuration of the call.

    Returns:
        The execution path.

    Raises:
        UnsupportedConfigurationError: If the cache mode is unknown.
    """
    path = select_path(config)
    if path is ExecutionPath.CACHED:
        expiry_for(config.cache_options)
    return path


def apply_multipart_method(query: BaseQuery, client_method: str | None) -> None:
    """Default the method of a multipart attempt to POST.

    The method is forced to POST unless it already is POST, or the
    client's own default method is PUT.

    Args:
        query: The query of the call.
        client_method: The client's own default method.
    """
    if query.method != "POST" and client_method != "PUT":
        query.method = "POST"


def attempt(call: CallContext) -> Result:
    """Perform one attempt through the selected execution path.

    Args:
        call: The state of the call.

    Returns:
        The outcome of the attempt.

    Raises:
        UnsupportedConfigurationError: If the cache mode is unknown. No
            attempt is made in this case.
    """
    config, query = call.config, call.query
    path = select_path(config)
    logger.debug(f"{query.method} request to {call.url}: {path.value} path")
    if path is ExecutionPath.CACHED:
        expiry = expiry_for(config.cache_options)
        return query.request_cached(call.url, _cache_key(config), config.cache, expiry)
    if path is ExecutionPath.MULTIPART:
        apply_multipart_method(query, config.client_method)
        return query.request_multipart(call.url, config.post_parameters)
    return query.request(call.url)


async def attempt_async(call: CallContext) -> Result:
    """Perform one attempt asynchronously through the selected execution
    path.

    See ``attempt``.
    """
    config, query = call.config, call.query
    path = select_path(config)
    logger.debug(f"{query.method} request to {call.url}: {path.value} path")
    if path is ExecutionPath.CACHED:
        expiry = expiry_for(config.cache_options)
        return await query.request_cached_async(
            call.url, _cache_key(config), config.cache, expiry
        )
    if path is ExecutionPath.MULTIPART:
        apply_multipart_method(query, config.client_method)
        return await query.request_multipart_async(call.url, config.post_parameters)
    return await query.request_async(call.url)


def _cache_key(config: RequestConfig) -> str:
    function = config.cache_key_function
    return function() if function is not None else ""
