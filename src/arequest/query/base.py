r"""Single-attempt transport abstraction.

A query carries the resolved method, headers, parameters, entity,
proxy and timeout of one call, and performs one physical attempt per
invocation. Transport failures are never raised: they are captured into
the ``error`` of the returned ``Result``.
"""

from __future__ import annotations

__all__ = ["BaseQuery"]

import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from arequest.core.config import DEFAULT_METHOD

if TYPE_CHECKING:
    from collections.abc import Sequence

    from arequest.caching import BaseCache, ExpiryPolicy
    from arequest.query.registry import TransportRegistry
    from arequest.request import PostParameter
    from arequest.result import Result
    from arequest.serialization import Entity

logger: logging.Logger = logging.getLogger(__name__)


class BaseQuery(ABC):
    """Single-attempt transport abstraction.

    Subclasses implement ``send`` and ``send_async``; the plain, cached
    and multipart overloads are built on top of them.

    Args:
        info: Opaque metadata forwarded by the credentials.

    Attributes:
        method: The HTTP method of the next attempt.
        headers: The request headers.
        parameters: The request parameters, including the mock protocol
            parameters added by the mock redirector.
        entity: The serialized request body, if any.
        user_agent: The user agent, if any.
        proxy: The proxy URL, if any.
        timeout: The timeout in seconds of one attempt, if any.
        transports: The transport registry of the client, injected by the
            engine.
    """

    def __init__(self, info: Any = None) -> None:
        self.info = info
        self.method: str = DEFAULT_METHOD
        self.headers: dict[str, str] = {}
        self.parameters: dict[str, str] = {}
        self.entity: Entity | None = None
        self.user_agent: str | None = None
        self.proxy: str | None = None
        self.timeout: float | None = None
        self.transports: TransportRegistry | None = None

    @abstractmethod
    def send(self, url: str, post_parameters: Sequence[PostParameter] = ()) -> Result:
        """Perform one attempt.

        Args:
            url: The target URL.
            post_parameters: The multipart parameters, if any.

        Returns:
            The outcome of the attempt.
        """

    @abstractmethod
    async def send_async(self, url: str, post_parameters: Sequence[PostParameter] = ()) -> Result:
        """Perform one attempt asynchronously.

        Args:
            url: The target URL.
            post_parameters: The multipart parameters, if any.

        Returns:
            The outcome of the attempt.
        """

    def request(self, url: str) -> Result:
        """Perform one plain attempt."""
        return self.send(url)

    def request_multipart(self, url: str, post_parameters: Sequence[PostParameter]) -> Result:
        """Perform one multipart attempt."""
        return self.send(url, post_parameters)

    def request_cached(self, url: str, key: str, cache: BaseCache, expiry: ExpiryPolicy) -> Result:
        """Perform one attempt through the cache.

        The cache key is ``key`` prefixed to the URL. Only successful
        results are stored.

        Args:
            url: The target URL.
            key: The cache key prefix.
            cache: The cache collaborator.
            expiry: The expiry policy of a stored result.

        Returns:
            The cached result if any, otherwise the outcome of the attempt.
        """
        cache_key = f"{key}{url}"
        cached = cache.fetch(cache_key)
        if cached is not None:
            logger.debug(f"{self.method} request to {url} served from cache")
            return replace(cached, previous=None)
        result = self.send(url)
        if result.error is None:
            cache.store(cache_key, replace(result, previous=None), expiry)
        return result

    async def request_async(self, url: str) -> Result:
        """Perform one plain attempt asynchronously."""
        return await self.send_async(url)

    async def request_multipart_async(
        self, url: str, post_parameters: Sequence[PostParameter]
    ) -> Result:
        """Perform one multipart attempt asynchronously."""
        return await self.send_async(url, post_parameters)

    async def request_cached_async(
        self, url: str, key: str, cache: BaseCache, expiry: ExpiryPolicy
    ) -> Result:
        """Perform one attempt through the cache asynchronously.

        See ``request_cached``.
        """
        cache_key = f"{key}{url}"
        cached = cache.fetch(cache_key)
        if cached is not None:
            logger.debug(f"{self.method} request to {url} served from cache")
            return replace(cached, previous=None)
        result = await self.send_async(url)
        if result.error is None:
            cache.store(cache_key, replace(result, previous=None), expiry)
        return result
