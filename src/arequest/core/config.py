r"""Configuration dataclass and defaults for RestClient.

This module provides configuration constants and the dataclass holding
the client-level defaults that every request may override field by
field.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_METHOD",
    "DEFAULT_MOCK_CONTENT_TYPE",
    "DEFAULT_TIMEOUT",
    "MOCK_SCHEME",
    "RETRY_STATUS_CODES",
    "ClientConfig",
]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from arequest.core.validation import validate_timeout

if TYPE_CHECKING:
    from collections.abc import Callable

    from arequest.caching import BaseCache, CacheOptions
    from arequest.credentials import BaseCredentials
    from arequest.request import PostParameter
    from arequest.retry.policy import RetryPolicy
    from arequest.serialization import BaseDeserializer, BaseSerializer
    from arequest.tasks.options import TaskOptions


# Method used when neither the request nor the client specifies one
DEFAULT_METHOD = "GET"

# Default timeout in seconds of one attempt of the default query
DEFAULT_TIMEOUT = 10.0

# Content type sent to the mock transport when only content is expected
DEFAULT_MOCK_CONTENT_TYPE = "text/html"

# Scheme served by the mock transport
MOCK_SCHEME = "mock"

# HTTP status codes retried by RetryOnStatus by default
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


@dataclass
class ClientConfig:
    """Client-level defaults of a RestClient.

    Every field except ``authority`` can be overridden by the request.
    ``headers``, ``parameters`` and ``post_parameters`` are combined
    with the request values instead of being replaced.

    Args:
        authority: Prefix used to resolve relative request paths.
        method: Default HTTP method.
        headers: Default headers.
        parameters: Default parameters, unique by name.
        post_parameters: Default multipart parameters.
        serializer: Serializer of request entities.
        deserializer: Deserializer of response bodies.
        cache: Cache collaborator of the cached execution path.
        cache_options: Options of the cached execution path.
        cache_key_function: Function producing the cache key prefix.
        retry_policy: Retry policy.
        task_options: Options of recurring asynchronous requests.
        proxy: Proxy URL.
        timeout: Timeout in seconds of one attempt. Must be > 0.
        user_agent: User agent.
        credentials: Credentials building the query of each call.
        info: Opaque metadata forwarded to the credentials and the query.

    Example:
        ```pycon
        >>> from arequest.core.config import ClientConfig
        >>> config = ClientConfig(authority="https://api.example.com", user_agent="A")
        >>> merged = config.merge(user_agent="B", proxy=None)
        >>> merged.user_agent
        'B'
        >>> config.user_agent  # Original unchanged
        'A'

        ```
    """

    authority: str | None = None
    method: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    parameters: dict[str, str] = field(default_factory=dict)
    post_parameters: list[PostParameter] = field(default_factory=list)
    serializer: BaseSerializer | None = None
    deserializer: BaseDeserializer | None = None
    cache: BaseCache | None = None
    cache_options: CacheOptions | None = None
    cache_key_function: Callable[[], str] | None = None
    retry_policy: RetryPolicy | None = None
    task_options: TaskOptions | None = None
    proxy: str | None = None
    timeout: float | None = None
    user_agent: str | None = None
    credentials: BaseCredentials | None = None
    info: Any = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        if self.timeout is not None:
            validate_timeout(self.timeout)

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ClientConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)
