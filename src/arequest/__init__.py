r"""arequest - Request-execution engine built on httpx.

This package issues HTTP calls against a configured endpoint and layers
optional policies on top of a single-attempt transport: retries,
response caching, multipart submission, recurring and rate-limited
scheduling, and deterministic mock responses for tests.

Key Features:
    - Client-level defaults overridden field by field by each request
    - Retry policies made of composable error conditions
    - Synchronous calls and callback based asynchronous calls
    - Response caching with absolute or sliding expiration
    - Recurring asynchronous requests with optional rate limiting
    - Mock responses declared on the request, served by an httpx transport

Example:
    ```pycon
    >>> from arequest import ClientConfig, Request, RestClient, RetryOnStatus, RetryPolicy
    >>> client = RestClient(
    ...     ClientConfig(
    ...         authority="https://api.example.com",
    ...         retry_policy=RetryPolicy(max_retries=3, conditions=[RetryOnStatus()]),
    ...     )
    ... )
    >>> response = client.request(Request(path="/data"))  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "ArequestError",
    "AsyncOperation",
    "BaseCache",
    "BaseCredentials",
    "BaseDeserializer",
    "BaseQuery",
    "BaseSerializer",
    "BasicCredentials",
    "CacheMode",
    "CacheOptions",
    "ClientConfig",
    "DeserializationError",
    "HttpxQuery",
    "MemoryCache",
    "MockTransport",
    "PostParameter",
    "RateLimitByPercent",
    "RateLimitByPredicate",
    "Request",
    "Response",
    "RestClient",
    "Result",
    "RetryIf",
    "RetryOnConnectionError",
    "RetryOnStatus",
    "RetryOnTimeout",
    "RetryPolicy",
    "TaskOptions",
    "TransportError",
    "TransportRegistry",
    "UnsupportedConfigurationError",
    "UnsupportedOperationError",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from arequest.caching import BaseCache, CacheMode, CacheOptions, MemoryCache
from arequest.client import RestClient
from arequest.core.config import ClientConfig
from arequest.credentials import BaseCredentials, BasicCredentials
from arequest.exceptions import (
    ArequestError,
    DeserializationError,
    TransportError,
    UnsupportedConfigurationError,
    UnsupportedOperationError,
)
from arequest.mock.transport import MockTransport
from arequest.query import BaseQuery, HttpxQuery, TransportRegistry
from arequest.request import PostParameter, Request
from arequest.response import Response
from arequest.result import Result
from arequest.retry import (
    AsyncOperation,
    RetryIf,
    RetryOnConnectionError,
    RetryOnStatus,
    RetryOnTimeout,
    RetryPolicy,
)
from arequest.serialization import BaseDeserializer, BaseSerializer
from arequest.tasks import RateLimitByPercent, RateLimitByPredicate, TaskOptions

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
