r"""Resolution of the effective configuration of one call.

The client config and the request are merged once per external call,
before the execution path is selected. Request values override client
values field by field; headers and parameters are combined.
"""

from __future__ import annotations

__all__ = ["RequestConfig", "resolve_config"]

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from arequest.core.config import DEFAULT_METHOD, ClientConfig
from arequest.core.validation import validate_timeout
from arequest.utils.text import is_blank

if TYPE_CHECKING:
    from collections.abc import Callable

    from arequest.caching import BaseCache, CacheOptions
    from arequest.credentials import BaseCredentials
    from arequest.request import PostParameter, Request
    from arequest.retry.policy import RetryPolicy
    from arequest.serialization import BaseDeserializer, BaseSerializer
    from arequest.tasks.options import TaskOptions


@dataclass(frozen=True)
class RequestConfig:
    """Effective configuration of one call.

    Attributes:
        method: The resolved HTTP method.
        client_method: The client's own default method, used by the
            multipart method-defaulting rule.
        headers: The combined headers, client first.
        parameters: The combined parameters, unique by name.
        post_parameters: The request multipart parameters followed by the
            client ones.
        cache_key_function: The resolved cache key function.
    """

    method: str = DEFAULT_METHOD
    client_method: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    parameters: dict[str, str] = field(default_factory=dict)
    post_parameters: tuple[PostParameter, ...] = ()
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

    @property
    def max_retries(self) -> int:
        """The maximum number of retries, 0 without a retry policy."""
        return self.retry_policy.max_retries if self.retry_policy is not None else 0


def resolve_config(config: ClientConfig, request: Request) -> RequestConfig:
    """Merge the client defaults and the request overrides.

    The client collections are copied; the request never mutates the
    client defaults.

    Args:
        config: The client-level defaults.
        request: The request being issued.

    Returns:
        The effective configuration of the call.

    Raises:
        ValueError: If the request timeout is not > 0.

    Example:
        ```pycon
        >>> from arequest.core.config import ClientConfig
        >>> from arequest.core.resolver import resolve_config
        >>> from arequest.request import Request
        >>> config = ClientConfig(user_agent="A", parameters={"a": "1", "b": "2"})
        >>> resolved = resolve_config(config, Request(user_agent="", parameters={"a": "3"}))
        >>> resolved.user_agent, resolved.method, resolved.parameters
        ('A', 'GET', {'a': '3', 'b': '2'})

        ```
    """
    if request.timeout is not None:
        validate_timeout(request.timeout)

    effective = config.merge(
        method=request.method,
        serializer=request.serializer,
        deserializer=request.deserializer,
        cache=request.cache,
        cache_options=request.cache_options,
        cache_key_function=request.cache_key_function,
        retry_policy=request.retry_policy,
        task_options=request.task_options,
        proxy=request.proxy,
        timeout=request.timeout,
        user_agent=None if is_blank(request.user_agent) else request.user_agent,
        credentials=request.credentials,
        info=request.info,
    )

    # Same-name request parameters replace the client value in place
    parameters = dict(config.parameters)
    parameters.update(request.parameters)
    headers = dict(config.headers)
    headers.update(request.headers)

    cache_key_function = effective.cache_key_function
    if cache_key_function is None and effective.cache_options is not None:
        cache_key_function = effective.cache_options.key_function

    return RequestConfig(
        method=(effective.method or DEFAULT_METHOD).upper(),
        client_method=config.method.upper() if config.method else None,
        headers=headers,
        parameters=parameters,
        post_parameters=(*request.post_parameters, *config.post_parameters),
        serializer=effective.serializer,
        deserializer=effective.deserializer,
        cache=effective.cache,
        cache_options=effective.cache_options,
        cache_key_function=cache_key_function,
        retry_policy=effective.retry_policy,
        task_options=effective.task_options,
        proxy=effective.proxy,
        timeout=effective.timeout,
        user_agent=effective.user_agent,
        credentials=effective.credentials,
        info=effective.info,
    )
