r"""Request description issued through a RestClient.

A request carries the target path, its own headers and parameters, the
mock expectations used by tests, and optional overrides of every
client-level default.
"""

from __future__ import annotations

__all__ = ["PostParameter", "Request"]

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from arequest.utils.text import is_blank

if TYPE_CHECKING:
    from collections.abc import Callable

    from arequest.caching import BaseCache, CacheOptions
    from arequest.credentials import BaseCredentials
    from arequest.retry.policy import RetryPolicy
    from arequest.serialization import BaseDeserializer, BaseSerializer
    from arequest.tasks.options import TaskOptions


@dataclass(frozen=True)
class PostParameter:
    """A multipart parameter.

    Attributes:
        name: The field name.
        value: The field value, for plain fields.
        content: The file content, for file fields.
        file_name: The file name, for file fields.
        content_type: The content type of the file.
    """

    name: str
    value: str | None = None
    content: bytes | None = None
    file_name: str | None = None
    content_type: str | None = None

    @property
    def is_file(self) -> bool:
        """Indicate if the parameter uploads a file."""
        return self.content is not None


@dataclass
class Request:
    """A request issued through a RestClient.

    Every override field left to ``None`` falls back to the client
    value. ``user_agent`` also falls back when blank.

    Example:
        ```pycon
        >>> from arequest.request import Request
        >>> request = Request(path="/users", parameters={"page": "2"})
        >>> request.build_endpoint("https://api.example.com")
        'https://api.example.com/users'
        >>> request.expects_mock
        False

        ```
    """

    path: str = ""
    method: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    parameters: dict[str, str] = field(default_factory=dict)
    post_parameters: list[PostParameter] = field(default_factory=list)
    entity: Any = None
    request_entity_type: type | None = None
    response_entity_type: type | None = None

    expect_status_code: int | None = None
    expect_status_description: str | None = None
    expect_content: str | None = None
    expect_content_type: str | None = None
    expect_headers: dict[str, str] = field(default_factory=dict)
    expect_entity: Any = None

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
    def expects_mock(self) -> bool:
        """Indicate if the request declares any test expectation."""
        return (
            self.expect_entity is not None
            or len(self.expect_headers) > 0
            or self.expect_status_code is not None
            or not is_blank(self.expect_content)
            or not is_blank(self.expect_content_type)
            or not is_blank(self.expect_status_description)
        )

    def build_endpoint(self, authority: str | None) -> str:
        """Resolve the target URL of the request.

        Args:
            authority: The client authority. Ignored when ``path`` is
                already an absolute URL.

        Returns:
            The target URL.

        Raises:
            ValueError: If the path is relative and no authority is set.
        """
        if "://" in self.path:
            return self.path
        if not authority:
            msg = f"cannot resolve the relative path {self.path!r} without an authority"
            raise ValueError(msg)
        if not self.path:
            return authority
        return f"{authority.rstrip('/')}/{self.path.lstrip('/')}"
