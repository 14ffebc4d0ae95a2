r"""Typed response built from the terminal result of a call."""

from __future__ import annotations

__all__ = ["Response", "build_response"]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from arequest.exceptions import DeserializationError
from arequest.utils.text import is_blank

if TYPE_CHECKING:
    from arequest.core.resolver import RequestConfig
    from arequest.request import Request
    from arequest.result import Result

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class Response(Generic[T]):
    """Response of a call.

    Attributes:
        status_code: The HTTP status code, 0 when no response was received.
        status_description: The HTTP reason phrase.
        content: The raw response body.
        content_type: The response content type.
        content_length: The response length in bytes.
        response_uri: The final resolved URI.
        content_entity: The deserialized body, if any.
        result: The terminal result of the call; its ``error`` carries the
            last captured transport error and its chain the earlier
            attempts.
    """

    status_code: int = 0
    status_description: str = ""
    content: str = ""
    content_type: str | None = None
    content_length: int = 0
    response_uri: str | None = None
    content_entity: T | None = None
    result: Result | None = None

    @property
    def error(self) -> Exception | None:
        """The transport error of the terminal attempt, if any."""
        return self.result.error if self.result is not None else None


def build_response(
    result: Result,
    request: Request,
    config: RequestConfig,
    response_type: type[T] | None = None,
) -> Response[T]:
    """Build the response of a call from its terminal result.

    The body is deserialized when a deserializer resolves, the body is
    not blank and a target type is known: ``response_type`` for typed
    calls, else ``request.response_entity_type``.

    Args:
        result: The terminal result of the call.
        request: The request of the call.
        config: The effective configuration of the call.
        response_type: The target type of a typed call.

    Returns:
        The response.

    Raises:
        DeserializationError: If the deserializer fails.

    Example:
        ```pycon
        >>> from arequest.core.resolver import RequestConfig
        >>> from arequest.request import Request
        >>> from arequest.response import build_response
        >>> from arequest.result import Result
        >>> response = build_response(Result(status_code=204), Request(), RequestConfig())
        >>> response.status_code, response.content_entity
        (204, None)

        ```
    """
    response: Response[T] = Response(
        status_code=result.status_code,
        status_description=result.status_description,
        content=result.content,
        content_type=result.content_type,
        content_length=result.content_length,
        response_uri=result.response_uri,
        result=result,
    )
    entity_type = response_type if response_type is not None else request.response_entity_type
    if config.deserializer is None or entity_type is None or is_blank(result.content):
        return response

    try:
        response.content_entity = config.deserializer.deserialize(result.content, entity_type)
    except Exception as exc:
        msg = f"Failed to deserialize the response body into {entity_type.__name__}: {exc}"
        raise DeserializationError(msg, content=result.content, entity_type=entity_type) from exc
    logger.debug(f"Deserialized the response body into {entity_type.__name__}")
    return response
