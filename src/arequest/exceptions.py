r"""Exceptions raised or captured by the request engine.

``TransportError`` is never raised to the caller: it is captured into
the ``Result`` of the attempt that failed and drives the retry
decision. The other exceptions abort the call when raised.
"""

from __future__ import annotations

__all__ = [
    "ArequestError",
    "DeserializationError",
    "TransportError",
    "UnsupportedConfigurationError",
    "UnsupportedOperationError",
]


class ArequestError(Exception):
    """Base class of all the exceptions of this package."""


class TransportError(ArequestError):
    """Failure of one physical attempt.

    Args:
        method: The HTTP method of the failed attempt.
        url: The URL of the failed attempt.
        message: A descriptive error message.
        status_code: The HTTP status code when the failure is a protocol
            error (status >= 400), otherwise ``None``.
        cause: The underlying exception raised by the transport, if any.

    Example:
        ```pycon
        >>> from arequest.exceptions import TransportError
        >>> error = TransportError(
        ...     method="GET",
        ...     url="https://api.example.com/data",
        ...     message="GET request to https://api.example.com/data failed with status 503",
        ...     status_code=503,
        ... )
        >>> error.status_code
        503

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.cause = cause


class UnsupportedConfigurationError(ArequestError, ValueError):
    """Raised when a cache mode or a rate-limiting rule is not
    recognized.

    The call is aborted before any attempt is made.
    """


class DeserializationError(ArequestError):
    """Raised when the deserializer fails to build the response entity.

    Args:
        message: A descriptive error message.
        content: The response body that could not be deserialized.
        entity_type: The type the body was deserialized into.
    """

    def __init__(self, message: str, content: str, entity_type: type | None = None) -> None:
        super().__init__(message)
        self.content = content
        self.entity_type = entity_type


class UnsupportedOperationError(ArequestError, NotImplementedError):
    """Raised by polling-style retrieval of an asynchronous result.

    Callers must rely on the completion callback or on
    ``AsyncOperation.wait()`` instead.
    """
