r"""Outcome of a single attempt against the transport."""

from __future__ import annotations

__all__ = ["Result"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from arequest.exceptions import TransportError


@dataclass
class Result:
    """Outcome of one attempt.

    The results of one logical call form a newest-first singly linked
    chain through ``previous``.

    Attributes:
        status_code: The HTTP status code, or 0 when no response was received.
        status_description: The HTTP reason phrase.
        content: The raw response body.
        content_type: The response content type.
        content_length: The response length in bytes.
        response_uri: The final resolved URI.
        error: The transport error captured during the attempt, if any.
        previous: The result of the attempt immediately prior in the same call.

    Example:
        ```pycon
        >>> from arequest.result import Result
        >>> first = Result(status_code=503)
        >>> second = Result(status_code=200, previous=first)
        >>> second.attempts
        2
        >>> [result.status_code for result in second.history()]
        [200, 503]

        ```
    """

    status_code: int = 0
    status_description: str = ""
    content: str = ""
    content_type: str | None = None
    content_length: int = 0
    response_uri: str | None = None
    error: TransportError | None = None
    previous: Result | None = None

    @property
    def is_success(self) -> bool:
        """Indicate if the attempt completed without a transport error."""
        return self.error is None

    @property
    def attempts(self) -> int:
        """The number of attempts in the chain ending with this result."""
        return sum(1 for _ in self.history())

    def history(self) -> Iterator[Result]:
        """Iterate over the chain, from this result to the first attempt.

        Yields:
            The results, newest first.
        """
        current: Result | None = self
        while current is not None:
            yield current
            current = current.previous
