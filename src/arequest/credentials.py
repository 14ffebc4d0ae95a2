r"""Credentials collaborators building the query of each call.

Request credentials trump client credentials. Without credentials the
engine falls back to an unauthenticated ``HttpxQuery``.
"""

from __future__ import annotations

__all__ = ["BaseCredentials", "BasicCredentials", "query_for"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import httpx

from arequest.query.httpx_query import HttpxQuery

if TYPE_CHECKING:
    from arequest.query.base import BaseQuery
    from arequest.request import Request


class BaseCredentials(ABC):
    """Builds an authenticated query.

    Implementations must be safe for concurrent use across the calls
    of a client.
    """

    @abstractmethod
    def query_for(self, url: str, request: Request, info: Any, method: str) -> BaseQuery:
        """Build the query of one call.

        Args:
            url: The resolved target URL.
            request: The request being issued.
            info: The resolved opaque metadata.
            method: The resolved HTTP method.

        Returns:
            The query performing the attempts of the call.
        """


class BasicCredentials(BaseCredentials):
    r"""HTTP basic authentication.

    Args:
        username: The user name.
        password: The password.

    Example:
        ```pycon
        >>> from arequest.credentials import BasicCredentials
        >>> from arequest.request import Request
        >>> credentials = BasicCredentials("user", "secret")
        >>> query = credentials.query_for("https://api.example.com", Request(), None, "GET")
        >>> type(query).__name__
        'HttpxQuery'

        ```
    """

    def __init__(self, username: str, password: str) -> None:
        self.username = username
        self.password = password

    def query_for(self, url: str, request: Request, info: Any, method: str) -> BaseQuery:  # noqa: ARG002
        return HttpxQuery(info=info, auth=httpx.BasicAuth(self.username, self.password))


def query_for(
    credentials: BaseCredentials | None, url: str, request: Request, info: Any, method: str
) -> BaseQuery:
    """Build the query of one call.

    Args:
        credentials: The resolved credentials, if any.
        url: The resolved target URL.
        request: The request being issued.
        info: The resolved opaque metadata.
        method: The resolved HTTP method.

    Returns:
        The query built by the credentials, or an unauthenticated
            ``HttpxQuery``.
    """
    if credentials is not None:
        return credentials.query_for(url, request, info, method)
    return HttpxQuery(info=info)
