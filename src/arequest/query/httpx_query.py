r"""Default query performing attempts with httpx.

One ``httpx.Client`` (or ``httpx.AsyncClient``) is opened per attempt
with the timeout, proxy, authentication and custom transports of the
query, and closed once the response has been read.
"""

from __future__ import annotations

__all__ = ["HttpxQuery"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from arequest.core.config import DEFAULT_TIMEOUT
from arequest.exceptions import TransportError
from arequest.mock.protocol import MOCK_PARAMETERS
from arequest.query.base import BaseQuery
from arequest.result import Result

if TYPE_CHECKING:
    from collections.abc import Sequence

    from arequest.request import PostParameter

logger: logging.Logger = logging.getLogger(__name__)

# Methods whose parameters are sent in the query string
QUERY_STRING_METHODS = frozenset({"GET", "HEAD", "DELETE", "OPTIONS"})


class HttpxQuery(BaseQuery):
    r"""Query performing one attempt with httpx.

    Responses with a status code >= 400 are protocol errors: the result
    keeps the response and carries a ``TransportError`` with the status
    code, so retry conditions can inspect it.

    Args:
        info: Opaque metadata forwarded by the credentials.
        auth: Optional httpx authentication.

    Example:
        ```pycon
        >>> from arequest.query.httpx_query import HttpxQuery
        >>> query = HttpxQuery()
        >>> query.method = "GET"
        >>> result = query.request("https://api.example.com/data")  # doctest: +SKIP

        ```
    """

    def __init__(self, info: Any = None, auth: httpx.Auth | None = None) -> None:
        super().__init__(info)
        self.auth = auth

    def send(self, url: str, post_parameters: Sequence[PostParameter] = ()) -> Result:
        try:
            with httpx.Client(**self._client_kwargs()) as client:
                response = client.request(self.method, url, **self._request_kwargs(post_parameters))
        except httpx.HTTPError as exc:
            return self._failure(url, exc)
        return self._to_result(response)

    async def send_async(self, url: str, post_parameters: Sequence[PostParameter] = ()) -> Result:
        try:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                response = await client.request(
                    self.method, url, **self._request_kwargs(post_parameters)
                )
        except httpx.HTTPError as exc:
            return self._failure(url, exc)
        return self._to_result(response)

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "timeout": self.timeout if self.timeout is not None else DEFAULT_TIMEOUT,
            "auth": self.auth,
        }
        if self.proxy:
            kwargs["proxy"] = self.proxy
        if self.transports is not None:
            kwargs["mounts"] = self.transports.mounts()
        return kwargs

    def _request_kwargs(self, post_parameters: Sequence[PostParameter]) -> dict[str, Any]:
        headers = dict(self.headers)
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        kwargs: dict[str, Any] = {"headers": headers}

        if post_parameters:
            data = {k: v for k, v in self.parameters.items() if k not in MOCK_PARAMETERS}
            mock_parameters = {k: v for k, v in self.parameters.items() if k in MOCK_PARAMETERS}
            if mock_parameters:
                kwargs["params"] = mock_parameters
            files = {}
            for parameter in post_parameters:
                if parameter.is_file:
                    files[parameter.name] = (
                        parameter.file_name or parameter.name,
                        parameter.content,
                        parameter.content_type or "application/octet-stream",
                    )
                else:
                    data[parameter.name] = parameter.value or ""
            kwargs["data"] = data
            # Without files, httpx sends the fields urlencoded
            if files:
                kwargs["files"] = files
            return kwargs

        if self.entity is not None:
            headers["Content-Type"] = self.entity.content_type
            kwargs["content"] = self.entity.content.encode(self.entity.content_encoding)
            kwargs["params"] = self.parameters
        elif self.method in QUERY_STRING_METHODS:
            kwargs["params"] = self.parameters
        else:
            kwargs["data"] = self.parameters
        return kwargs

    def _failure(self, url: str, exc: httpx.HTTPError) -> Result:
        logger.debug(f"{self.method} request to {url} encountered {type(exc).__name__}: {exc}")
        return Result(
            response_uri=url,
            error=TransportError(
                method=self.method,
                url=url,
                message=f"{self.method} request to {url} failed: {exc}",
                cause=exc,
            ),
        )

    def _to_result(self, response: httpx.Response) -> Result:
        url = str(response.url)
        error = None
        if response.is_error:
            error = TransportError(
                method=self.method,
                url=url,
                message=f"{self.method} request to {url} failed with status {response.status_code}",
                status_code=response.status_code,
            )
        return Result(
            status_code=response.status_code,
            status_description=response.reason_phrase,
            content=response.text,
            content_type=response.headers.get("content-type"),
            content_length=len(response.content),
            response_uri=url,
            error=error,
        )
