r"""Test-double transport answering ``mock://`` requests.

The canned response is read from the mock protocol parameters found in
the query string or in an urlencoded form body.
"""

from __future__ import annotations

__all__ = ["MockTransport", "build_mock_response"]

import logging
from urllib.parse import parse_qsl

import httpx

from arequest.mock.protocol import (
    MOCK_CONTENT,
    MOCK_CONTENT_TYPE,
    MOCK_HEADER_NAMES,
    MOCK_HEADER_VALUES,
    MOCK_STATUS_CODE,
    MOCK_STATUS_DESCRIPTION,
)

logger: logging.Logger = logging.getLogger(__name__)


def build_mock_response(request: httpx.Request) -> httpx.Response:
    """Build the canned response described by a mock request.

    Args:
        request: The request sent to the ``mock`` scheme.

    Returns:
        The canned response; 200 with an empty body when no
            expectation is found.

    Example:
        ```pycon
        >>> import httpx
        >>> from arequest.mock.transport import build_mock_response
        >>> request = httpx.Request(
        ...     "GET", "mock://api.example.com/a?mockStatusCode=404&mockContent=missing"
        ... )
        >>> response = build_mock_response(request)
        >>> response.status_code, response.text
        (404, 'missing')

        ```
    """
    parameters = dict(request.url.params)
    if request.headers.get("content-type", "").startswith("application/x-www-form-urlencoded"):
        parameters.update(parse_qsl(request.content.decode(), keep_blank_values=True))

    status_code = int(parameters.get(MOCK_STATUS_CODE, 200))
    headers: list[tuple[str, str]] = []
    if MOCK_HEADER_NAMES in parameters:
        names = parameters[MOCK_HEADER_NAMES].split(",")
        values = parameters.get(MOCK_HEADER_VALUES, "").split(",")
        headers.extend(zip(names, values))
    if MOCK_CONTENT_TYPE in parameters:
        headers.append(("Content-Type", parameters[MOCK_CONTENT_TYPE]))

    extensions = {}
    if MOCK_STATUS_DESCRIPTION in parameters:
        extensions["reason_phrase"] = parameters[MOCK_STATUS_DESCRIPTION].encode()

    logger.debug(f"Mock transport answering {request.method} {request.url} with {status_code}")
    return httpx.Response(
        status_code,
        headers=headers,
        content=parameters.get(MOCK_CONTENT, "").encode(),
        extensions=extensions,
        request=request,
    )


class MockTransport(httpx.MockTransport):
    r"""Transport serving the canned responses of the mock protocol.

    Works with both ``httpx.Client`` and ``httpx.AsyncClient``.

    Example:
        ```pycon
        >>> import httpx
        >>> from arequest.mock.transport import MockTransport
        >>> with httpx.Client(mounts={"mock://": MockTransport()}) as client:
        ...     response = client.get("mock://api.example.com/a", params={"mockStatusCode": "201"})
        ...
        >>> response.status_code
        201

        ```
    """

    def __init__(self) -> None:
        super().__init__(build_mock_response)
