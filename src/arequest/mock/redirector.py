r"""Redirection of requests declaring test expectations to the mock
transport.

The target URL is rewritten to the ``mock`` scheme and the expected
response is smuggled to the mock transport through the query
parameters of the mock protocol.
"""

from __future__ import annotations

__all__ = ["build_mock_request_url"]

import logging
from typing import TYPE_CHECKING

import httpx

from arequest.core.config import DEFAULT_MOCK_CONTENT_TYPE, MOCK_SCHEME
from arequest.mock.protocol import (
    MOCK_CONTENT,
    MOCK_CONTENT_TYPE,
    MOCK_HEADER_NAMES,
    MOCK_HEADER_VALUES,
    MOCK_SCHEME_PARAMETER,
    MOCK_STATUS_CODE,
    MOCK_STATUS_DESCRIPTION,
)
from arequest.mock.transport import MockTransport
from arequest.serialization import serialize_entity
from arequest.utils.text import is_blank

if TYPE_CHECKING:
    from arequest.query.base import BaseQuery
    from arequest.query.registry import TransportRegistry
    from arequest.request import Request
    from arequest.serialization import BaseSerializer

logger: logging.Logger = logging.getLogger(__name__)


def build_mock_request_url(
    request: Request,
    query: BaseQuery,
    url: str,
    registry: TransportRegistry,
    serializer: BaseSerializer | None = None,
) -> str:
    """Rewrite a URL to the mock transport and attach the expectations.

    The mock transport is registered on the registry the first time
    only. The expectations are added to ``query.parameters``.

    Args:
        request: The request declaring the expectations.
        query: The query of the call.
        url: The resolved target URL.
        registry: The transport registry of the client.
        serializer: The resolved serializer, used for ``expect_entity``.

    Returns:
        The rewritten URL.

    Example:
        ```pycon
        >>> from arequest.mock.redirector import build_mock_request_url
        >>> from arequest.query import HttpxQuery, TransportRegistry
        >>> from arequest.request import Request
        >>> query = HttpxQuery()
        >>> build_mock_request_url(
        ...     Request(expect_status_code=404), query, "https://api.example.com/a", TransportRegistry()
        ... )
        'mock://api.example.com/a'
        >>> query.parameters
        {'mockScheme': 'https', 'mockStatusCode': '404', 'mockStatusDescription': 'Not Found'}

        ```
    """
    registry.register(MOCK_SCHEME, MockTransport)
    parameters = query.parameters

    scheme = httpx.URL(url).scheme
    if scheme in ("https", "http"):
        url = f"{MOCK_SCHEME}{url[len(scheme):]}"
        parameters[MOCK_SCHEME_PARAMETER] = scheme

    if request.expect_status_code is not None:
        parameters[MOCK_STATUS_CODE] = str(int(request.expect_status_code))
        if is_blank(request.expect_status_description):
            parameters[MOCK_STATUS_DESCRIPTION] = httpx.codes.get_reason_phrase(
                int(request.expect_status_code)
            )
    if not is_blank(request.expect_status_description):
        parameters[MOCK_STATUS_DESCRIPTION] = request.expect_status_description

    entity = serialize_entity(serializer, request.expect_entity, request.request_entity_type)
    if entity is not None:
        parameters[MOCK_CONTENT] = entity.content
        parameters[MOCK_CONTENT_TYPE] = entity.content_type
    elif not is_blank(request.expect_content):
        parameters[MOCK_CONTENT] = request.expect_content
        parameters[MOCK_CONTENT_TYPE] = (
            request.expect_content_type
            if not is_blank(request.expect_content_type)
            else DEFAULT_MOCK_CONTENT_TYPE
        )
    elif not is_blank(request.expect_content_type):
        parameters[MOCK_CONTENT_TYPE] = request.expect_content_type

    if request.expect_headers:
        parameters[MOCK_HEADER_NAMES] = ",".join(request.expect_headers)
        parameters[MOCK_HEADER_VALUES] = ",".join(request.expect_headers.values())

    logger.debug(f"Redirected request to {url} with {len(parameters)} mock parameters")
    return url
