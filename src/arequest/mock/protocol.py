r"""Names of the query parameters of the mock protocol.

These names are shared with any existing test-double transport and
must not change.
"""

from __future__ import annotations

__all__ = [
    "MOCK_CONTENT",
    "MOCK_CONTENT_TYPE",
    "MOCK_HEADER_NAMES",
    "MOCK_HEADER_VALUES",
    "MOCK_PARAMETERS",
    "MOCK_SCHEME_PARAMETER",
    "MOCK_STATUS_CODE",
    "MOCK_STATUS_DESCRIPTION",
]

MOCK_SCHEME_PARAMETER = "mockScheme"
MOCK_STATUS_CODE = "mockStatusCode"
MOCK_STATUS_DESCRIPTION = "mockStatusDescription"
MOCK_CONTENT = "mockContent"
MOCK_CONTENT_TYPE = "mockContentType"
MOCK_HEADER_NAMES = "mockHeaderNames"
MOCK_HEADER_VALUES = "mockHeaderValues"

# Sent in the query string of multipart requests, whose body is not decoded
MOCK_PARAMETERS = frozenset(
    {
        MOCK_SCHEME_PARAMETER,
        MOCK_STATUS_CODE,
        MOCK_STATUS_DESCRIPTION,
        MOCK_CONTENT,
        MOCK_CONTENT_TYPE,
        MOCK_HEADER_NAMES,
        MOCK_HEADER_VALUES,
    }
)
