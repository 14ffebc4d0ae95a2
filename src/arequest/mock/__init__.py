r"""Redirection of requests declaring expectations to a mock transport."""

from __future__ import annotations

__all__ = ["MockTransport", "build_mock_request_url", "build_mock_response"]

from arequest.mock.redirector import build_mock_request_url
from arequest.mock.transport import MockTransport, build_mock_response
