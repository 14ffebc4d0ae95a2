r"""Shared fake collaborators for the request engine tests.

This module contains scripted queries, credentials and serializers used
across multiple test files to exercise the engine without network
access.
"""

from __future__ import annotations

__all__ = [
    "TEST_URL",
    "FailingDeserializer",
    "FakeCredentials",
    "FakeQuery",
    "JsonDeserializer",
    "JsonSerializer",
    "User",
    "create_failure",
    "create_timeout_failure",
]

import asyncio
import json
from dataclasses import asdict, dataclass, replace
from typing import TYPE_CHECKING, Any

import httpx

from arequest.credentials import BaseCredentials
from arequest.exceptions import TransportError
from arequest.query.base import BaseQuery
from arequest.result import Result
from arequest.serialization import BaseDeserializer, BaseSerializer

if TYPE_CHECKING:
    from collections.abc import Sequence

    from arequest.request import PostParameter, Request

TEST_URL = "https://api.example.com/data"


@dataclass
class User:
    """Entity used by the serialization tests."""

    id: int
    name: str


def create_failure(status_code: int = 503, url: str = TEST_URL) -> Result:
    """Create the result of an attempt failing with a protocol error."""
    return Result(
        status_code=status_code,
        status_description=httpx.codes.get_reason_phrase(status_code),
        response_uri=url,
        error=TransportError("GET", url, f"failed with status {status_code}", status_code),
    )


def create_timeout_failure(url: str = TEST_URL) -> Result:
    """Create the result of an attempt that timed out."""
    return Result(
        response_uri=url,
        error=TransportError("GET", url, "timed out", cause=httpx.ReadTimeout("timed out")),
    )


class FakeQuery(BaseQuery):
    """Query replaying scripted results.

    The results are replayed in order; the last one is repeated once the
    script is exhausted. Every attempt returns a fresh copy.

    Args:
        results: The scripted results. A single 200 result if omitted.
        info: Opaque metadata.
    """

    def __init__(self, results: Sequence[Result] | None = None, info: Any = None) -> None:
        super().__init__(info)
        self.results = list(results) if results else [Result(status_code=200, content="ok")]
        self.calls: list[tuple[str, str, tuple[PostParameter, ...]]] = []

    @property
    def attempts(self) -> int:
        return len(self.calls)

    def send(self, url: str, post_parameters: Sequence[PostParameter] = ()) -> Result:
        return self._next(url, post_parameters)

    async def send_async(self, url: str, post_parameters: Sequence[PostParameter] = ()) -> Result:
        await asyncio.sleep(0)
        return self._next(url, post_parameters)

    def _next(self, url: str, post_parameters: Sequence[PostParameter]) -> Result:
        self.calls.append((self.method, url, tuple(post_parameters)))
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        return replace(result, previous=None)


class FakeCredentials(BaseCredentials):
    """Credentials handing out a prepared query."""

    def __init__(self, query: BaseQuery) -> None:
        self.query = query
        self.calls: list[tuple[str, Request, Any, str]] = []

    def query_for(self, url: str, request: Request, info: Any, method: str) -> BaseQuery:
        self.calls.append((url, request, info, method))
        return self.query


class JsonSerializer(BaseSerializer):
    content_type = "application/json"

    def serialize(self, entity: Any, entity_type: type | None) -> str:  # noqa: ARG002
        return json.dumps(asdict(entity))


class JsonDeserializer(BaseDeserializer):
    def deserialize(self, content: str, entity_type: type) -> Any:
        return entity_type(**json.loads(content))


class FailingDeserializer(BaseDeserializer):
    def deserialize(self, content: str, entity_type: type) -> Any:  # noqa: ARG002
        msg = "invalid body"
        raise ValueError(msg)
