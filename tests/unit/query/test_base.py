from __future__ import annotations

from unittest.mock import Mock

import pytest

from arequest.caching import MemoryCache, NoExpiry
from arequest.request import PostParameter
from arequest.result import Result
from tests.helpers import TEST_URL, FakeQuery, create_failure

##############################
#     Tests for BaseQuery    #
##############################


def test_base_query_defaults() -> None:
    query = FakeQuery(info="meta")

    assert query.info == "meta"
    assert query.method == "GET"
    assert query.headers == {}
    assert query.parameters == {}
    assert query.entity is None
    assert query.transports is None


def test_base_query_request() -> None:
    query = FakeQuery()

    assert query.request(TEST_URL).status_code == 200
    assert query.calls == [("GET", TEST_URL, ())]


def test_base_query_request_multipart() -> None:
    query = FakeQuery()
    parameters = [PostParameter("name", "value")]
    query.request_multipart(TEST_URL, parameters)

    assert query.calls == [("GET", TEST_URL, tuple(parameters))]


def test_base_query_request_cached_stores_success() -> None:
    query = FakeQuery()
    cache = MemoryCache()
    first = query.request_cached(TEST_URL, "key:", cache, NoExpiry())
    second = query.request_cached(TEST_URL, "key:", cache, NoExpiry())

    assert query.attempts == 1
    assert first.content == second.content == "ok"
    assert cache.fetch(f"key:{TEST_URL}") is not None


def test_base_query_request_cached_returns_copy() -> None:
    query = FakeQuery()
    cache = MemoryCache()
    query.request_cached(TEST_URL, "", cache, NoExpiry())
    cached = query.request_cached(TEST_URL, "", cache, NoExpiry())
    cached.previous = Result(status_code=500)

    assert cache.fetch(TEST_URL).previous is None


def test_base_query_request_cached_skips_failures() -> None:
    query = FakeQuery([create_failure(503)])
    cache = MemoryCache()
    query.request_cached(TEST_URL, "", cache, NoExpiry())
    query.request_cached(TEST_URL, "", cache, NoExpiry())

    assert query.attempts == 2
    assert cache.fetch(TEST_URL) is None


def test_base_query_request_cached_uses_cache_collaborator() -> None:
    cache = Mock(fetch=Mock(return_value=Result(status_code=200, content="cached")))
    query = FakeQuery()
    result = query.request_cached(TEST_URL, "k", cache, NoExpiry())

    assert result.content == "cached"
    assert query.attempts == 0
    cache.fetch.assert_called_once_with(f"k{TEST_URL}")
    cache.store.assert_not_called()


@pytest.mark.asyncio
async def test_base_query_request_async() -> None:
    query = FakeQuery()
    result = await query.request_async(TEST_URL)

    assert result.status_code == 200
    assert query.attempts == 1


@pytest.mark.asyncio
async def test_base_query_request_multipart_async() -> None:
    query = FakeQuery()
    parameters = [PostParameter("name", "value")]
    await query.request_multipart_async(TEST_URL, parameters)

    assert query.calls == [("GET", TEST_URL, tuple(parameters))]


@pytest.mark.asyncio
async def test_base_query_request_cached_async() -> None:
    query = FakeQuery()
    cache = MemoryCache()
    await query.request_cached_async(TEST_URL, "", cache, NoExpiry())
    result = await query.request_cached_async(TEST_URL, "", cache, NoExpiry())

    assert query.attempts == 1
    assert result.content == "ok"


@pytest.mark.asyncio
async def test_base_query_request_cached_async_skips_failures() -> None:
    query = FakeQuery([create_failure(500)])
    cache = MemoryCache()
    await query.request_cached_async(TEST_URL, "", cache, NoExpiry())

    assert cache.fetch(TEST_URL) is None
