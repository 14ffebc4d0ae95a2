from __future__ import annotations

import httpx

from arequest.credentials import BasicCredentials, query_for
from arequest.query.httpx_query import HttpxQuery
from arequest.request import Request
from tests.helpers import TEST_URL, FakeCredentials, FakeQuery

#####################################
#     Tests for BasicCredentials    #
#####################################


def test_basic_credentials_query() -> None:
    query = BasicCredentials("user", "secret").query_for(TEST_URL, Request(), "meta", "GET")

    assert isinstance(query, HttpxQuery)
    assert isinstance(query.auth, httpx.BasicAuth)
    assert query.info == "meta"


##############################
#     Tests for query_for    #
##############################


def test_query_for_without_credentials() -> None:
    query = query_for(None, TEST_URL, Request(), "meta", "GET")

    assert isinstance(query, HttpxQuery)
    assert query.auth is None
    assert query.info == "meta"


def test_query_for_with_credentials() -> None:
    fake = FakeQuery()
    credentials = FakeCredentials(fake)
    request = Request()

    assert query_for(credentials, TEST_URL, request, "meta", "POST") is fake
    assert credentials.calls == [(TEST_URL, request, "meta", "POST")]
