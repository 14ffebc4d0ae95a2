from __future__ import annotations

import httpx
import pytest

from arequest.mock.transport import MockTransport, build_mock_response

########################################
#     Tests for build_mock_response    #
########################################


def test_build_mock_response_defaults() -> None:
    response = build_mock_response(httpx.Request("GET", "mock://api.example.com/a"))

    assert response.status_code == 200
    assert response.reason_phrase == "OK"
    assert response.text == ""


def test_build_mock_response_from_query_string() -> None:
    request = httpx.Request(
        "GET",
        "mock://api.example.com/a",
        params={
            "mockScheme": "https",
            "mockStatusCode": "418",
            "mockStatusDescription": "Short and stout",
            "mockContent": "tea",
            "mockContentType": "text/plain",
            "mockHeaderNames": "X-A,X-B",
            "mockHeaderValues": "1,2",
        },
    )
    response = build_mock_response(request)

    assert response.status_code == 418
    assert response.reason_phrase == "Short and stout"
    assert response.text == "tea"
    assert response.headers["content-type"] == "text/plain"
    assert response.headers["x-a"] == "1"
    assert response.headers["x-b"] == "2"


def test_build_mock_response_from_form_body() -> None:
    request = httpx.Request(
        "POST",
        "mock://api.example.com/a",
        data={"mockStatusCode": "201", "mockContent": "created", "name": "value"},
    )
    response = build_mock_response(request)

    assert response.status_code == 201
    assert response.text == "created"


##################################
#     Tests for MockTransport    #
##################################


def test_mock_transport_with_client() -> None:
    with httpx.Client(mounts={"mock://": MockTransport()}) as client:
        response = client.get("mock://api.example.com/a", params={"mockStatusCode": "404"})

    assert response.status_code == 404
    assert response.reason_phrase == "Not Found"


@pytest.mark.asyncio
async def test_mock_transport_with_async_client() -> None:
    async with httpx.AsyncClient(mounts={"mock://": MockTransport()}) as client:
        response = await client.get(
            "mock://api.example.com/a", params={"mockContent": "hello", "mockContentType": "text/plain"}
        )

    assert response.status_code == 200
    assert response.text == "hello"
