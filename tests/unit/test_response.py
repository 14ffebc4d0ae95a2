from __future__ import annotations

import pytest

from arequest.core.resolver import RequestConfig
from arequest.exceptions import DeserializationError
from arequest.request import Request
from arequest.response import Response, build_response
from arequest.result import Result
from tests.helpers import FailingDeserializer, JsonDeserializer, User, create_failure

BODY = '{"id": 1, "name": "Ada"}'

###################################
#     Tests for build_response    #
###################################


def test_build_response_copies_result_fields() -> None:
    result = Result(
        status_code=201,
        status_description="Created",
        content="done",
        content_type="text/plain",
        content_length=4,
        response_uri="https://api.example.com/data",
    )
    response = build_response(result, Request(), RequestConfig())

    assert response == Response(
        status_code=201,
        status_description="Created",
        content="done",
        content_type="text/plain",
        content_length=4,
        response_uri="https://api.example.com/data",
        result=result,
    )
    assert response.error is None


def test_build_response_exposes_error() -> None:
    result = create_failure(503)
    response = build_response(result, Request(), RequestConfig())

    assert response.error is result.error
    assert response.status_code == 503


def test_build_response_response_type() -> None:
    response = build_response(
        Result(status_code=200, content=BODY),
        Request(),
        RequestConfig(deserializer=JsonDeserializer()),
        response_type=User,
    )

    assert response.content_entity == User(1, "Ada")


def test_build_response_request_entity_type() -> None:
    response = build_response(
        Result(status_code=200, content=BODY),
        Request(response_entity_type=User),
        RequestConfig(deserializer=JsonDeserializer()),
    )

    assert response.content_entity == User(1, "Ada")


def test_build_response_without_entity_type() -> None:
    response = build_response(
        Result(status_code=200, content=BODY), Request(), RequestConfig(deserializer=JsonDeserializer())
    )

    assert response.content_entity is None


def test_build_response_without_deserializer() -> None:
    response = build_response(Result(status_code=200, content=BODY), Request(), RequestConfig(), User)

    assert response.content_entity is None


@pytest.mark.parametrize("content", ["", "  \n"])
def test_build_response_blank_content(content: str) -> None:
    response = build_response(
        Result(status_code=200, content=content),
        Request(),
        RequestConfig(deserializer=FailingDeserializer()),
        User,
    )

    assert response.content_entity is None


def test_build_response_deserialization_error() -> None:
    with pytest.raises(DeserializationError, match=r"into User: invalid body") as info:
        build_response(
            Result(status_code=200, content="oops"),
            Request(),
            RequestConfig(deserializer=FailingDeserializer()),
            User,
        )

    assert info.value.content == "oops"
    assert info.value.entity_type is User
    assert isinstance(info.value.__cause__, ValueError)


def test_response_error_without_result() -> None:
    assert Response().error is None
