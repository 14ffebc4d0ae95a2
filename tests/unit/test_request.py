from __future__ import annotations

import pytest

from arequest.request import PostParameter, Request

##################################
#     Tests for PostParameter    #
##################################


def test_post_parameter_field() -> None:
    parameter = PostParameter("name", "value")

    assert not parameter.is_file


def test_post_parameter_file() -> None:
    assert PostParameter("upload", content=b"", file_name="a.txt").is_file


############################
#     Tests for Request    #
############################


def test_request_defaults() -> None:
    request = Request()

    assert request.path == ""
    assert request.method is None
    assert request.headers == {}
    assert not request.expects_mock


@pytest.mark.parametrize(
    "kwargs",
    [
        {"expect_status_code": 200},
        {"expect_status_description": "OK"},
        {"expect_content": "body"},
        {"expect_content_type": "text/plain"},
        {"expect_headers": {"X-A": "1"}},
        {"expect_entity": object()},
    ],
)
def test_request_expects_mock(kwargs: dict) -> None:
    assert Request(**kwargs).expects_mock


@pytest.mark.parametrize(
    "kwargs",
    [{"expect_content": ""}, {"expect_content_type": "  "}, {"expect_status_description": ""}],
)
def test_request_blank_expectations_do_not_mock(kwargs: dict) -> None:
    assert not Request(**kwargs).expects_mock


@pytest.mark.parametrize(
    ("authority", "path", "expected"),
    [
        ("https://api.example.com", "/users", "https://api.example.com/users"),
        ("https://api.example.com/", "users", "https://api.example.com/users"),
        ("https://api.example.com/v1/", "/users", "https://api.example.com/v1/users"),
        ("https://api.example.com", "", "https://api.example.com"),
        (None, "https://other.example.com/x", "https://other.example.com/x"),
        ("https://api.example.com", "http://other.example.com/x", "http://other.example.com/x"),
    ],
)
def test_request_build_endpoint(authority: str | None, path: str, expected: str) -> None:
    assert Request(path=path).build_endpoint(authority) == expected


@pytest.mark.parametrize("authority", [None, ""])
def test_request_build_endpoint_without_authority(authority: str | None) -> None:
    with pytest.raises(ValueError, match=r"without an authority"):
        Request(path="/users").build_endpoint(authority)
