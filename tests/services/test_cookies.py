from __future__ import annotations

from starlette.requests import Request
from starlette.responses import Response

from csrfguard.config import Settings
from csrfguard.services.cookies import issue_cookies, parse_cookie_header, read_cookie


def _request(scheme: str = "https", cookie: str | None = None) -> Request:
    headers = [(b"cookie", cookie.encode())] if cookie is not None else []
    return Request(
        {
            "type": "http",
            "scheme": scheme,
            "method": "GET",
            "path": "/",
            "query_string": b"",
            "headers": headers,
            "server": ("testserver", 443),
        }
    )


def test_issue_sets_matching_pair(settings: Settings, set_cookies) -> None:
    response = Response()
    issue_cookies(_request("https"), response, "abc123", settings)

    cookies = set_cookies(response.headers.getlist("set-cookie"))
    secret = cookies["__csrf_token"]
    readable = cookies["csrf_token"]

    assert secret.value == readable.value == "abc123"
    assert secret["httponly"] is True
    assert not readable["httponly"]
    for morsel in (secret, readable):
        assert morsel["secure"] is True
        assert morsel["samesite"].lower() == "lax"
        assert morsel["path"] == "/"
        assert morsel["max-age"] == "86400"


def test_issue_over_plain_http_is_not_secure(settings: Settings, set_cookies) -> None:
    response = Response()
    issue_cookies(_request("http"), response, "token", settings)

    cookies = set_cookies(response.headers.getlist("set-cookie"))
    assert not cookies["__csrf_token"]["secure"]
    assert not cookies["csrf_token"]["secure"]


def test_issue_twice_keeps_a_single_pair(settings: Settings, set_cookies) -> None:
    response = Response()
    response.set_cookie("session", "keep-me")
    request = _request("https")

    issue_cookies(request, response, "first", settings)
    issue_cookies(request, response, "first", settings)

    headers = response.headers.getlist("set-cookie")
    assert len(headers) == 3
    cookies = set_cookies(headers)
    assert cookies["session"].value == "keep-me"
    assert cookies["__csrf_token"].value == "first"


def test_parse_cookie_header_edge_cases() -> None:
    assert parse_cookie_header(None, "csrf_token") is None
    assert parse_cookie_header("", "csrf_token") is None
    assert parse_cookie_header("other=1", "csrf_token") is None
    assert parse_cookie_header("  csrf_token=abc ;other=1", "csrf_token") == "abc"
    assert parse_cookie_header("other=1;   csrf_token=abc  ", "csrf_token") == "abc"
    assert parse_cookie_header("flag; csrf_token=abc", "csrf_token") == "abc"


def test_parse_cookie_header_does_not_confuse_prefixed_names() -> None:
    header = "__csrf_token=secret; csrf_token=readable"
    assert parse_cookie_header(header, "csrf_token") == "readable"
    assert parse_cookie_header(header, "__csrf_token") == "secret"


def test_parse_cookie_header_percent_decodes_and_keeps_equals() -> None:
    assert parse_cookie_header("csrf_token=a%20b", "csrf_token") == "a b"
    assert parse_cookie_header("csrf_token=a=b", "csrf_token") == "a=b"


def test_parse_cookie_header_returns_first_match() -> None:
    assert parse_cookie_header("csrf_token=one; csrf_token=two", "csrf_token") == "one"


def test_read_cookie_uses_raw_header() -> None:
    request = _request(cookie="__csrf_token=deadbeef")
    assert read_cookie(request, "__csrf_token") == "deadbeef"
    assert read_cookie(_request(), "__csrf_token") is None
