"""Issue and read the double-submit cookie pair."""

from __future__ import annotations

from urllib.parse import unquote

from starlette.requests import HTTPConnection
from starlette.responses import Response

from csrfguard.config import Settings
from csrfguard.services.transport import is_secure_request


def parse_cookie_header(header: str | None, name: str) -> str | None:
    if not header:
        return None
    for pair in header.split(";"):
        key, sep, value = pair.strip().partition("=")
        if sep and key.strip() == name:
            return unquote(value.strip())
    return None


def read_cookie(request: HTTPConnection, name: str) -> str | None:
    return parse_cookie_header(request.headers.get("cookie"), name)


def _drop_set_cookie(response: Response, name: str) -> None:
    prefix = f"{name}=".encode("latin-1")
    response.raw_headers[:] = [
        (key, value)
        for key, value in response.raw_headers
        if not (key == b"set-cookie" and value.startswith(prefix))
    ]


def issue_cookies(request: HTTPConnection, response: Response, token: str, settings: Settings) -> None:
    """Write the secret (HttpOnly) and readable cookies carrying ``token``.

    Both cookies share every attribute except ``httponly``. Any earlier
    ``Set-Cookie`` for either name on this response is replaced, so repeated
    calls leave exactly one pair behind.
    """
    secure = is_secure_request(request, trust_forwarded=settings.trust_forwarded_proto)
    for name, httponly in (
        (settings.csrf_cookie_name, True),
        (settings.csrf_readable_cookie_name, False),
    ):
        _drop_set_cookie(response, name)
        response.set_cookie(
            name,
            token,
            max_age=settings.csrf_cookie_max_age,
            path="/",
            secure=secure,
            httponly=httponly,
            samesite="lax",
        )
