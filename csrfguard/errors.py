"""CSRF rejection codes and the exception tuples used to avoid broad `except Exception` blocks."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

import httpx


class CsrfErrorCode(StrEnum):
    MISSING = "CSRF_TOKEN_MISSING"
    INVALID = "CSRF_TOKEN_INVALID"


CSRF_ERROR_MESSAGES: dict[CsrfErrorCode, str] = {
    CsrfErrorCode.MISSING: "CSRF token missing. Please refresh the page and try again.",
    CsrfErrorCode.INVALID: "CSRF token mismatch. Please refresh the page and try again.",
}

INTERNAL_ERROR_CODE = "INTERNAL_SERVER_ERROR"

# Token bootstrap failures the client treats as transient
CLIENT_RECOVERABLE_ERRORS = (
    httpx.HTTPError,
    httpx.InvalidURL,
    httpx.StreamError,
    httpx.CookieConflict,
    ValueError,
    KeyError,
    TypeError,
)


def parse_csrf_error(payload: Any) -> CsrfErrorCode | None:
    """Return the CSRF code carried by a 403 body, or None for any other body."""
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if not isinstance(error, dict):
        return None
    try:
        return CsrfErrorCode(error.get("code"))
    except ValueError:
        return None
