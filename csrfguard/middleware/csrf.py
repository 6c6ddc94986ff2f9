"""Double-submit cookie CSRF protection for the RPC mutation surface."""

from __future__ import annotations

import logging
import secrets

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from csrfguard.config import Settings, get_settings
from csrfguard.errors import CSRF_ERROR_MESSAGES, CsrfErrorCode
from csrfguard.models.schemas import ErrorDetail, ErrorResponse
from csrfguard.services.cookies import issue_cookies, read_cookie
from csrfguard.services.operations import is_exempt_operation, is_under_prefix
from csrfguard.services.tokens import generate_token

logger = logging.getLogger(__name__)

_SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}


def tokens_match(cookie_token: str, header_token: str) -> bool:
    cookie_bytes = cookie_token.encode("utf-8")
    header_bytes = header_token.encode("utf-8")
    # Token length is public; only the content needs a constant-time check
    if len(cookie_bytes) != len(header_bytes):
        return False
    return secrets.compare_digest(cookie_bytes, header_bytes)


def csrf_error_response(code: CsrfErrorCode) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(message=CSRF_ERROR_MESSAGES[code], code=code.value))
    return JSONResponse(body.model_dump(), status_code=403)


class CSRFMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, settings: Settings | None = None) -> None:
        super().__init__(app)
        self.settings = settings or get_settings()

    def _check(self, request: Request, cookie_token: str | None) -> CsrfErrorCode | None:
        if request.method in _SAFE_METHODS:
            return None
        if not is_under_prefix(request.url.path, self.settings.csrf_guarded_prefix):
            return None

        header_token = request.headers.get(self.settings.csrf_header_name)
        if not cookie_token or not header_token:
            return CsrfErrorCode.MISSING
        if not tokens_match(cookie_token, header_token):
            return CsrfErrorCode.INVALID
        return None

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        settings = self.settings
        if request.url.path.rstrip("/") == settings.csrf_token_path.rstrip("/"):
            return await call_next(request)

        cookie_token = read_cookie(request, settings.csrf_cookie_name)
        minted: str | None = None
        bootstrap = False
        if not cookie_token:
            minted = generate_token()
            bootstrap = request.method in _SAFE_METHODS or is_exempt_operation(
                request.url.path,
                settings.csrf_guarded_prefix,
                settings.csrf_exempt_operations,
            )

        code = None if bootstrap else self._check(request, cookie_token)
        if code is not None:
            logger.warning("CSRF rejection %s on %s %s", code.value, request.method, request.url.path)
            response: Response = csrf_error_response(code)
        else:
            response = await call_next(request)

        if minted is not None:
            issue_cookies(request, response, minted, settings)
        return response
