"""Global exception handler that avoids leaking internal details."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import HTMLResponse, JSONResponse

from csrfguard.errors import INTERNAL_ERROR_CODE
from csrfguard.models.schemas import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


async def generic_exception_handler(request: Request, exc: Exception) -> HTMLResponse | JSONResponse:
    logger.exception("Unhandled exception on %s %s: %s", request.method, request.url.path, exc)

    if request.url.path.startswith("/api/"):
        body = ErrorResponse(
            error=ErrorDetail(message="An internal error occurred. Please try again.", code=INTERNAL_ERROR_CODE)
        )
        return JSONResponse(content=body.model_dump(), status_code=500)

    return HTMLResponse(
        content="<h1>Something went wrong</h1><p>Please try again or go back to the <a href='/'>home page</a>.</p>",
        status_code=500,
    )
