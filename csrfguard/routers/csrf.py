"""CSRF token bootstrap endpoint, fetched by the client on startup."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from csrfguard.config import Settings
from csrfguard.dependencies import get_app_settings
from csrfguard.models.schemas import CsrfTokenResponse
from csrfguard.services.cookies import issue_cookies, read_cookie
from csrfguard.services.tokens import generate_token

router = APIRouter()


@router.get("", response_model=CsrfTokenResponse)
def csrf_token(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_app_settings),
) -> CsrfTokenResponse:
    """Return the current secret, minting and issuing a new cookie pair only when none exists."""
    token = read_cookie(request, settings.csrf_cookie_name)
    if not token:
        token = generate_token()
        issue_cookies(request, response, token, settings)
    return CsrfTokenResponse(csrfToken=token)
