"""httpx auth hook that attaches the CSRF header and recovers from CSRF rejections."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Any

import httpx

from csrfguard.client.provider import CsrfTokenProvider
from csrfguard.errors import parse_csrf_error

logger = logging.getLogger(__name__)


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class CsrfHeaderAuth(httpx.Auth):
    """Attach ``x-csrf-token`` to every request sent through an ``httpx.AsyncClient``.

    Pass the client's ``cookies`` so the ``Cookie`` header is rebuilt after the
    token lookup: the first requests may wait on the bootstrap that fills the
    jar, and the secret cookie has to travel with the header it matches.
    """

    def __init__(
        self,
        provider: CsrfTokenProvider,
        header_name: str = "x-csrf-token",
        cookies: httpx.Cookies | None = None,
    ) -> None:
        self.provider = provider
        self.header_name = header_name
        self.cookies = cookies

    def sync_auth_flow(self, request: httpx.Request):  # type: ignore[override]
        raise RuntimeError("CsrfHeaderAuth only supports httpx.AsyncClient")

    async def async_auth_flow(self, request: httpx.Request) -> AsyncGenerator[httpx.Request, httpx.Response]:
        token = await self.provider.get_token()
        if token:
            request.headers[self.header_name] = token
        if self.cookies is not None:
            request.headers.pop("cookie", None)
            self.cookies.set_cookie_header(request)

        response = yield request

        if response.status_code == 403:
            await response.aread()
            code = parse_csrf_error(_json_or_none(response))
            if code is not None:
                # The failed request is not resubmitted; the next one gets the fresh token
                logger.info("CSRF rejection %s on %s %s, refreshing token", code.value, request.method, request.url.path)
                self.provider.reset()
