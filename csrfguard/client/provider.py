"""Client-side CSRF token provider.

One provider instance is shared by everything that sends mutations through
the same cookie jar. It bootstraps the cookie pair from the token endpoint as
soon as it is created, joins concurrent callers onto a single in-flight fetch,
and always prefers the live readable cookie over its own cache so a token
changed by the server is picked up on the very next request.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from urllib.parse import unquote

import httpx

from csrfguard.errors import CLIENT_RECOVERABLE_ERRORS

logger = logging.getLogger(__name__)

TokenFetcher = Callable[[], Awaitable[str]]
CookieReader = Callable[[], str | None]


class HttpTokenFetcher:
    def __init__(self, client: httpx.AsyncClient, path: str = "/api/csrf-token") -> None:
        self._client = client
        self._path = path

    async def __call__(self) -> str:
        # auth=None: the bootstrap GET must not wait on the provider it feeds
        response = await self._client.get(self._path, auth=None)
        response.raise_for_status()
        return str(response.json()["csrfToken"])


def jar_cookie_reader(client: httpx.AsyncClient, name: str = "csrf_token") -> CookieReader:
    """Read ``name`` from the client's cookie jar, first match wins."""

    def read() -> str | None:
        for cookie in client.cookies.jar:
            if cookie.name == name and cookie.value:
                return unquote(cookie.value)
        return None

    return read


class CsrfTokenProvider:
    def __init__(self, fetch_token: TokenFetcher, read_cookie: CookieReader, *, eager: bool = True) -> None:
        self._fetch_token = fetch_token
        self._read_cookie = read_cookie
        self._inflight: asyncio.Task[str] | None = None
        self._bootstrap_token: str | None = None
        self._tasks: set[asyncio.Task[str]] = set()
        if eager:
            self.bootstrap()

    @property
    def bootstrap_token(self) -> str | None:
        return self._bootstrap_token

    @property
    def bootstrapping(self) -> bool:
        return self._inflight is not None

    def bootstrap(self) -> asyncio.Task[str]:
        """Start the token fetch, or return the one already in flight.

        Must be called from a running event loop.
        """
        if self._inflight is None:
            task = asyncio.get_running_loop().create_task(self._run_bootstrap())
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            self._inflight = task
        return self._inflight

    async def _run_bootstrap(self) -> str:
        task = asyncio.current_task()
        token = ""
        try:
            token = await self._fetch_token()
        except CLIENT_RECOVERABLE_ERRORS as exc:
            logger.warning("CSRF token bootstrap failed: %s", exc)
        finally:
            # A reset() while we were fetching owns the state now
            if self._inflight is task:
                self._inflight = None
                if token:
                    self._bootstrap_token = token
        return token

    async def get_token(self) -> str:
        token = self._read_cookie()
        if token:
            return token

        if self._bootstrap_token is None:
            await asyncio.shield(self.bootstrap())
            token = self._read_cookie()
            if token:
                return token

        return self._bootstrap_token or ""

    def reset(self) -> None:
        """Forget the cached token and start a fresh bootstrap.

        An outstanding fetch is left to finish on its own; its result is ignored.
        """
        self._bootstrap_token = None
        self._inflight = None
        self.bootstrap()
