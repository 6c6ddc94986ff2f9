"""Shared test conftest: a minimal RPC app wrapped by the CSRF middleware."""
from __future__ import annotations

from collections.abc import Callable, Iterable
from http.cookies import Morsel, SimpleCookie

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from csrfguard.config import Settings
from csrfguard.middleware.csrf import CSRFMiddleware
from csrfguard.routers import csrf_router


def build_app(settings: Settings) -> FastAPI:
    app = FastAPI()
    app.state.settings = settings
    app.add_middleware(CSRFMiddleware, settings=settings)
    app.include_router(csrf_router, prefix=settings.csrf_token_path)

    @app.api_route("/api/trpc/{operations}", methods=["GET", "HEAD"])
    def rpc_query(operations: str) -> dict[str, str]:
        return {"called": operations}

    @app.options("/api/trpc/{operations}")
    def rpc_preflight(operations: str) -> dict[str, str]:
        return {"called": operations}

    @app.post("/api/trpc/{operations}")
    def rpc_mutation(operations: str) -> dict[str, str]:
        return {"called": operations}

    @app.post("/api/oauth/callback")
    def oauth_callback() -> dict[str, bool]:
        return {"ok": True}

    return app


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def make_app() -> Callable[[Settings], FastAPI]:
    return build_app


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    return build_app(settings)


@pytest.fixture()
def client(app: FastAPI):
    with TestClient(app) as c:
        yield c


def _parse_set_cookies(headers: Iterable[str]) -> dict[str, Morsel]:
    parsed: dict[str, Morsel] = {}
    for header in headers:
        jar: SimpleCookie = SimpleCookie()
        jar.load(header)
        for name, morsel in jar.items():
            parsed[name] = morsel
    return parsed


@pytest.fixture()
def set_cookies() -> Callable[[Iterable[str]], dict[str, Morsel]]:
    """Parse a list of raw ``Set-Cookie`` values into morsels keyed by cookie name."""
    return _parse_set_cookies
