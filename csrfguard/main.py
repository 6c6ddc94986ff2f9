from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from csrfguard.config import get_settings
from csrfguard.middleware.csrf import CSRFMiddleware
from csrfguard.middleware.error_handler import generic_exception_handler
from csrfguard.routers import csrf_router


def configure_logging() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logging.getLogger(__name__).info(
        "CSRF guard active on %s (token endpoint %s)",
        app.state.settings.csrf_guarded_prefix,
        app.state.settings.csrf_token_path,
    )
    yield


settings = get_settings()

app = FastAPI(title="csrfguard", version="1.0.0", lifespan=lifespan)
app.state.settings = settings
app.add_middleware(CSRFMiddleware, settings=settings)
app.add_exception_handler(Exception, generic_exception_handler)

app.include_router(csrf_router, prefix=settings.csrf_token_path)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
