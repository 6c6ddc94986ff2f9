from __future__ import annotations

from fastapi import Request

from csrfguard.config import Settings


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
