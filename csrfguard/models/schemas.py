from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CsrfTokenResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    csrf_token: str = Field(alias="csrfToken")


class ErrorDetail(BaseModel):
    message: str
    code: str


class ErrorResponse(BaseModel):
    error: ErrorDetail
