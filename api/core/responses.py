"""
Response bodies shared by every endpoint.

Each handler exit is exactly one of the models below or one defined in a
feature's `schemas` module.
"""

from __future__ import annotations

from fastapi.responses import JSONResponse
from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    detail: str | None = None


def json_response(status_code: int, body: BaseModel) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))
