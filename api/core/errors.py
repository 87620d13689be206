"""
API error type and the FastAPI exception handlers that render it.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .responses import ErrorResponse, json_response

NOT_FOUND = "Not Found"

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    """
    A failure with a known status code and `{"error": ..., "detail": ...}` body.
    """

    def __init__(self, status_code: int, error: str, *, detail: str | None = None) -> None:
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.detail = detail

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.error, detail=self.detail)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
        return json_response(exc.status_code, exc.to_response())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unrouted paths and unrouted methods on known paths look the same to clients.
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            logger.debug("not_found method=%s path=%s", request.method, request.url.path)
            return json_response(status.HTTP_404_NOT_FOUND, ErrorResponse(error=NOT_FOUND))
        return json_response(exc.status_code, ErrorResponse(error=str(exc.detail)))
