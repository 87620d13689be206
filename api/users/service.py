"""
User business logic.

Each operation validates its input, issues exactly one statement through the
repository inside the request scope, and maps the outcome to a response
model or an `ApiError`.
"""

from __future__ import annotations

import logging
from typing import Awaitable, TypeVar

from fastapi import status
from pydantic import ValidationError

from core.errors import ApiError
from core.request_scope import RequestScope

from . import paths, schemas
from .repository import UserRepository

USER_CREATED_MESSAGE = "User created successfully"

T = TypeVar("T")

logger = logging.getLogger(__name__)


def parse_create_request(raw_body: bytes) -> schemas.CreateUserRequest:
    try:
        return schemas.CreateUserRequest.model_validate_json(raw_body)
    except ValidationError as exc:
        logger.debug("create_user_rejected reason=invalid_json errors=%s", exc.error_count())
        raise ApiError(status.HTTP_400_BAD_REQUEST, "invalid JSON") from exc


async def _run_statement(scope: RequestScope, op: str, work: Awaitable[T]) -> T:
    try:
        return await scope.run(work)
    except Exception as exc:
        logger.warning("database_error op=%s detail=%s", op, exc)
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Database error",
            detail=str(exc),
        ) from exc


async def create_user(
    raw_body: bytes,
    *,
    repository: UserRepository,
    scope: RequestScope,
) -> schemas.UserCreatedResponse:
    payload = parse_create_request(raw_body)

    username = payload.username or ""
    email = payload.email or ""
    if not username.strip() or not email.strip():
        logger.debug("create_user_rejected reason=missing_fields")
        raise ApiError(status.HTTP_400_BAD_REQUEST, "username and email are required")

    user_id = await _run_statement(
        scope,
        "create_user",
        repository.create_user(username=username, email=email),
    )
    logger.info("user_created user_id=%s", user_id)
    return schemas.UserCreatedResponse(message=USER_CREATED_MESSAGE, user_id=user_id)


async def get_user(
    path: str,
    *,
    repository: UserRepository,
    scope: RequestScope,
) -> schemas.UserResponse:
    match = paths.match_prefix(path, paths.USERS_PREFIX)
    user_id = paths.parse_user_id(match.segment) if match.matched else None
    if user_id is None:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid user_id")

    row = await _run_statement(scope, "get_user", repository.get_user(user_id))
    if row is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "User not found")

    return schemas.UserResponse(
        user_id=int(row["user_id"]),
        username=str(row["username"]),
        email=str(row["email"]),
    )
