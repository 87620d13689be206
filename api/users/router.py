"""
User API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from core.request_scope import RequestScope, get_request_scope

from . import schemas, service
from .dependencies import get_user_repository
from .repository import UserRepository

router = APIRouter()


@router.post(
    "/users",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.UserCreatedResponse,
)
async def create_user(
    request: Request,
    repository: UserRepository = Depends(get_user_repository),
    scope: RequestScope = Depends(get_request_scope),
) -> schemas.UserCreatedResponse:
    # Body is parsed by hand so malformed input maps to 400, not FastAPI's 422.
    raw_body = await request.body()
    return await service.create_user(raw_body, repository=repository, scope=scope)


@router.get("/users/{user_ref:path}", response_model=schemas.UserResponse)
async def get_user(
    request: Request,
    repository: UserRepository = Depends(get_user_repository),
    scope: RequestScope = Depends(get_request_scope),
) -> schemas.UserResponse:
    return await service.get_user(request.url.path, repository=repository, scope=scope)
