"""
Request/response models for user endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CreateUserRequest(BaseModel):
    # Strict: numbers, booleans etc. are not coerced into strings.
    model_config = ConfigDict(strict=True)

    username: str | None = None
    email: str | None = None


class UserCreatedResponse(BaseModel):
    message: str
    user_id: int


class UserResponse(BaseModel):
    user_id: int
    username: str
    email: str
