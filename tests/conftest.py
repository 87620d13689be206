"""Shared fixtures: in-process ASGI client backed by an in-memory user store.

Invariants:
    - The app lifespan is not run, so no database is contacted
    - get_user_repository is overridden with FakeUserRepository
    - FakeUserRepository assigns sequential ids starting at 1
"""

from __future__ import annotations

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from main import create_app
from users.dependencies import get_user_repository


class FakeUserRepository:
    """Stands in for UserRepository; can be told to fail or stall."""

    def __init__(self) -> None:
        self.rows: dict[int, dict] = {}
        self.calls: list[tuple] = []
        self.error: Exception | None = None
        self.delay_s = 0.0
        self.cancelled = False
        self._next_id = 1

    async def _before_statement(self) -> None:
        if self.delay_s:
            try:
                await asyncio.sleep(self.delay_s)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error is not None:
            raise self.error

    async def create_user(self, *, username: str, email: str) -> int:
        self.calls.append(("create_user", username, email))
        await self._before_statement()
        user_id = self._next_id
        self._next_id += 1
        self.rows[user_id] = {"user_id": user_id, "username": username, "email": email}
        return user_id

    async def get_user(self, user_id: int) -> dict | None:
        self.calls.append(("get_user", user_id))
        await self._before_statement()
        return self.rows.get(user_id)


@pytest.fixture
def fake_repo():
    return FakeUserRepository()


@pytest.fixture
def app(fake_repo):
    app = create_app()
    app.dependency_overrides[get_user_repository] = lambda: fake_repo
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
