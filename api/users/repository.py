"""
User persistence (raw SQL).
"""

from __future__ import annotations

from core.db import Database


class UserRepository:
    def __init__(self, database: Database) -> None:
        self._database = database

    async def create_user(self, *, username: str, email: str) -> int:
        row = await self._database.fetch_one(
            """
            INSERT INTO users (username, email)
            VALUES ($1, $2)
            RETURNING user_id
            """,
            username,
            email,
        )
        if row is None:
            raise RuntimeError("Failed to create user.")
        return int(row["user_id"])

    async def get_user(self, user_id: int) -> dict | None:
        return await self._database.fetch_one(
            """
            SELECT user_id, username, email
            FROM users
            WHERE user_id = $1
            """,
            user_id,
        )
