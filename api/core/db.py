"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. FastAPI opens it on startup and closes
it on shutdown (see `api/main.py`); request handlers reach it only through
the repository stored on `app.state`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Pool policy:
- at most 10 connections; idle connections closed after 10 minutes
- every connection is replaced within 30 minutes of being opened
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import asyncpg

POOL_MIN_SIZE = 1
POOL_MAX_SIZE = 10
CONN_MAX_IDLE_S = 10 * 60
CONN_MAX_LIFETIME_S = 30 * 60
CONNECT_TIMEOUT_S = 10.0

logger = logging.getLogger(__name__)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def _expire_periodically(pool: asyncpg.Pool, every_s: float) -> None:
    # asyncpg has no max-lifetime knob; expiring the whole pool on a fixed
    # period bounds every connection's age by `every_s`.
    while True:
        await asyncio.sleep(every_s)
        await pool.expire_connections()
        logger.debug("pool_connections_expired")


class Database:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool
        self._recycler: asyncio.Task | None = None

    @classmethod
    async def connect(
        cls,
        dsn: str,
        *,
        ssl: str = "disable",
        connect_timeout_s: float = CONNECT_TIMEOUT_S,
        max_lifetime_s: float = CONN_MAX_LIFETIME_S,
    ) -> Database:
        """
        Open the pool and verify it with `SELECT 1`.

        Both steps share one `connect_timeout_s` bound. Failure raises; the
        caller is expected to abort startup.
        """
        pool = await asyncio.wait_for(
            asyncpg.create_pool(
                dsn=dsn,
                ssl=ssl,
                min_size=POOL_MIN_SIZE,
                max_size=POOL_MAX_SIZE,
                max_inactive_connection_lifetime=CONN_MAX_IDLE_S,
            ),
            timeout=connect_timeout_s,
        )
        database = cls(pool)
        try:
            await asyncio.wait_for(database.ping(), timeout=connect_timeout_s)
        except BaseException:
            await pool.close()
            raise

        database._recycler = asyncio.create_task(_expire_periodically(pool, max_lifetime_s))
        return database

    @property
    def pool(self) -> asyncpg.Pool:
        return self._pool

    async def ping(self) -> None:
        await self._pool.fetchval("SELECT 1")

    async def close(self) -> None:
        if self._recycler is not None:
            self._recycler.cancel()
            await asyncio.gather(self._recycler, return_exceptions=True)
            self._recycler = None
        await self._pool.close()

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self._pool.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None
