"""
Database connection and pool management
"""

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional

import asyncpg

logger = logging.getLogger(__name__)


class PoolExhausted(Exception):
    """Raised when no pooled connection became available in time"""


async def _init_connection(conn: asyncpg.Connection):
    """Decode json/jsonb columns into Python objects"""
    for type_name in ("json", "jsonb"):
        await conn.set_type_codec(
            type_name,
            encoder=json.dumps,
            decoder=json.loads,
            schema="pg_catalog",
        )


class Database:
    """
    Owns the asyncpg connection pool.

    Constructed once by the application lifespan and passed to every
    component that needs store access. Transaction boundaries belong to
    the caller once a connection has been acquired.
    """

    def __init__(
        self,
        dsn: str,
        min_size: int = 2,
        max_size: int = 10,
        command_timeout: float = 60,
        acquire_timeout: float = 30,
        ssl: Optional[str] = None,
    ):
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout
        self.acquire_timeout = acquire_timeout
        self.ssl = ssl
        self._pool: Optional[asyncpg.Pool] = None

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(
            settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
            command_timeout=settings.command_timeout,
            acquire_timeout=settings.acquire_timeout,
            ssl=settings.database_ssl,
        )

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("Database pool is not initialized")
        return self._pool

    async def connect(self):
        """Open the connection pool and verify the store is reachable"""
        if self._pool is not None:
            return
        self._pool = await asyncpg.create_pool(
            self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            command_timeout=self.command_timeout,
            statement_cache_size=0,  # Fix for pgbouncer compatibility
            ssl=self.ssl,
            init=_init_connection,
        )

        try:
            async with self.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except Exception:
            await self.close()
            raise

        logger.info("Connected to PostgreSQL database")

    async def close(self):
        """Close the connection pool"""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("Database connections closed")

    async def release(self, conn: asyncpg.Connection):
        await self.pool.release(conn)

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a pooled connection, released on every exit path"""
        try:
            conn = await self.pool.acquire(timeout=self.acquire_timeout)
        except asyncio.TimeoutError as e:
            logger.error(
                f"No database connection available after {self.acquire_timeout}s "
                f"(max_size={self.max_size})"
            )
            raise PoolExhausted("Timed out waiting for a database connection") from e

        try:
            yield conn
        finally:
            await self.release(conn)

    async def query(self, sql: str, *args: Any) -> List[asyncpg.Record]:
        """Run a single statement on a short-lived connection"""
        async with self.acquire() as conn:
            return await conn.fetch(sql, *args)
