"""
Live PostgreSQL fixtures; the suite is skipped unless TEST_DATABASE_URL is set
"""

import os

import httpx
import pytest_asyncio

from qa_backend.api.dependencies import get_database
from qa_backend.app import create_app
from qa_backend.config.settings import Settings
from qa_backend.database.connection import Database
from qa_backend.database.schema import TABLE_NAMES, ensure_schema

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")


@pytest_asyncio.fixture
async def database():
    db = Database(TEST_DATABASE_URL, min_size=1, max_size=4, acquire_timeout=10, ssl=None)
    await db.connect()
    await ensure_schema(db)

    async with db.acquire() as conn:
        await conn.execute(f"TRUNCATE {', '.join(TABLE_NAMES)} RESTART IDENTITY CASCADE")

    yield db

    await db.close()


@pytest_asyncio.fixture
async def live_client(database):
    settings = Settings(database_url=TEST_DATABASE_URL, environment="test")
    application = create_app(settings)
    application.dependency_overrides[get_database] = lambda: database

    transport = httpx.ASGITransport(app=application)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
