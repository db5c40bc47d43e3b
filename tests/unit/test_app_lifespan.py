"""
Application startup and shutdown
"""

from unittest.mock import AsyncMock, patch

import pytest

from qa_backend.app import create_app, lifespan
from qa_backend.config.settings import Settings
from qa_backend.database.connection import Database


def _has_database(app) -> bool:
    return hasattr(app.state, "database")


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_and_shutdown(self, test_settings):
        app = create_app(test_settings)

        with patch.object(Database, "connect", AsyncMock()) as connect, \
                patch.object(Database, "close", AsyncMock()) as close, \
                patch("qa_backend.app.ensure_schema", AsyncMock()) as schema:
            async with lifespan(app):
                assert isinstance(app.state.database, Database)
                connect.assert_awaited_once()
                schema.assert_awaited_once_with(app.state.database)
                close.assert_not_awaited()

            close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_database_url_aborts_startup(self):
        app = create_app(Settings(database_url=None, environment="test"))

        with patch.object(Database, "connect", AsyncMock()) as connect:
            with pytest.raises(ValueError, match="DATABASE_URL"):
                async with lifespan(app):
                    pass

        connect.assert_not_awaited()
        assert not _has_database(app)

    @pytest.mark.asyncio
    async def test_connect_failure_aborts_startup(self, test_settings):
        app = create_app(test_settings)

        with patch.object(Database, "connect", AsyncMock(side_effect=OSError("connection refused"))), \
                patch("qa_backend.app.ensure_schema", AsyncMock()) as schema:
            with pytest.raises(OSError):
                async with lifespan(app):
                    pass

        schema.assert_not_awaited()
        assert not _has_database(app)

    @pytest.mark.asyncio
    async def test_schema_failure_closes_pool_and_aborts_startup(self, test_settings):
        app = create_app(test_settings)

        with patch.object(Database, "connect", AsyncMock()), \
                patch.object(Database, "close", AsyncMock()) as close, \
                patch("qa_backend.app.ensure_schema", AsyncMock(side_effect=RuntimeError("permission denied"))):
            with pytest.raises(RuntimeError, match="permission denied"):
                async with lifespan(app):
                    pass

        close.assert_awaited_once()
        assert not _has_database(app)
