"""
QA Testing Backend API Server
Core functionality: store, list and delete QA test submissions
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from qa_backend.api.routes import health, submissions
from qa_backend.config.settings import APP_NAME, APP_VERSION, Settings, get_settings
from qa_backend.database.connection import Database
from qa_backend.database.schema import ensure_schema
from qa_backend.middleware.body_limit import BodySizeLimitMiddleware
from qa_backend.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager

    Connectivity and schema failures propagate so the server never
    starts accepting traffic without a usable database.
    """
    settings: Settings = app.state.settings
    settings.validate()

    database = Database.from_settings(settings)
    try:
        await database.connect()
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        raise

    try:
        await ensure_schema(database)
    except Exception:
        await database.close()
        raise

    app.state.database = database
    logger.info(f"Environment: {settings.environment}, CORS origins: {settings.allowed_origins}")

    yield

    await database.close()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application"""
    settings = settings or get_settings()

    app = FastAPI(
        title=APP_NAME,
        description="Backend API for QA test submissions",
        version=APP_VERSION,
        lifespan=lifespan
    )
    app.state.settings = settings

    # Setup centralized error handling
    setup_error_handling(app)

    # Checked before the request body is read for error logging
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.max_body_size)

    # CORS allow-list depends on the environment
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(submissions.router, prefix="/api/submissions", tags=["Submissions"])

    return app


# FastAPI app instance is exported for use by uvicorn
app = create_app()
