"""
Health check and service metadata routes
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Request

from qa_backend.config.settings import APP_VERSION

router = APIRouter()

@router.get("/health")
async def health_check(request: Request):
    """Liveness check; does not touch the database"""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": request.app.state.settings.environment
    }

@router.get("/")
async def root():
    """Service metadata"""
    return {
        "message": "QA Testing Backend API",
        "version": APP_VERSION,
        "endpoints": {
            "health": "/health",
            "submissions": "/api/submissions"
        }
    }
