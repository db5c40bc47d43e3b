"""
FastAPI dependencies for store access
"""

from fastapi import Depends, Request

from qa_backend.database.connection import Database
from qa_backend.services.submissions_service import SubmissionsService


def get_database(request: Request) -> Database:
    """The Database opened by the application lifespan"""
    return request.app.state.database


def get_submissions_service(database: Database = Depends(get_database)) -> SubmissionsService:
    return SubmissionsService(database)
