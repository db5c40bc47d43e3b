"""
Base service layer for database-backed operations
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import asyncpg

from qa_backend.database.connection import Database, PoolExhausted

logger = logging.getLogger(__name__)

@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None

class BaseService:
    """Base service holding the shared database handle"""

    def __init__(self, database: Database):
        self.database = database

    def _failure(self, operation: str, exc: Exception) -> ServiceResult:
        """Log a store failure and translate it into a failed ServiceResult"""
        logger.error(f"{operation} failed: {exc}", exc_info=True)

        if isinstance(exc, PoolExhausted):
            error_type = "POOL_EXHAUSTED"
        elif isinstance(exc, asyncpg.IntegrityConstraintViolationError):
            error_type = "CONSTRAINT_ERROR"
        else:
            error_type = "DATABASE_ERROR"

        return ServiceResult(
            success=False,
            error=f"{operation} failed",
            error_type=error_type
        )
