"""
Centralized error handling and structured error logging.
Every error leaves the API as a {"success": false, "error": ...} envelope.
"""

import json
import logging
import traceback
import uuid
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Dict, Optional, Union

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)

class ErrorHandlingConfig:
    """Centralized configuration for error handling behavior"""

    SANITIZE_SENSITIVE_FIELDS = True
    SENSITIVE_FIELD_PATTERNS = [
        'password', 'token', 'key', 'secret', 'authorization',
        'auth', 'cookie', 'credential'
    ]

    LOG_REQUEST_BODIES = True
    MAX_BODY_LOG_SIZE = 5000

    @classmethod
    def is_sensitive_field(cls, field_name: str) -> bool:
        field_lower = field_name.lower()
        return any(pattern in field_lower for pattern in cls.SENSITIVE_FIELD_PATTERNS)

    @classmethod
    def sanitize_data(cls, data: Union[Dict, str, Any]) -> Any:
        """Recursively redact sensitive fields and truncate large strings"""
        if not cls.SANITIZE_SENSITIVE_FIELDS:
            return data

        if isinstance(data, dict):
            return {
                key: "***REDACTED***" if cls.is_sensitive_field(key) else cls.sanitize_data(value)
                for key, value in data.items()
            }
        elif isinstance(data, list):
            return [cls.sanitize_data(item) for item in data]
        elif isinstance(data, str) and len(data) > cls.MAX_BODY_LOG_SIZE:
            return data[:cls.MAX_BODY_LOG_SIZE] + "...[TRUNCATED]"
        else:
            return data

class StructuredLogger:
    """Structured logging with consistent format and context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True
    ) -> str:
        """Log a JSON error entry and return its trace id"""
        trace_id = request_id_var.get('') or str(uuid.uuid4())[:8]

        log_entry = {
            "timestamp": datetime.utcnow().isoformat(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": "ERROR"
        }

        if request:
            headers = dict(request.headers)
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "headers": ErrorHandlingConfig.sanitize_data(headers),
                "client_ip": request.client.host if request.client else None,
            }

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception),
            }
            if include_traceback:
                log_entry["exception"]["traceback"] = "".join(
                    traceback.format_exception(type(exception), exception, exception.__traceback__)
                )

        if extra_context:
            log_entry["context"] = ErrorHandlingConfig.sanitize_data(extra_context)

        logger.error(json.dumps(log_entry, indent=2, default=str))
        return trace_id

def _captured_body(request: Request) -> Optional[str]:
    body = getattr(request.state, 'captured_body', None)
    if not body:
        return None
    try:
        return ErrorHandlingConfig.sanitize_data(body.decode('utf-8'))
    except UnicodeDecodeError:
        return "DECODE_ERROR"

def error_response(status_code: int, error: str, **extra: Any) -> JSONResponse:
    content = {"success": False, "error": error}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assigns a trace id to every request and keeps the body for error logs"""

    async def dispatch(self, request: Request, call_next):
        trace_id = str(uuid.uuid4())[:8]
        request_id_var.set(trace_id)

        body = None
        if ErrorHandlingConfig.LOG_REQUEST_BODIES and request.method in ("POST", "PUT", "PATCH"):
            body = await request.body()

        request.state.captured_body = body
        request.state.trace_id = trace_id

        response = await call_next(request)
        response.headers["X-Trace-ID"] = trace_id
        return response

# Global exception handlers
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """404s and other HTTP errors"""
    if exc.status_code == 404:
        return error_response(404, "Endpoint not found")

    if exc.status_code >= 500:
        StructuredLogger.log_error(
            f"http_{exc.status_code}",
            f"HTTP {exc.status_code}: {exc.detail}",
            request=request,
            exception=exc,
            extra_context={"request_body": _captured_body(request)},
            include_traceback=False
        )

    response = error_response(exc.status_code, str(exc.detail))
    if getattr(exc, "headers", None):
        response.headers.update(exc.headers)
    return response

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request payloads (HTTP 422)"""
    validation_details = [
        {
            "field": " -> ".join(str(loc) for loc in error.get("loc", [])),
            "message": error.get("msg", "Unknown validation error"),
            "type": error.get("type", "unknown"),
        }
        for error in exc.errors()
    ]

    logger.warning(
        f"Request validation failed on {request.method} {request.url.path}: "
        f"{len(validation_details)} errors"
    )

    return error_response(422, "Invalid request payload", details=validation_details)

async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything a route didn't handle; no internal detail is exposed"""
    StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {str(exc)}",
        request=request,
        exception=exc,
        extra_context={"request_body": _captured_body(request)},
    )
    return error_response(500, "Internal server error")

def setup_error_handling(app):
    """Register request context middleware and exception handlers"""
    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling initialized")
