"""
Global exception handling for the application.
Every error leaves the API as the uniform response envelope.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(AppError):
    """Input or business rule violation."""
    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class UnauthorizedException(AppError):
    """Authentication failure error."""
    def __init__(self, message: str = "Unauthorized", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class ForbiddenException(AppError):
    """Authorization failure error."""
    def __init__(self, message: str = "Forbidden", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Entity not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


def error_envelope(error: str, status_code: int, message: Optional[str] = None) -> Dict[str, Any]:
    return {
        "success": False,
        "error": error,
        "message": message or error,
        "statusCode": status_code,
    }


def _log_error(request: Request, status_code: int, name: str, message: str, exc: Exception) -> None:
    if status_code >= 500:
        logger.error(
            f"{name}: {message}",
            method=request.method,
            url=str(request.url),
            headers=dict(request.headers),
            params=dict(request.path_params),
            query=dict(request.query_params),
            exc_info=exc,
        )
    else:
        logger.warning(
            f"{name}: {message}",
            method=request.method,
            url=str(request.url),
            status_code=status_code,
        )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    _log_error(request, exc.status_code, exc.__class__.__name__, exc.message, exc)
    if exc.status_code >= 500:
        body = error_envelope("Internal Server Error", exc.status_code)
    else:
        body = error_envelope(exc.message, exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=body)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg')}" if location else err.get("msg", ""))
    message = "Invalid request data: " + "; ".join(problems) if problems else "Invalid request data"
    _log_error(request, status.HTTP_400_BAD_REQUEST, "ValidationException", message, exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_envelope(message, status.HTTP_400_BAD_REQUEST),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    _log_error(request, exc.status_code, "HTTPException", message, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(message, exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""
    _log_error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, exc.__class__.__name__, str(exc), exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope("Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
