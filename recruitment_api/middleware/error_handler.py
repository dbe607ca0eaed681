"""Global exception handlers for the API.

Every error response uses the ``{"message": ..., "errors": [...]}`` body,
with ``errors`` present only for itemized validation failures.
"""

from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from recruitment_api.schemas.candidates import describe_validation_errors

logger = structlog.get_logger()


def error_body(message: str, errors: Optional[list[str]] = None) -> dict:
    """Build the standard error response body."""
    body = {"message": message}
    if errors:
        body["errors"] = errors
    return body


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        errors: Optional[list[str]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)


class ForbiddenError(APIError):
    """Access forbidden."""

    def __init__(self, message: str = "You don't have permission to access this resource"):
        super().__init__(message=message, status_code=403)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        """Handle custom API errors."""
        logger.warning(
            "API error",
            status_code=exc.status_code,
            message=exc.message,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.errors),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Handle request validation errors with itemized messages."""
        messages = describe_validation_errors(exc.errors())

        logger.warning(
            "Validation error",
            errors=messages,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=400,
            content=error_body("Validation failed", messages),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Handle database errors."""
        logger.error(
            "Database error",
            error=str(exc),
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content=error_body("A database error occurred"),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected errors."""
        logger.exception(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content=error_body("An unexpected error occurred"),
        )
