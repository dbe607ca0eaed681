"""Middleware for the Recruitment API."""

from .error_handler import APIError, ForbiddenError, setup_exception_handlers
from .logging import REQUEST_ID_HEADER, LoggingMiddleware, configure_logging, resolve_request_id

__all__ = [
    "APIError",
    "ForbiddenError",
    "setup_exception_handlers",
    "LoggingMiddleware",
    "configure_logging",
    "resolve_request_id",
    "REQUEST_ID_HEADER",
]
