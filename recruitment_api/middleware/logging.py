"""Structured logging setup and per-request log context."""

import logging
import re
import time
import uuid
from typing import Optional

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from recruitment_api.config.settings import settings

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"

# Caller-supplied ids end up in every log line, so keep them short and plain
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def configure_logging(log_level: Optional[str] = None) -> None:
    """Configure structlog for JSON output at the configured level."""
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def resolve_request_id(incoming: Optional[str]) -> str:
    """Reuse the caller's request id when it is safe to log, else mint one."""
    if incoming and _REQUEST_ID_PATTERN.match(incoming):
        return incoming
    return uuid.uuid4().hex


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Bind the request id, method and path to the structlog context.

    Everything logged while the request is handled, including the candidate
    workflow's outcome lines, carries the same ``request_id``. The id is
    echoed back in the ``X-Request-ID`` response header.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Request failed", duration_ms=_elapsed_ms(started))
            raise

        status_code = response.status_code
        if status_code >= 500:
            log = logger.error
        elif status_code >= 400:
            log = logger.warning
        else:
            log = logger.info
        log("Request handled", status_code=status_code, duration_ms=_elapsed_ms(started))

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
