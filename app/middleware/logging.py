"""Structured logging setup and per-request log context."""

import logging
import sys
import time
from collections.abc import Callable
from uuid import uuid4

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"
ACTING_USER_HEADER = "X-User-Id"

# Paths polled by probes and scrapers; not worth a log line per hit
QUIET_PATHS = frozenset({"/metrics", "/api/v1/ping", "/api/v1/health"})


def configure_logging(level: str = "INFO", log_format: str = "json") -> None:
    """
    Configure structlog on top of the standard library logger.

    Args:
        level: Log level name, e.g. ``INFO``
        log_format: ``json`` for machine-readable lines, anything else for
            the console renderer
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )


def bind_request_context(request: Request) -> str:
    """
    Reset structlog context for a new request.

    Binds the request ID (taken from the header or generated) and the acting
    user, so repository events such as ``patient_created`` carry both.

    Returns:
        The request ID
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        acting_user=request.headers.get(ACTING_USER_HEADER),
    )
    return request_id


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each request and tag the response with its ID and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        logger = structlog.get_logger()
        request_id = bind_request_context(request)
        path = request.url.path
        quiet = path in QUIET_PATHS
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                path=path,
                error=str(e),
                duration=time.perf_counter() - start_time,
            )
            raise

        duration = time.perf_counter() - start_time
        if not quiet:
            logger.info(
                "request_completed",
                method=request.method,
                path=path,
                status_code=response.status_code,
                duration=duration,
            )

        response.headers["X-Process-Time"] = str(duration)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
