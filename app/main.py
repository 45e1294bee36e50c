"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.router import api_router
from app.config import Settings, settings
from app.core.exceptions import AppException
from app.dependencies import build_repository
from app.middleware.error_handler import (
    app_exception_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.middleware.logging import LoggingMiddleware, configure_logging

configure_logging(settings.log_level, settings.log_format)
logger = structlog.get_logger()

EXCEPTION_HANDLERS = (
    (AppException, app_exception_handler),
    (StarletteHTTPException, http_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (Exception, general_exception_handler),
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Own the repository for the lifetime of the process.

    The repository lives in memory only; whatever it holds at shutdown is
    discarded.
    """
    config: Settings = app.state.settings
    repository = build_repository(config)
    app.state.repository = repository

    logger.info(
        "repository_ready",
        environment=config.environment,
        patients=repository.store.count("patients"),
        workflows=repository.store.count("workflows"),
        strict_references=config.strict_references,
        audit_reads=config.audit_reads,
    )

    yield

    logger.info(
        "repository_discarded",
        patients=repository.store.count("patients"),
        audit_entries=repository.store.count("audit_log"),
    )
    app.state.repository = None


def create_app(config: Settings = settings) -> FastAPI:
    """
    Build the MediFlow application.

    Args:
        config: Settings the repository and middleware are built from

    Returns:
        Configured FastAPI application
    """
    application = FastAPI(
        title=config.app_name,
        version=config.app_version,
        description="Clinical documentation backend: patients, chart records, workflows and audit",
        lifespan=lifespan,
    )
    application.state.settings = config

    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=config.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(LoggingMiddleware)

    for exc_class, handler in EXCEPTION_HANDLERS:
        application.add_exception_handler(exc_class, handler)  # type: ignore[arg-type]

    application.include_router(api_router, prefix=config.api_v1_prefix)

    Instrumentator(excluded_handlers=["/metrics", "/docs", "/redoc", "/openapi.json"]).instrument(
        application
    ).expose(application, endpoint="/metrics", include_in_schema=False)

    @application.get("/", tags=["Root"])
    async def root() -> dict[str, str]:
        """Service name, version and docs location."""
        return {
            "message": f"Welcome to {config.app_name}",
            "version": config.app_version,
            "docs": "/docs",
        }

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )
