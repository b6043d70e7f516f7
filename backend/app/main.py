"""
FastAPI application entry point.

Uses structured logging from zencure.logging.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from zencure.config import get_settings
from zencure.db import db
from zencure.logging import RequestLoggingMiddleware, api_logger, configure_logging

from .dependencies import STATS_STALE_HEADER
from .error_handlers import register_exception_handlers
from .middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from .routers import admin as admin_router
from .routers import auth as auth_router
from .routers import comments as comments_router
from .routers import remedies as remedies_router
from .routers import reviews as reviews_router

settings = get_settings()
configure_logging("DEBUG" if settings.debug else None)
logger = api_logger


def log_config_problems() -> None:
    """Log production configuration errors and warnings without stopping startup."""
    errors, warnings = settings.validate_production_config()
    for error in errors:
        logger.error("config_error", message=error)
    for warning in warnings:
        logger.warning("config_warning", message=warning)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("app_startup", app_name=settings.app_name)
    log_config_problems()

    db.initialize(settings.database_url)
    health = db.health_check()
    if health["healthy"]:
        logger.info("database_initialized", latency_ms=health["latency_ms"])
    else:
        logger.error("database_unreachable", error=health["error"])

    yield

    logger.info("app_shutdown")


def create_app() -> FastAPI:
    api_prefix = f"{settings.api_prefix}/v1"

    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
            REQUEST_ID_HEADER,
        ],
        expose_headers=[REQUEST_ID_HEADER, STATS_STALE_HEADER],
    )

    # Added last runs first: request ids are assigned before request logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    def health_check():
        """Liveness check."""
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """
        Readiness check.

        Returns 200 when the database answers, 503 otherwise.
        """
        health = db.health_check()
        checks = {"database": health["healthy"]}
        if not health["healthy"]:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "checks": checks},
            )
        return {"status": "ready", "checks": checks}

    for module in (auth_router, remedies_router, reviews_router, comments_router, admin_router):
        app.include_router(module.router, prefix=api_prefix)

    return app


app = create_app()
