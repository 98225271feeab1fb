"""
Main FastAPI application entry point.

Creates the application, registers the RFC 7807 exception handlers and
mounts the versioned API routers under ``settings.api_v1_prefix``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.responses import JSONResponse

from src.core.config import get_settings
from src.core.container import get_database, get_logger
from src.presentation.routers.api.v1 import v1_router
from src.presentation.routers.api.v1.errors import register_exception_handlers

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Startup logs the environment; shutdown disposes the database pool.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    logger.info(
        "Application starting",
        environment=settings.environment.value,
        version=settings.app_version,
    )

    yield

    await get_database().close()
    logger.info("Application stopped")


app = FastAPI(
    title=settings.app_name,
    description="Account authentication and session token service",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Register global exception handlers (RFC 7807 error responses)
register_exception_handlers(app)

app.include_router(v1_router, prefix=settings.api_v1_prefix)


@app.get("/health")
async def health() -> JSONResponse:
    """
    Health check endpoint for monitoring and load balancers.

    Returns:
        JSONResponse: 200 when the database answers, 503 otherwise.
    """
    if await get_database().check_connection():
        return JSONResponse(content={"status": "healthy"})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unhealthy", "database": "unreachable"},
    )


@app.get("/config")
async def get_config() -> JSONResponse:
    """
    Configuration debug endpoint (development only).

    Returns:
        JSONResponse: Configuration details (sanitized).
    """
    if not settings.is_development:
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"detail": "Config endpoint only available in development"},
        )

    return JSONResponse(
        content={
            "environment": settings.environment.value,
            "debug": settings.debug,
            "api": {
                "name": settings.app_name,
                "version": settings.app_version,
                "v1_prefix": settings.api_v1_prefix,
            },
            "database": {
                "url": "<redacted>",
                "echo": settings.db_echo,
            },
            "auth": {
                "access_token_expire_minutes": settings.access_token_expire_minutes,
                "refresh_token_expire_days": settings.refresh_token_expire_days,
                "lockout_threshold": settings.lockout_threshold,
                "lockout_cooldown_minutes": settings.lockout_cooldown_minutes,
            },
        }
    )
