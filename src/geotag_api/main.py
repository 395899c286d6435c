"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from geotag_api.core.config import get_settings
from geotag_api.core.logging import setup_logging
from geotag_api.lib.geocoder import InternalError
from geotag_api.services.reverse_geocoding_service import build_reverse_geocoder


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifecycle: configure logging and build the geocoder on startup."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)
    app.state.reverse_geocoder = build_reverse_geocoder(settings)

    yield

    stats = app.state.reverse_geocoder.cache_stats()
    logger.info(f"Shutting down with {stats.size} cached reverse geocode entries")
    app.state.reverse_geocoder = None


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Geotag API",
        description="Reverse geocoding of issue report coordinates via OpenStreetMap Nominatim",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.exception_handler(InternalError)
    async def internal_error_handler(request: Request, exc: InternalError) -> JSONResponse:
        logger.error(f"Internal error handling {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error during reverse geocoding."},
        )

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    from geotag_api.api.router import create_router

    app.include_router(create_router(settings))

    return app
