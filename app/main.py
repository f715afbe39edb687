# =============================================================================
# app/main.py - FastAPI Application Factory
# =============================================================================
# This is the entry point for the catalog gateway.
# create_app() builds a fresh, fully configured application each call:
# middleware pipeline, exception handlers and the API router.
#
# Usage:
#   uvicorn app.main:create_app --factory --reload
#   python -m app
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app import __version__
from app.config import Settings, get_settings
from app.exceptions import GatewayException, gateway_exception_handler
from app.middleware import build_middleware
from app.routers import create_api_router
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging once per process."""
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs startup and shutdown; the gateway holds no other resources.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting catalog gateway in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down catalog gateway")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the gateway application.

    Args:
        settings: Settings to use (defaults to the cached environment settings)

    Returns:
        FastAPI: A new application; nothing is shared between calls
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Catalog Gateway API",
        description="Lists apps, their triggers, and whether a trigger needs a connection.",
        version=__version__,
        lifespan=lifespan,
        middleware=build_middleware(settings),
        exception_handlers={GatewayException: gateway_exception_handler},
    )
    app.state.settings = settings
    app.state.supabase = SupabaseClient(settings)

    app.include_router(create_api_router(), prefix=settings.API_PREFIX)

    return app


def main() -> None:
    """
    Run the gateway with uvicorn.

    Auto-reload follows DEBUG but is never enabled in production.
    """
    settings = get_settings()
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG and not settings.is_production,
    )
