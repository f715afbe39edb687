# =============================================================================
# app/routers/v1.py - API Version 1 Route Table
# =============================================================================
# Mounted at {API_PREFIX}/v1. Each entry binds one method and path to a
# controller; build_router() orders the entries by specificity.
# =============================================================================

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.controllers import (
    check_is_connection_required,
    get_all_apps,
    get_app_triggers,
)
from app.routing import RouteEntry, build_router

GREETING = "Hello World from v1"


async def greeting() -> PlainTextResponse:
    """Plain text greeting for the version root."""
    return PlainTextResponse(GREETING)


ROUTES = [
    RouteEntry("GET", "/", greeting, kwargs={"response_class": PlainTextResponse}),
    RouteEntry("GET", "/apps", get_all_apps),
    RouteEntry("GET", "/triggers/{app_id}", get_app_triggers),
    RouteEntry("GET", "/triggers/connection-required/{key}", check_is_connection_required),
]


def create_router() -> APIRouter:
    """Build a fresh v1 router from ROUTES."""
    return build_router(ROUTES)
