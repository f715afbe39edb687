# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains the API surface mounted under API_PREFIX:
# - v1.py: Version 1 route table (apps, triggers, connection checks)
# - health.py: Health check endpoints
#
# create_api_router() assembles them; main.py mounts the result.
# =============================================================================

from fastapi import APIRouter

from . import health
from . import v1


def create_api_router() -> APIRouter:
    """
    Assemble every API version plus health checks into one router.

    Layout (relative to API_PREFIX):
        /v1/...     versioned API
        /health...  health checks
    """
    api_router = APIRouter()
    api_router.include_router(v1.create_router(), prefix="/v1", tags=["v1"])
    api_router.include_router(health.router, tags=["Health"])
    return api_router


__all__ = [
    "create_api_router",
    "health",
    "v1",
]
