# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into controllers using Depends().
# =============================================================================

from typing import Annotated, Any

from fastapi import Depends, Request

from core.services.catalog_service import CatalogService


def get_catalog_service(request: Request) -> CatalogService:
    """
    Get a catalog service bound to this application's Supabase client.

    The client lives on app.state (see create_app), so the settings given
    to the factory decide which project and tables are queried.
    Tests replace this through app.dependency_overrides.
    """
    return CatalogService(request.app.state.supabase)


def get_json_body(request: Request) -> Any:
    """
    Parsed JSON request body, or None when the request carried none.

    Populated by JSONBodyMiddleware before routing.
    """
    return getattr(request.state, "json_body", None)


# Type aliases for dependency injection
CatalogDep = Annotated[CatalogService, Depends(get_catalog_service)]
JSONBodyDep = Annotated[Any, Depends(get_json_body)]
