# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - catalog.py: App, trigger and connection requirement schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .catalog import (
    AppList,
    AppResponse,
    AuthType,
    ConnectionRequirement,
    TriggerList,
    TriggerResponse,
)

__all__ = [
    "AppList",
    "AppResponse",
    "AuthType",
    "ConnectionRequirement",
    "TriggerList",
    "TriggerResponse",
]
