# =============================================================================
# app/controllers/triggers.py - Trigger Controllers
# =============================================================================
# Path parameters arrive as raw strings; the catalog service decides
# whether they name anything.
# =============================================================================

import logging
from typing import Annotated

from fastapi import Path as PathParam

from app.dependencies import CatalogDep
from core.models.catalog import ConnectionRequirement, TriggerList

logger = logging.getLogger(__name__)


def get_app_triggers(
    app_id: Annotated[str, PathParam(description="App identifier")],
    catalog: CatalogDep,
) -> TriggerList:
    """
    Get the triggers an app exposes.

    Returns 404 APP_NOT_FOUND for an unknown app.
    """
    return catalog.list_app_triggers(app_id)


def check_is_connection_required(
    key: Annotated[str, PathParam(description="Trigger key")],
    catalog: CatalogDep,
) -> ConnectionRequirement:
    """
    Check whether a trigger needs a connected account before it can run.

    Returns 404 TRIGGER_NOT_FOUND for an unknown key.
    """
    result = catalog.is_connection_required(key)
    logger.info(f"Connection check for trigger {key}: {result.connection_required}")
    return result
