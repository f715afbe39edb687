# =============================================================================
# app/controllers/apps.py - App Catalog Controller
# =============================================================================

import logging

from app.dependencies import CatalogDep
from core.models.catalog import AppList

logger = logging.getLogger(__name__)


def get_all_apps(catalog: CatalogDep) -> AppList:
    """
    List all apps in the catalog.

    Each app reports whether its triggers need a connection.
    """
    apps = catalog.list_apps()
    logger.debug(f"Listing {apps.count} apps")
    return apps
