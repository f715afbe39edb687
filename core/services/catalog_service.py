# =============================================================================
# core/services/catalog_service.py - Catalog Business Logic
# =============================================================================
# Handles app and trigger lookups for the v1 controllers.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.catalog import (
    AppList,
    AppResponse,
    ConnectionRequirement,
    TriggerList,
    TriggerResponse,
)
from app.exceptions import (
    AppNotFoundError,
    CatalogUnavailableError,
    TriggerNotFoundError,
)

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Service for catalog read operations.

    Provides a clean interface between API controllers and database.
    Storage failures are reported as CatalogUnavailableError.

    Example:
        catalog = CatalogService(SupabaseClient(settings))
        apps = catalog.list_apps()
    """

    def __init__(self, supabase: SupabaseClient):
        self.supabase = supabase

    def list_apps(self) -> AppList:
        """Return every app in the catalog."""
        try:
            rows = self.supabase.fetch_apps()
        except SupabaseClientError as e:
            logger.error(f"Failed to list apps: {e}")
            raise CatalogUnavailableError(e.message) from e

        apps = [AppResponse(**row) for row in rows]
        return AppList(items=apps, count=len(apps))

    def get_app(self, app_id: str) -> AppResponse:
        """
        Get an app by ID.

        Raises:
            AppNotFoundError: If the app doesn't exist
        """
        try:
            row = self.supabase.fetch_app(app_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch app {app_id}: {e}")
            raise CatalogUnavailableError(e.message) from e

        if not row:
            raise AppNotFoundError(app_id)

        return AppResponse(**row)

    def list_app_triggers(self, app_id: str) -> TriggerList:
        """
        Get the triggers an app exposes.

        An app with no triggers yields an empty list; an unknown app is a 404.

        Raises:
            AppNotFoundError: If the app doesn't exist
        """
        self.get_app(app_id)

        try:
            rows = self.supabase.fetch_app_triggers(app_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to list triggers for app {app_id}: {e}")
            raise CatalogUnavailableError(e.message) from e

        triggers = [TriggerResponse(**row) for row in rows]
        return TriggerList(app_id=app_id, items=triggers, count=len(triggers))

    def is_connection_required(self, key: str) -> ConnectionRequirement:
        """
        Decide whether the trigger identified by key needs a connection.

        The trigger's own requires_connection flag wins when set;
        otherwise the owning app's auth_type decides.

        Raises:
            TriggerNotFoundError: If no trigger has this key
            AppNotFoundError: If the trigger's app is missing
        """
        try:
            row = self.supabase.fetch_trigger_by_key(key)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch trigger {key}: {e}")
            raise CatalogUnavailableError(e.message) from e

        if not row:
            raise TriggerNotFoundError(key)

        trigger = TriggerResponse(**row)

        if trigger.requires_connection is not None:
            required = trigger.requires_connection
        else:
            required = self.get_app(trigger.app_id).requires_connection

        logger.debug(f"Trigger {key} connection_required={required}")
        return ConnectionRequirement(
            key=trigger.key,
            app_id=trigger.app_id,
            connection_required=required,
        )
