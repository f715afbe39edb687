# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for the catalog tables in Supabase.
# One instance is created per application (create_app stores it on
# app.state) and lazily opens a single client connection.
# It provides specialized methods for fetching:
# - The app catalog
# - A single app by ID
# - Triggers belonging to an app
# - A trigger by its key
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   supabase = SupabaseClient(settings)
#   apps = supabase.fetch_apps()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import Settings

# Set up logging for this module
logger = logging.getLogger(__name__)

APP_COLUMNS = "id, key, name, description, logo_url, auth_type"
TRIGGER_COLUMNS = "id, key, app_id, name, description, requires_connection"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a code and a suggestion so callers can report what to fix.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for catalog reads.

    Bound to one Settings instance: its URL, key and table names are the
    ones every query uses. The underlying client is created on first use
    and reused afterwards.

    Example:
        supabase = SupabaseClient(settings)
        triggers = supabase.fetch_app_triggers("slack")
        trigger = supabase.fetch_trigger_by_key("slack.new_message")
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client: Client | None = None

    def get_client(self) -> Client:
        """
        Get or create the Supabase client for these settings.

        Uses service_role key which bypasses Row Level Security (RLS).

        Raises:
            SupabaseClientError: If client creation fails
        """
        if self._client is None:
            try:
                self._client = create_client(
                    self.settings.SUPABASE_URL,
                    self.settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                ) from e
        return self._client

    def reset(self) -> None:
        """Drop the cached client so the next call reconnects."""
        self._client = None

    # -------------------------------------------------------------------------
    # Apps
    # -------------------------------------------------------------------------

    def fetch_apps(self) -> list[dict[str, Any]]:
        """
        Fetch every app in the catalog, ordered by name.

        Returns:
            List of app dicts with keys: id, key, name, description,
            logo_url, auth_type

        Raises:
            SupabaseClientError: If query fails
        """
        client = self.get_client()
        table = self.settings.APPS_TABLE

        try:
            response = (
                client.table(table)
                .select(APP_COLUMNS)
                .order("name")
                .execute()
            )
            apps = response.data or []
            logger.debug(f"Fetched {len(apps)} apps")
            return apps

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch apps: {e}",
                code="FETCH_APPS_FAILED",
                suggestion=f"Check that the {table} table exists and is accessible",
            ) from e

    def fetch_app(self, app_id: str) -> dict[str, Any] | None:
        """
        Fetch a single app by ID.

        Returns:
            App dict or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = self.get_client()
        table = self.settings.APPS_TABLE

        try:
            response = (
                client.table(table)
                .select(APP_COLUMNS)
                .eq("id", app_id)
                .limit(1)
                .execute()
            )
            return response.data[0] if response.data else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch app: {e}",
                code="FETCH_APP_FAILED",
                suggestion=f"Check that the {table} table exists and is accessible",
                details={"app_id": app_id}
            ) from e

    # -------------------------------------------------------------------------
    # Triggers
    # -------------------------------------------------------------------------

    def fetch_app_triggers(self, app_id: str) -> list[dict[str, Any]]:
        """
        Fetch the triggers registered for an app, ordered by name.

        Raises:
            SupabaseClientError: If query fails
        """
        client = self.get_client()
        table = self.settings.TRIGGERS_TABLE

        try:
            response = (
                client.table(table)
                .select(TRIGGER_COLUMNS)
                .eq("app_id", app_id)
                .order("name")
                .execute()
            )
            triggers = response.data or []
            logger.debug(f"Fetched {len(triggers)} triggers for app {app_id}")
            return triggers

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch triggers: {e}",
                code="FETCH_TRIGGERS_FAILED",
                suggestion=f"Check that the {table} table exists and is accessible",
                details={"app_id": app_id}
            ) from e

    def fetch_trigger_by_key(self, key: str) -> dict[str, Any] | None:
        """
        Fetch a trigger by its unique key.

        Returns:
            Trigger dict or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = self.get_client()
        table = self.settings.TRIGGERS_TABLE

        try:
            response = (
                client.table(table)
                .select(TRIGGER_COLUMNS)
                .eq("key", key)
                .limit(1)
                .execute()
            )
            return response.data[0] if response.data else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch trigger: {e}",
                code="FETCH_TRIGGER_FAILED",
                suggestion=f"Check that the {table} table exists and is accessible",
                details={"key": key}
            ) from e
