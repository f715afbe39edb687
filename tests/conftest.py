# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Builds an isolated app per test with a mocked catalog service
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# Settings requires the Supabase variables to validate

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.dependencies import get_catalog_service
from app.main import create_app
from core.models.catalog import (
    AppList,
    AppResponse,
    ConnectionRequirement,
    TriggerList,
    TriggerResponse,
)
from core.services.catalog_service import CatalogService


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings with the open CORS policy and default body limit."""
    return Settings(
        SUPABASE_URL="https://test-project.supabase.co",
        SUPABASE_SERVICE_KEY="test-service-key",
        CORS_ORIGINS="*",
    )


@pytest.fixture
def sample_app_rows():
    """Rows as returned by the apps table."""
    return [
        {
            "id": "github",
            "key": "github",
            "name": "GitHub",
            "description": "Code hosting",
            "logo_url": "https://cdn.example.com/github.svg",
            "auth_type": "oauth2",
        },
        {
            "id": "rss",
            "key": "rss",
            "name": "RSS",
            "description": "Feed reader",
            "logo_url": None,
            "auth_type": "none",
        },
    ]


@pytest.fixture
def sample_trigger_rows():
    """Rows as returned by the triggers table."""
    return [
        {
            "id": "t-1",
            "key": "github.new_issue",
            "app_id": "github",
            "name": "New Issue",
            "description": "Fires when an issue is opened",
            "requires_connection": None,
        },
        {
            "id": "t-2",
            "key": "github.public_release",
            "app_id": "github",
            "name": "Public Release",
            "description": None,
            "requires_connection": False,
        },
    ]


@pytest.fixture
def mock_catalog(sample_app_rows, sample_trigger_rows) -> MagicMock:
    """Create a mocked CatalogService with canned answers."""
    catalog = MagicMock(spec=CatalogService)

    apps = [AppResponse(**row) for row in sample_app_rows]
    catalog.list_apps.return_value = AppList(items=apps, count=len(apps))

    triggers = [TriggerResponse(**row) for row in sample_trigger_rows]
    catalog.list_app_triggers.side_effect = lambda app_id: TriggerList(
        app_id=app_id, items=triggers, count=len(triggers)
    )

    catalog.is_connection_required.side_effect = lambda key: ConnectionRequirement(
        key=key, app_id="github", connection_required=True
    )
    return catalog


@pytest.fixture
def app(settings, mock_catalog):
    """A fresh application wired to the mocked catalog."""
    application = create_app(settings)
    application.dependency_overrides[get_catalog_service] = lambda: mock_catalog
    return application


@pytest.fixture
def client(app) -> TestClient:
    """Create a test client for the gateway."""
    return TestClient(app)
