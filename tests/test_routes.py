# =============================================================================
# tests/test_routes.py - Gateway HTTP Tests
# =============================================================================
# End-to-end tests through the full middleware pipeline and v1 router,
# with the catalog service mocked out.
#
# Run with: pytest tests/test_routes.py -v
# =============================================================================

from app.exceptions import AppNotFoundError, CatalogUnavailableError, TriggerNotFoundError

ORIGIN = {"Origin": "https://frontend.example.com"}


# =============================================================================
# Greeting
# =============================================================================

class TestGreeting:
    """GET /api/v1/"""

    def test_returns_plain_text_greeting(self, client):
        response = client.get("/api/v1/")

        assert response.status_code == 200
        assert response.text == "Hello World from v1"
        assert response.headers["content-type"].startswith("text/plain")

    def test_ignores_headers_and_valid_body(self, client):
        response = client.request(
            "GET",
            "/api/v1/",
            content='{"hello": "there"}',
            headers={"Content-Type": "application/json", "X-Anything": "1"},
        )

        assert response.status_code == 200
        assert response.text == "Hello World from v1"

    def test_ignores_non_json_body(self, client):
        response = client.request(
            "GET",
            "/api/v1/",
            content="{bad",
            headers={"Content-Type": "text/plain"},
        )

        assert response.status_code == 200
        assert response.text == "Hello World from v1"

    def test_missing_trailing_slash_redirects(self, client):
        response = client.get("/api/v1")

        assert response.status_code == 200
        assert response.text == "Hello World from v1"


# =============================================================================
# Apps
# =============================================================================

class TestListApps:
    """GET /api/v1/apps"""

    def test_delegates_to_catalog(self, client, mock_catalog):
        response = client.get("/api/v1/apps")

        assert response.status_code == 200
        mock_catalog.list_apps.assert_called_once_with()

        data = response.json()
        assert data["count"] == 2
        assert [app["id"] for app in data["items"]] == ["github", "rss"]

    def test_includes_connection_requirement(self, client):
        data = client.get("/api/v1/apps").json()

        by_id = {app["id"]: app for app in data["items"]}
        assert by_id["github"]["requires_connection"] is True
        assert by_id["rss"]["requires_connection"] is False

    def test_catalog_outage_is_503(self, client, mock_catalog):
        mock_catalog.list_apps.side_effect = CatalogUnavailableError("timeout")

        response = client.get("/api/v1/apps")

        assert response.status_code == 503
        assert response.json()["code"] == "CATALOG_UNAVAILABLE"


# =============================================================================
# Triggers
# =============================================================================

class TestAppTriggers:
    """GET /api/v1/triggers/{app_id}"""

    def test_passes_app_id_verbatim(self, client, mock_catalog):
        response = client.get("/api/v1/triggers/abc123")

        assert response.status_code == 200
        mock_catalog.list_app_triggers.assert_called_once_with("abc123")
        assert response.json()["app_id"] == "abc123"

    def test_app_id_is_not_coerced(self, client, mock_catalog):
        client.get("/api/v1/triggers/00042")

        mock_catalog.list_app_triggers.assert_called_once_with("00042")

    def test_unknown_app_is_404(self, client, mock_catalog):
        mock_catalog.list_app_triggers.side_effect = AppNotFoundError("nope")

        response = client.get("/api/v1/triggers/nope")

        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "APP_NOT_FOUND"
        assert body["details"] == {"app_id": "nope"}
        assert "suggestion" in body

    def test_bare_connection_required_segment_is_an_app_id(self, client, mock_catalog):
        client.get("/api/v1/triggers/connection-required")

        mock_catalog.list_app_triggers.assert_called_once_with("connection-required")
        mock_catalog.is_connection_required.assert_not_called()


class TestConnectionRequired:
    """GET /api/v1/triggers/connection-required/{key}"""

    def test_routes_to_connection_check(self, client, mock_catalog):
        response = client.get("/api/v1/triggers/connection-required/xyz")

        assert response.status_code == 200
        mock_catalog.is_connection_required.assert_called_once_with("xyz")
        mock_catalog.list_app_triggers.assert_not_called()

        assert response.json() == {
            "key": "xyz",
            "app_id": "github",
            "connection_required": True,
        }

    def test_unknown_trigger_is_404(self, client, mock_catalog):
        mock_catalog.is_connection_required.side_effect = TriggerNotFoundError("missing")

        response = client.get("/api/v1/triggers/connection-required/missing")

        assert response.status_code == 404
        assert response.json()["code"] == "TRIGGER_NOT_FOUND"


# =============================================================================
# Request Bodies
# =============================================================================

class TestMalformedBody:
    """Malformed JSON is rejected before any controller runs."""

    def test_malformed_json_is_400(self, client, mock_catalog):
        response = client.request(
            "GET",
            "/api/v1/apps",
            content="{bad",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_JSON"
        mock_catalog.list_apps.assert_not_called()

    def test_whitespace_only_json_is_400(self, client, mock_catalog):
        response = client.request(
            "GET",
            "/api/v1/apps",
            content="   \n",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_JSON"
        mock_catalog.list_apps.assert_not_called()

    def test_empty_json_body_is_allowed(self, client, mock_catalog):
        response = client.request(
            "GET",
            "/api/v1/apps",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        mock_catalog.list_apps.assert_called_once_with()

    def test_malformed_json_on_greeting_is_400(self, client):
        response = client.request(
            "GET",
            "/api/v1/",
            content="{bad",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400

    def test_malformed_json_on_unknown_path_is_400(self, client):
        response = client.request(
            "GET",
            "/api/does-not-exist",
            content="{bad",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400


# =============================================================================
# Not Found / Method Not Allowed
# =============================================================================

class TestUnknownRoutes:
    """Undefined paths return 404, never a crash."""

    def test_unknown_path_under_api(self, client):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404

    def test_unknown_version(self, client):
        assert client.get("/api/v2/apps").status_code == 404

    def test_extra_segment(self, client):
        assert client.get("/api/v1/triggers/a/b/c").status_code == 404

    def test_wrong_method(self, client, mock_catalog):
        response = client.post("/api/v1/apps")

        assert response.status_code == 405
        mock_catalog.list_apps.assert_not_called()


# =============================================================================
# Unhandled Errors
# =============================================================================

class TestUnhandledErrors:
    """Controller failures become a JSON 500."""

    def test_unexpected_exception_is_500(self, client, mock_catalog):
        mock_catalog.list_apps.side_effect = RuntimeError("boom")

        response = client.get("/api/v1/apps")

        assert response.status_code == 500
        assert response.json() == {
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }


# =============================================================================
# CORS
# =============================================================================

class TestCors:
    """CORS headers are attached to every response, errors included."""

    def test_success_response(self, client):
        response = client.get("/api/v1/", headers=ORIGIN)

        assert response.headers["access-control-allow-origin"] == "*"

    def test_not_found_response(self, client):
        response = client.get("/api/missing", headers=ORIGIN)

        assert response.status_code == 404
        assert response.headers["access-control-allow-origin"] == "*"

    def test_malformed_body_response(self, client):
        response = client.request(
            "GET",
            "/api/v1/apps",
            content="{bad",
            headers={**ORIGIN, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.headers["access-control-allow-origin"] == "*"

    def test_gateway_error_response(self, client, mock_catalog):
        mock_catalog.list_app_triggers.side_effect = AppNotFoundError("nope")

        response = client.get("/api/v1/triggers/nope", headers=ORIGIN)

        assert response.status_code == 404
        assert response.headers["access-control-allow-origin"] == "*"

    def test_internal_error_response(self, client, mock_catalog):
        mock_catalog.list_apps.side_effect = RuntimeError("boom")

        response = client.get("/api/v1/apps", headers=ORIGIN)

        assert response.status_code == 500
        assert response.headers["access-control-allow-origin"] == "*"

    def test_preflight(self, client):
        response = client.options(
            "/api/v1/apps",
            headers={
                **ORIGIN,
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "GET" in response.headers["access-control-allow-methods"]


# =============================================================================
# Factory
# =============================================================================

class TestCreateApp:
    """create_app() builds isolated instances."""

    def test_instances_are_independent(self, settings, mock_catalog):
        from app.dependencies import get_catalog_service
        from app.main import create_app

        first = create_app(settings)
        second = create_app(settings)
        first.dependency_overrides[get_catalog_service] = lambda: mock_catalog

        assert first is not second
        assert second.dependency_overrides == {}

    def test_custom_prefix(self, settings):
        from fastapi.testclient import TestClient

        from app.main import create_app

        custom = settings.model_copy(update={"API_PREFIX": "/gateway"})
        client = TestClient(create_app(custom))

        assert client.get("/gateway/v1/").text == "Hello World from v1"
        assert client.get("/api/v1/").status_code == 404

    def test_settings_reach_the_catalog_queries(self, settings, sample_app_rows):
        from unittest.mock import MagicMock, patch

        from fastapi.testclient import TestClient

        from app.main import create_app

        custom = settings.model_copy(update={
            "SUPABASE_URL": "https://other-project.supabase.co",
            "SUPABASE_SERVICE_KEY": "other-key",
            "APPS_TABLE": "catalog_apps",
        })
        supabase = MagicMock()
        query = supabase.table.return_value.select.return_value
        query.order.return_value.execute.return_value.data = sample_app_rows

        with patch("lib.supabase_client.create_client", return_value=supabase) as create:
            response = TestClient(create_app(custom)).get("/api/v1/apps")

        assert response.status_code == 200
        assert response.json()["count"] == 2
        create.assert_called_once_with("https://other-project.supabase.co", "other-key")
        supabase.table.assert_called_once_with("catalog_apps")

    def test_each_app_has_its_own_data_client(self, settings):
        from app.main import create_app

        first = create_app(settings)
        second = create_app(settings.model_copy(update={"APPS_TABLE": "catalog_apps"}))

        assert first.state.supabase is not second.state.supabase
        assert first.state.supabase.settings.APPS_TABLE == "apps"
        assert second.state.supabase.settings.APPS_TABLE == "catalog_apps"
