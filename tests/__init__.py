# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the catalog gateway:
# - test_routes.py: HTTP tests through the full app
# - test_middleware.py: CORS / error envelope / JSON body stages
# - test_routing.py: Route table ordering and duplicates
# - test_catalog_service.py, test_supabase_client.py: Catalog reads (mocked)
# - test_models.py, test_config.py, test_health.py
#
# Run tests with: pytest
# =============================================================================
