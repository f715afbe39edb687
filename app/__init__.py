# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the HTTP gateway:
# - main.py: App factory, middleware pipeline, error handlers
# - config.py: Environment variable loading and settings
# - middleware.py: CORS, error envelope and JSON body stages
# - routing.py: Declarative route tables with fixed precedence
# - routers/: Versioned API surfaces
# - controllers/: Handlers bound by the routers
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================

__version__ = "1.0.0"
