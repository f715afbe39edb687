# =============================================================================
# app/controllers/ - Request Handlers
# =============================================================================
# Controllers receive a parsed request (path parameters, injected services)
# and produce the HTTP response. The versioned routers bind them to paths:
# - apps.py: get_all_apps
# - triggers.py: get_app_triggers, check_is_connection_required
# =============================================================================

from .apps import get_all_apps
from .triggers import check_is_connection_required, get_app_triggers

__all__ = [
    "get_all_apps",
    "get_app_triggers",
    "check_is_connection_required",
]
