# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the catalog business logic:
# - models/: Pydantic schemas for apps, triggers and connection checks
# - services/: Catalog lookups on top of lib.supabase_client
#
# Services never touch requests or responses. They raise the error types
# from app.exceptions, which the app layer turns into HTTP responses.
# =============================================================================
