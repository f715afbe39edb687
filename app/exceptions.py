# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the gateway.
# Every error body carries a machine-readable code and, where possible,
# a suggestion telling the caller how to fix the request.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class GatewayException(Exception):
    """
    Base exception for the gateway.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "GATEWAY_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content=self.to_dict())


# =============================================================================
# Catalog Exceptions
# =============================================================================

class AppNotFoundError(GatewayException):
    """Raised when an app ID doesn't exist in the catalog."""

    def __init__(self, app_id: str):
        super().__init__(
            message=f"App not found: {app_id}",
            code="APP_NOT_FOUND",
            status_code=404,
            suggestion="List available apps with GET /api/v1/apps",
            details={"app_id": app_id}
        )


class TriggerNotFoundError(GatewayException):
    """Raised when a trigger key doesn't exist in the catalog."""

    def __init__(self, key: str):
        super().__init__(
            message=f"Trigger not found: {key}",
            code="TRIGGER_NOT_FOUND",
            status_code=404,
            suggestion="List an app's triggers with GET /api/v1/triggers/{app_id}",
            details={"key": key}
        )


class CatalogUnavailableError(GatewayException):
    """Raised when the catalog storage cannot be reached."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Catalog is unavailable: {error}",
            code="CATALOG_UNAVAILABLE",
            status_code=503,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error}
        )


# =============================================================================
# Request Body Exceptions
# =============================================================================

class InvalidJSONBodyError(GatewayException):
    """Raised when a JSON request body cannot be parsed."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Invalid JSON body: {error}",
            code="INVALID_JSON",
            status_code=400,
            suggestion="Send a JSON object or array, or drop the application/json Content-Type",
            details={"error": error}
        )


class PayloadTooLargeError(GatewayException):
    """Raised when a JSON request body exceeds the configured limit."""

    def __init__(self, size: int | None, limit: int):
        super().__init__(
            message=f"Request body too large (limit: {limit} bytes)",
            code="PAYLOAD_TOO_LARGE",
            status_code=413,
            suggestion=f"Send a body smaller than {limit} bytes",
            details={"size": size, "limit": limit}
        )


class UnsupportedCharsetError(GatewayException):
    """Raised when a JSON request body declares a non-UTF-8 charset."""

    def __init__(self, charset: str):
        super().__init__(
            message=f"Unsupported charset: {charset}",
            code="UNSUPPORTED_CHARSET",
            status_code=415,
            suggestion="Encode JSON bodies as UTF-8",
            details={"charset": charset}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def gateway_exception_handler(
    request: Request,
    exc: GatewayException
) -> JSONResponse:
    """
    Convert GatewayException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return exc.to_response()
