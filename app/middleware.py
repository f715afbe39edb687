# =============================================================================
# app/middleware.py - HTTP Middleware Pipeline
# =============================================================================
# The gateway runs every request through a fixed, ordered list of stages:
#
#   1. CORS            - attaches CORS headers to every response, errors included
#   2. Error envelope  - turns unhandled exceptions into a JSON 500
#   3. JSON body       - parses application/json bodies before routing
#
# The list returned by build_middleware() IS the order. Starlette wraps the
# first entry outermost, so a request meets the stages top to bottom.
# =============================================================================

import json
import logging
from typing import Any

from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import ClientDisconnect
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.config import Settings
from app.exceptions import (
    GatewayException,
    InvalidJSONBodyError,
    PayloadTooLargeError,
    UnsupportedCharsetError,
)

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


# =============================================================================
# Pipeline
# =============================================================================

def build_middleware(settings: Settings) -> list[Middleware]:
    """
    Build the ordered middleware list for create_app().

    CORS uses an open policy unless CORS_ORIGINS names specific origins.
    """
    return [
        Middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins_list,
            allow_credentials=False,
            allow_methods=["*"],
            allow_headers=["*"],
        ),
        Middleware(ErrorEnvelopeMiddleware),
        Middleware(JSONBodyMiddleware, limit=settings.JSON_BODY_LIMIT_BYTES),
    ]


# =============================================================================
# Error Envelope
# =============================================================================

class ErrorEnvelopeMiddleware:
    """
    Convert unhandled exceptions into a JSON 500 response.

    Sits inside CORS so the error response still carries CORS headers.
    If the handler already started streaming a response the exception
    is re-raised, since the status line can no longer change.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            logger.exception(f"Unexpected error: {exc}")
            if response_started:
                raise
            response = JSONResponse(
                status_code=500,
                content={
                    "detail": "An unexpected error occurred",
                    "code": "INTERNAL_ERROR",
                }
            )
            await response(scope, receive, send)


# =============================================================================
# JSON Body Parsing
# =============================================================================

def parse_content_type(value: str | None) -> tuple[str, dict[str, str]]:
    """
    Split a Content-Type header into media type and parameters.

    Example: "application/json; charset=UTF-8" -> ("application/json", {"charset": "utf-8"})
    """
    if not value:
        return "", {}

    media_type, _, rest = value.partition(";")
    params = {}
    for part in rest.split(";"):
        name, sep, param_value = part.partition("=")
        if sep:
            params[name.strip().lower()] = param_value.strip().strip('"').lower()
    return media_type.strip().lower(), params


def is_json_media_type(media_type: str) -> bool:
    """
    True for application/json and application/*+json.

    express.json() only accepts application/json by default; structured
    +json vendor types are accepted here as well.
    """
    return media_type == JSON_MEDIA_TYPE or (
        media_type.startswith("application/") and media_type.endswith("+json")
    )


def parse_json_body(body: bytes, charset: str = "utf-8") -> Any:
    """
    Decode and parse a JSON request body.

    Strict: only objects and arrays are accepted at the top level.
    Only a zero-length body parses to None; whitespace alone is rejected.

    Raises:
        UnsupportedCharsetError: If charset is not a UTF encoding
        InvalidJSONBodyError: If the body is not valid strict JSON
    """
    if not charset.startswith("utf-"):
        raise UnsupportedCharsetError(charset)

    if not body:
        return None

    try:
        text = body.decode(charset)
    except LookupError as e:
        raise UnsupportedCharsetError(charset) from e
    except UnicodeDecodeError as e:
        raise InvalidJSONBodyError(f"body is not valid {charset}") from e

    stripped = text.lstrip("\ufeff \t\r\n")
    if not stripped:
        raise InvalidJSONBodyError("unexpected end of input, expected an object or array")

    if stripped[0] not in "{[":
        raise InvalidJSONBodyError(f"unexpected token {stripped[0]!r}, expected an object or array")

    try:
        return json.loads(stripped)
    except json.JSONDecodeError as e:
        raise InvalidJSONBodyError(str(e)) from e


class JSONBodyMiddleware:
    """
    Parse JSON request bodies before the router sees the request.

    The parsed value is stored in scope["state"]["json_body"] (read it with
    request.state.json_body) and the raw bytes are replayed to the app, so
    handlers that read the body themselves still work. Requests with any
    other Content-Type pass through untouched.
    """

    def __init__(self, app: ASGIApp, limit: int = 100 * 1024):
        self.app = app
        self.limit = limit

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        media_type, params = parse_content_type(headers.get("content-type"))
        if not is_json_media_type(media_type):
            await self.app(scope, receive, send)
            return

        try:
            body = await self._read_body(headers, receive)
            parsed = parse_json_body(body, params.get("charset", "utf-8"))
        except ClientDisconnect:
            logger.debug(f"Client disconnected while sending body to {scope['path']}")
            return
        except GatewayException as exc:
            logger.info(f"Rejected request body for {scope['method']} {scope['path']}: {exc.code}")
            await exc.to_response()(scope, receive, send)
            return

        scope.setdefault("state", {})["json_body"] = parsed

        replayed = False

        async def replay_receive() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay_receive, send)

    async def _read_body(self, headers: Headers, receive: Receive) -> bytes:
        """Read the whole body, enforcing the size limit as chunks arrive."""
        declared = headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > self.limit:
            raise PayloadTooLargeError(int(declared), self.limit)

        chunks = []
        size = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                raise ClientDisconnect()

            chunk = message.get("body", b"")
            size += len(chunk)
            if size > self.limit:
                raise PayloadTooLargeError(size, self.limit)
            chunks.append(chunk)

            if not message.get("more_body", False):
                return b"".join(chunks)
