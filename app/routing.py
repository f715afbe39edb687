# =============================================================================
# app/routing.py - Declarative Route Tables
# =============================================================================
# A versioned router is declared as a list of RouteEntry values and turned
# into a FastAPI APIRouter by build_router().
#
# Matching precedence is fixed here rather than left to declaration order:
# entries are sorted segment by segment, literal segments before {params}.
# So "/triggers/connection-required/{key}" is always tried before
# "/triggers/{app_id}", whatever order the table lists them in.
#
# Path parameters reach controllers as raw strings. No coercion happens here.
# =============================================================================

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from fastapi import APIRouter

logger = logging.getLogger(__name__)


class DuplicateRouteError(ValueError):
    """Raised when two entries bind the same method and path."""

    def __init__(self, method: str, path: str):
        super().__init__(f"Duplicate route: {method} {path}")
        self.method = method
        self.path = path


@dataclass(frozen=True)
class RouteEntry:
    """
    One (method, path pattern) -> handler binding.

    Path patterns use FastAPI syntax: "/triggers/{app_id}".
    """
    method: str
    path: str
    handler: Callable[..., Any]
    name: str | None = None
    kwargs: dict[str, Any] = field(default_factory=dict)

    @property
    def segments(self) -> list[str]:
        return [part for part in self.path.strip("/").split("/") if part]

    @property
    def param_names(self) -> list[str]:
        """Names of the {param} segments, in path order."""
        return [seg[1:-1].split(":", 1)[0] for seg in self.segments if is_param_segment(seg)]


def is_param_segment(segment: str) -> bool:
    return segment.startswith("{") and segment.endswith("}")


def specificity_key(entry: RouteEntry) -> tuple:
    """
    Sort key: literal segments rank ahead of parameter segments.

    Compared segment by segment, so "/a/b/{x}" < "/a/{y}" because
    "b" (literal) beats "{y}" (param) at position 1. The trailing 2 puts
    a longer path ahead of its own prefix.
    """
    ranks = tuple(1 if is_param_segment(seg) else 0 for seg in entry.segments)
    return ranks + (2,)


def order_routes(entries: Sequence[RouteEntry]) -> list[RouteEntry]:
    """
    Validate and order route entries for registration.

    Raises:
        DuplicateRouteError: If a (method, path) pair appears twice
    """
    seen: set[tuple[str, str]] = set()
    for entry in entries:
        signature = (entry.method.upper(), "/" + "/".join(
            "{}" if is_param_segment(seg) else seg for seg in entry.segments
        ))
        if signature in seen:
            raise DuplicateRouteError(entry.method.upper(), entry.path)
        seen.add(signature)

    # sorted() is stable, so ties keep declaration order
    return sorted(entries, key=specificity_key)


def build_router(entries: Sequence[RouteEntry], **router_kwargs: Any) -> APIRouter:
    """
    Build an APIRouter from a route table.

    Example:
        router = build_router([
            RouteEntry("GET", "/apps", get_all_apps),
            RouteEntry("GET", "/triggers/{app_id}", get_app_triggers),
        ])
    """
    router = APIRouter(**router_kwargs)

    for entry in order_routes(entries):
        router.add_api_route(
            entry.path,
            entry.handler,
            methods=[entry.method.upper()],
            name=entry.name or entry.handler.__name__,
            **entry.kwargs,
        )
        logger.debug(f"Registered route {entry.method.upper()} {entry.path}")

    return router
