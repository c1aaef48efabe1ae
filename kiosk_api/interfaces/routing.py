"""
Router mounting from the configured route table.

Each entry of ``server.urls.web_routers`` names a route module and the
path it is served under. Its ``csrf``/``token`` flags put it in exactly one
router kind; ``mount_routers`` is called once per kind and mounts only the
entries of that kind.

A route module exposes ``setup(kind) -> APIRouter``. Its routes are
re-registered under the entry path with ``EnvelopeRoute``, so every one of
them logs the request, runs the kind's guards, answers with the envelope
and logs the response.
"""

import importlib
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from fastapi import APIRouter, Depends, FastAPI
from fastapi.routing import APIRoute

from kiosk_api.shared.envelope.route import EnvelopeRoute
from kiosk_api.shared.security.guards import require_csrf, require_token

logger = logging.getLogger(__name__)


class RouterKind(Enum):
    """Middleware stack a route group is mounted under."""

    TOKEN_ONLY = "TOKEN"  # token-based auth, no csrf
    NO_CSRF = "API"  # no csrf check
    WITH_CSRF = "CSRF"  # csrf double-submit check

    def accepts(self, entry: "RouteEntry") -> bool:
        if self is RouterKind.TOKEN_ONLY:
            return entry.token
        if self is RouterKind.NO_CSRF:
            return not entry.csrf and not entry.token
        return entry.csrf and not entry.token

    def dependencies(self) -> list[Any]:
        if self is RouterKind.TOKEN_ONLY:
            return [Depends(require_token)]
        if self is RouterKind.WITH_CSRF:
            return [Depends(require_csrf)]
        return []


@dataclass(frozen=True)
class RouteEntry:
    """One row of the route table.

    Attributes:
        path: Mount prefix, e.g. ``/role``.
        module: Dotted module path, or the module object itself.
        csrf: Mount under the CSRF-protected kind.
        token: Mount under the token-only kind.
    """

    path: str | None = None
    module: Any = None
    csrf: bool = False
    token: bool = False

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "RouteEntry":
        return cls(
            path=values.get("path"),
            module=values.get("module"),
            csrf=bool(values.get("csrf", False)),
            token=bool(values.get("token", False)),
        )


def _as_entry(entry: RouteEntry | Mapping[str, Any]) -> RouteEntry:
    return entry if isinstance(entry, RouteEntry) else RouteEntry.from_mapping(entry)


def _resolve_module(module: Any) -> Any:
    return importlib.import_module(module) if isinstance(module, str) else module


def _module_name(module: Any) -> str:
    return module if isinstance(module, str) else getattr(module, "__name__", repr(module))


def mount_routers(
    app: FastAPI,
    routes: Iterable[RouteEntry | Mapping[str, Any]] | None,
    kind: RouterKind,
) -> list[RouteEntry]:
    """Mount every entry of ``routes`` that belongs to ``kind``.

    Entries of another kind, or without a path or module, are skipped.

    Args:
        app: Application receiving the routes.
        routes: The route table.
        kind: The router kind to mount.

    Returns:
        The entries that were mounted.
    """
    mounted: list[RouteEntry] = []
    for entry in map(_as_entry, routes or ()):
        if not kind.accepts(entry) or not (entry.module and entry.path):
            continue

        module_router: APIRouter = _resolve_module(entry.module).setup(kind)
        group = APIRouter(
            prefix=entry.path.rstrip("/"),
            route_class=EnvelopeRoute,
            dependencies=kind.dependencies(),
        )
        for route in module_router.routes:
            if not isinstance(route, APIRoute):
                continue
            group.add_api_route(
                route.path,
                route.endpoint,
                methods=list(route.methods or ()),
                name=route.name,
                summary=route.summary,
                description=route.description,
                tags=list(route.tags or ()),
                dependencies=list(route.dependencies or ()),
            )
        app.include_router(group)
        mounted.append(entry)
        logger.info("%s will be public access via %s", _module_name(entry.module), entry.path)
    return mounted


def mount_route_table(app: FastAPI, routes: Iterable[RouteEntry | Mapping[str, Any]] | None) -> None:
    """Mount the whole route table, one router kind after another."""
    routes = list(routes or ())
    for kind in RouterKind:
        mount_routers(app, routes, kind)
