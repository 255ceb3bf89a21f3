"""
Route registration system.
Coordinates all route handlers and registers them with an aiohttp app.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from aiohttp import web

from cpi_backend.observability import ensure_observability
from cpi_backend.shared import get_logger

from .handlers import register_pnginfo_routes, register_version_routes

API_PREFIX = "/cpi/"
_APP_KEY_ROUTES_REGISTERED: web.AppKey[bool] = web.AppKey("_cpi_routes_registered", bool)

logger = get_logger(__name__)


@web.middleware
async def security_headers_middleware(
    request: web.Request,
    handler: Callable[[web.Request], Awaitable[web.StreamResponse]],
) -> web.StreamResponse:
    """Apply strict security headers to API responses only."""
    response = await handler(request)

    if not (request.path or "").startswith(API_PREFIX):
        return response

    # API responses should never be treated as a document.
    response.headers.setdefault("Content-Security-Policy", "default-src 'none'")
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "DENY")
    response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
    response.headers.setdefault("Cache-Control", "no-store, no-cache, must-revalidate")
    return response


def build_route_table() -> web.RouteTableDef:
    routes = web.RouteTableDef()
    register_pnginfo_routes(routes)
    register_version_routes(routes)
    return routes


def register_all_routes(app: web.Application) -> None:
    """Install middlewares and API routes on `app`; repeated calls are no-ops."""
    if app.get(_APP_KEY_ROUTES_REGISTERED):
        logger.debug("Routes already registered on this app")
        return
    ensure_observability(app)
    app.middlewares.append(security_headers_middleware)
    app.add_routes(build_route_table())
    app[_APP_KEY_ROUTES_REGISTERED] = True
