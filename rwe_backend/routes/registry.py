"""
Route registration.
Coordinates the route handlers and installs them on an aiohttp app.
"""

from __future__ import annotations

from aiohttp import web
from rwe_backend.observability import request_context_middleware
from rwe_backend.shared import get_logger

from .handlers import register_audio_routes, register_health_routes

_APP_KEY_ROUTES_REGISTERED: web.AppKey[bool] = web.AppKey("_rwe_routes_registered", bool)

logger = get_logger(__name__)


def register_all_routes() -> web.RouteTableDef:
    routes = web.RouteTableDef()
    register_audio_routes(routes)
    register_health_routes(routes)
    return routes


def register_routes(app: web.Application) -> None:
    """Install middleware and routes once per application."""
    if app.get(_APP_KEY_ROUTES_REGISTERED):
        return
    app.middlewares.append(request_context_middleware)
    app.add_routes(register_all_routes())
    app[_APP_KEY_ROUTES_REGISTERED] = True
    logger.debug("Registered %d routes", len(app.router.routes()))
