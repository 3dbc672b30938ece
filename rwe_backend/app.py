"""
aiohttp application factory.
"""

from __future__ import annotations

from typing import Optional

from aiohttp import web

from .config import AUDIO_ROOT, HTTP_HOST, HTTP_PORT
from .deps import build_services
from .routes import APP_KEY_AUDIO_ROOT, APP_KEY_SERVICES, register_routes
from .shared import configure_logging, get_logger, log_success

logger = get_logger(__name__)


async def _init_services(app: web.Application) -> None:
    if app.get(APP_KEY_SERVICES):
        await app[APP_KEY_SERVICES]["waveform"].initialize()
        return
    built = await build_services()
    if not built.ok or built.data is None:
        raise RuntimeError(f"Failed to initialize services: {built.error}")
    app[APP_KEY_SERVICES] = built.data
    log_success(logger, "Waveform service ready")


def create_app(services: Optional[dict] = None, audio_root: Optional[str] = None) -> web.Application:
    """
    Build the HTTP application.

    `services` may be injected (tests); otherwise they are built on startup.
    """
    app = web.Application()
    app[APP_KEY_AUDIO_ROOT] = audio_root or AUDIO_ROOT
    if services is not None:
        app[APP_KEY_SERVICES] = services
    register_routes(app)
    app.on_startup.append(_init_services)
    return app


def main() -> None:
    configure_logging()
    logger.info("Serving audio from %s on http://%s:%s", AUDIO_ROOT, HTTP_HOST, HTTP_PORT)
    web.run_app(create_app(), host=HTTP_HOST, port=HTTP_PORT)
