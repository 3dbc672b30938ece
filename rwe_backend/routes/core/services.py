"""
Service lookup for route handlers.

Services live on the aiohttp application; there is no module-level singleton.
"""
from typing import Any, Optional

from aiohttp import web
from rwe_backend.config import AUDIO_ROOT
from rwe_backend.shared import ErrorCode, Result

APP_KEY_SERVICES: web.AppKey[dict] = web.AppKey("rwe_services", dict)
APP_KEY_AUDIO_ROOT: web.AppKey[str] = web.AppKey("rwe_audio_root", str)


def _require_services(request: web.Request) -> tuple[Optional[dict], Optional[Result[Any]]]:
    services = request.app.get(APP_KEY_SERVICES)
    if not services:
        return None, Result.Err(ErrorCode.SERVICE_UNAVAILABLE, "Waveform service is not initialized")
    return services, None


def _audio_root(request: web.Request) -> str:
    return request.app.get(APP_KEY_AUDIO_ROOT) or AUDIO_ROOT
