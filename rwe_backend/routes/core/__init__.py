"""
Core utilities for route handlers.
"""
from .paths import _resolve_audio_path, _safe_rel_path
from .response import _result_response
from .services import APP_KEY_AUDIO_ROOT, APP_KEY_SERVICES, _audio_root, _require_services

__all__ = [
    "_result_response",
    "_resolve_audio_path",
    "_safe_rel_path",
    "_require_services",
    "_audio_root",
    "APP_KEY_SERVICES",
    "APP_KEY_AUDIO_ROOT",
]
