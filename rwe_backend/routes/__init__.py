"""
Route system for the waveform engine HTTP surface.
Importing this package is side-effect free; route registration is explicit.
"""
from .core import APP_KEY_AUDIO_ROOT, APP_KEY_SERVICES
from .registry import register_all_routes, register_routes

__all__ = [
    "register_routes",
    "register_all_routes",
    "APP_KEY_SERVICES",
    "APP_KEY_AUDIO_ROOT",
]
