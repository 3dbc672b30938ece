from .audio import register_audio_routes
from .health import register_health_routes

__all__ = ["register_audio_routes", "register_health_routes"]
