"""
Decoder status endpoint.
"""
from aiohttp import web

from rwe_backend.config import get_tool_paths
from rwe_backend.shared import Result

from ..core import _require_services, _result_response


def register_health_routes(routes: web.RouteTableDef) -> None:
    @routes.get("/api/audio/status")
    async def get_audio_status(request: web.Request) -> web.Response:
        svc, error_result = _require_services(request)
        if error_result:
            return _result_response(error_result, "status")

        waveform = svc["waveform"]
        availability = await waveform.initialize()
        status = {
            "decoder": availability.to_dict(),
            "tools": {
                "ffmpeg": {"resolved": svc["ffmpeg"].is_available()},
                "ffprobe": {"resolved": svc["ffprobe"].is_available()},
            },
            "paths": get_tool_paths(),
            "mode": "full" if availability.available else "fallback",
        }
        return _result_response(Result.Ok(status), "status")
