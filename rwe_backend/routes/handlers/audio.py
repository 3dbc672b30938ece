"""
Audio metadata and waveform endpoints.
"""
from aiohttp import web

from rwe_backend.shared import ErrorCode, Result, get_logger, public_error_message

from ..core import _audio_root, _require_services, _resolve_audio_path, _result_response

logger = get_logger(__name__)


def _public_error(result: Result) -> Result:
    """Strip filesystem paths from error messages before they leave the process."""
    if result.ok:
        return result
    return Result.Err(result.code, public_error_message(result.code, result.error))


def _parse_width(raw: str | None) -> Result[int | None]:
    if raw is None or raw.strip() == "":
        return Result.Ok(None)
    try:
        return Result.Ok(int(raw))
    except ValueError:
        return Result.Err(ErrorCode.INVALID_INPUT, "width must be an integer")


def register_audio_routes(routes: web.RouteTableDef) -> None:
    """Register GET /api/audio/metadata/{filename} and GET /api/audio/waveform/{filename}."""

    @routes.get("/api/audio/metadata/{filename:.+}")
    async def get_audio_metadata(request: web.Request) -> web.Response:
        svc, error_result = _require_services(request)
        if error_result:
            return _result_response(error_result, "metadata")

        resolved = _resolve_audio_path(request.match_info["filename"], _audio_root(request))
        if not resolved.ok or resolved.data is None:
            return _result_response(resolved, "metadata")

        result = await svc["waveform"].get_metadata(str(resolved.data))
        return _result_response(_public_error(result), "metadata", lambda m: m.to_dict())

    @routes.get("/api/audio/waveform/{filename:.+}")
    async def get_audio_waveform(request: web.Request) -> web.Response:
        svc, error_result = _require_services(request)
        if error_result:
            return _result_response(error_result, "waveformData")

        width = _parse_width(request.query.get("width"))
        if not width.ok:
            return _result_response(width, "waveformData")

        resolved = _resolve_audio_path(request.match_info["filename"], _audio_root(request))
        if not resolved.ok or resolved.data is None:
            return _result_response(resolved, "waveformData")

        result = await svc["waveform"].get_waveform(str(resolved.data), width.data)
        if result.ok and result.data is not None:
            logger.info(
                "Waveform for %s: %d points (%s)",
                request.match_info["filename"],
                result.data.width,
                result.data.source,
            )
        return _result_response(_public_error(result), "waveformData", lambda w: w.to_dict())
