"""
Response utilities for route handlers.
"""

import math
from typing import Any, Callable, Optional

from aiohttp import web
from rwe_backend.shared import ErrorCode, Result

_STATUS_BY_CODE = {
    ErrorCode.NOT_FOUND.value: 404,
    ErrorCode.INVALID_INPUT.value: 400,
    ErrorCode.SERVICE_UNAVAILABLE.value: 503,
}


def _status_for(result: Result) -> int:
    if result.ok:
        return 200
    return _STATUS_BY_CODE.get(str(result.code), 500)


def _result_response(
    result: Result,
    data_key: str,
    serialize: Optional[Callable[[Any], Any]] = None,
) -> web.Response:
    """
    Convert Result to the dashboard's JSON envelope.

    Ok:  {"success": true, <data_key>: ..., "meta": {...}}
    Err: {"success": false, "error": "...", "code": "..."}
    """
    if result.ok:
        data = serialize(result.data) if serialize is not None else result.data
        payload = {"success": True, data_key: data, "meta": result.meta}
    else:
        payload = {"success": False, "error": result.error, "code": result.code}
    return web.json_response(_sanitize_json_payload(payload), status=_status_for(result))


def _sanitize_json_payload(value):
    """
    Normalize payload values so they are always valid strict JSON.
    - Converts NaN/Infinity floats to None.
    - Recurses through dict/list/tuple containers.
    """
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {k: _sanitize_json_payload(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_sanitize_json_payload(v) for v in value]
    return value
