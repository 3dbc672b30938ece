"""
Observability helpers (request id + timing) for aiohttp routes.
"""

from __future__ import annotations

import time
from uuid import uuid4

from aiohttp import web

from .shared import get_logger, request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _get_request_id(request: web.Request) -> str:
    rid = (request.headers.get(REQUEST_ID_HEADER) or "").strip()[:64]
    return rid or uuid4().hex[:12]


@web.middleware
async def request_context_middleware(request: web.Request, handler):
    """Add request-id correlation and a debug timing line per request."""
    rid = _get_request_id(request)
    request["rwe_request_id"] = rid
    token = request_id_var.set(rid)
    start = time.perf_counter()
    status: int | None = None
    try:
        response = await handler(request)
        status = response.status
        response.headers[REQUEST_ID_HEADER] = rid
        return response
    except web.HTTPException as exc:
        status = exc.status
        exc.headers[REQUEST_ID_HEADER] = rid
        raise
    finally:
        duration_ms = (time.perf_counter() - start) * 1000.0
        logger.debug("%s %s -> %s (%.1fms)", request.method, request.path, status, duration_ms)
        request_id_var.reset(token)
