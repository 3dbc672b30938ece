"""
Client-facing error text.

Messages leaving the HTTP layer never carry filesystem paths or decoder
stderr; the error code plus a short description is all a client sees.
"""
from __future__ import annotations

import re
from typing import Optional

from .types import ErrorCode

_FIXED_MESSAGES = {
    ErrorCode.NOT_FOUND.value: "Audio file not found",
    ErrorCode.SERVICE_UNAVAILABLE.value: "Waveform service is not initialized",
}

# POSIX absolute, drive-letter and UNC paths; "scheme://" URLs are left alone.
_PATH_RE = re.compile(r"(?:[A-Za-z]:\\|\\\\|(?<![\w:/])/)[^\s'\"]+")
_MAX_DETAIL_CHARS = 200


def mask_paths(text: str) -> str:
    return _PATH_RE.sub("[path]", text)


def public_error_message(code: str, detail: Optional[str], fallback: str = "Request failed") -> str:
    """
    Message safe to return to an HTTP client for an error `code`.

    Codes with a fixed message ignore `detail`; otherwise `detail` is
    path-masked, collapsed to one line and truncated.
    """
    fixed = _FIXED_MESSAGES.get(str(code))
    if fixed:
        return fixed
    cleaned = " ".join(mask_paths(str(detail or "")).split())
    return cleaned[:_MAX_DETAIL_CHARS] or fallback
