"""
Path validation for audio files requested over HTTP.
"""
from pathlib import Path

from rwe_backend.shared import ErrorCode, Result, get_logger

logger = get_logger(__name__)


def _safe_rel_path(value: str) -> Path | None:
    raw = str(value or "").strip()
    if raw == "" or "\x00" in raw:
        return None
    try:
        rel = Path(raw)
    except (OSError, ValueError):
        return None
    if getattr(rel, "drive", ""):
        return None
    if rel.is_absolute():
        return None
    if any(part == ".." for part in rel.parts):
        return None
    return rel


def _resolve_audio_path(filename: str, audio_root: str) -> Result[Path]:
    """
    Resolve a client-supplied filename under `audio_root`.

    Existence is not checked here; a missing file surfaces as NOT_FOUND from
    the waveform service.
    """
    rel = _safe_rel_path(filename)
    if rel is None:
        return Result.Err(ErrorCode.INVALID_INPUT, "Invalid filename")
    try:
        root = Path(audio_root).resolve(strict=False)
        candidate = (root / rel).resolve(strict=False)
    except (OSError, RuntimeError, ValueError) as exc:
        logger.warning("Failed to resolve audio path %r: %s", filename, exc)
        return Result.Err(ErrorCode.INVALID_INPUT, "Invalid filename")
    if candidate != root and not candidate.is_relative_to(root):
        return Result.Err(ErrorCode.INVALID_INPUT, "Path is not within the audio root")
    return Result.Ok(candidate)
