"""
Executable resolution shared by the FFmpeg and FFprobe adapters.
"""
import shutil
from pathlib import Path
from typing import Optional


def is_safe_executable_token(raw: str) -> bool:
    if not raw:
        return False
    if "\x00" in raw or "\n" in raw or "\r" in raw:
        return False
    if any(ch in raw for ch in ("&", "|", ";", ">", "<")):
        return False
    return True


def resolve_executable_path(raw: str) -> Optional[str]:
    resolved = shutil.which(raw)
    if resolved:
        return resolved
    try:
        candidate = Path(raw)
        if candidate.is_file():
            return str(candidate.resolve(strict=True))
    except (OSError, RuntimeError, ValueError):
        return None
    return None


def resolve_executable(bin_name: str, expected_prefix: str) -> Optional[str]:
    """
    Resolve and validate a tool executable.

    Rejects configuration values that look like shell fragments and binaries
    whose file name does not start with `expected_prefix` (so a misconfigured
    RWE_FFMPEG_PATH cannot point at an arbitrary program).
    """
    raw = (bin_name or "").strip()
    if not is_safe_executable_token(raw):
        return None
    resolved = resolve_executable_path(raw)
    if not resolved:
        return None
    return resolved if Path(resolved).name.lower().startswith(expected_prefix) else None
