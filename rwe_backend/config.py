"""
Configuration for the radio waveform engine.
"""
import os
import logging
import tempfile
from pathlib import Path

from .utils import env_bool

logger = logging.getLogger(__name__)


def _env_raw(*names: str, default: str | None = None) -> str | None:
    for name in names:
        if not name:
            continue
        val = os.getenv(name)
        if val is not None and str(val).strip() != "":
            return str(val).strip()
    return default


def _env_int(default: int, *names: str, min_value: int | None = None, max_value: int | None = None) -> int:
    raw = _env_raw(*names)
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid integer for %s=%r, using default=%s", names[0] if names else "<unknown>", raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("Value too small for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, min_value)
        value = min_value
    if max_value is not None and value > max_value:
        logger.warning("Value too large for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, max_value)
        value = max_value
    return value


def _env_float(default: float, *names: str, min_value: float | None = None, max_value: float | None = None) -> float:
    raw = _env_raw(*names)
    if raw is None:
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid float for %s=%r, using default=%s", names[0] if names else "<unknown>", raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("Value too small for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, min_value)
        value = min_value
    if max_value is not None and value > max_value:
        logger.warning("Value too large for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, max_value)
        value = max_value
    return value


def _env_bool(default: bool, *names: str) -> bool:
    for name in names:
        if name and name in os.environ:
            return env_bool(name, default)
    return default


def _resolve_temp_dir() -> Path:
    env_path = _env_raw("RWE_WAVEFORM_TEMP_DIR")
    if env_path:
        try:
            return Path(env_path).expanduser().resolve()
        except (OSError, RuntimeError):
            logger.warning(f"Failed to resolve RWE_WAVEFORM_TEMP_DIR: {env_path}, using system temp dir")
    return Path(tempfile.gettempdir())


# External tool overrides (portable vs. system-wide)
FFMPEG_BIN = _env_raw("RWE_FFMPEG_PATH", "RWE_FFMPEG_BIN", default="ffmpeg")
FFPROBE_BIN = _env_raw("RWE_FFPROBE_PATH", "RWE_FFPROBE_BIN", default="ffprobe")

TOOL_LOCATIONS = {
    "ffmpeg": FFMPEG_BIN,
    "ffprobe": FFPROBE_BIN,
}

def get_tool_paths():
    """Return the configured external tool executable paths."""
    return TOOL_LOCATIONS.copy()

FFMPEG_MIN_VERSION = str(_env_raw("RWE_FFMPEG_MIN_VERSION", default="") or "").strip()

# Setting this to false pins the engine to the estimate/synthetic paths.
DECODER_ENABLED = _env_bool(True, "RWE_DECODER_ENABLED")

# Tool timeouts (seconds)
TOOL_DETECT_TIMEOUT = _env_float(5.0, "RWE_TOOL_DETECT_TIMEOUT", min_value=1.0, max_value=60.0)
FFPROBE_TIMEOUT = _env_float(10.0, "RWE_FFPROBE_TIMEOUT", min_value=1.0, max_value=120.0)
FFMPEG_DECODE_TIMEOUT = _env_float(120.0, "RWE_FFMPEG_DECODE_TIMEOUT", min_value=5.0, max_value=1800.0)

# Normalized PCM target for waveform extraction: mono, 8 kHz, 16-bit signed little-endian, headerless.
PCM_SAMPLE_RATE = 8000
PCM_CHANNELS = 1
PCM_FORMAT = "s16le"

# Waveform rendering
WAVEFORM_MAX_WIDTH = _env_int(20000, "RWE_WAVEFORM_MAX_WIDTH", min_value=1, max_value=1_000_000)
WAVEFORM_DEFAULT_WIDTH = _env_int(800, "RWE_WAVEFORM_DEFAULT_WIDTH", min_value=1, max_value=WAVEFORM_MAX_WIDTH)
WAVEFORM_TEMP_DIR = str(_resolve_temp_dir())

# Audio library served by the HTTP routes
AUDIO_ROOT = str(Path(_env_raw("RWE_AUDIO_ROOT", default="audio") or "audio").expanduser().resolve())

# HTTP server
HTTP_HOST = _env_raw("RWE_HTTP_HOST", default="127.0.0.1") or "127.0.0.1"
HTTP_PORT = _env_int(3001, "RWE_HTTP_PORT", min_value=1, max_value=65535)
