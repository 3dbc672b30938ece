"""
Shared types, enums, and constants.
"""
import os
from enum import Enum

# Error codes
class ErrorCode(str, Enum):
    """Standardized error codes (string enum)."""

    # Client / validation
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"

    # Decoder availability
    TOOL_MISSING = "TOOL_MISSING"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"

    # Probe failures (recovered by size-based estimation)
    FFPROBE_ERROR = "FFPROBE_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    NO_AUDIO_STREAM = "NO_AUDIO_STREAM"

    # Decode failures (recovered by waveform synthesis)
    FFMPEG_ERROR = "FFMPEG_ERROR"
    DECODE_FAILED = "DECODE_FAILED"

def extension_token(filename: str) -> str:
    """
    Lower-cased file extension without the leading dot.

    "Show.MP3" -> "mp3", "noext" -> "".
    """
    return os.path.splitext(str(filename))[1].lower().lstrip(".")
