"""
Metadata prober: ffprobe when the decoder is available, size-based estimate otherwise.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from ...adapters.tools import FFProbe, find_audio_stream
from ...shared import ErrorCode, Result, extension_token, get_logger, log_structured
from ...tool_detect import DecoderAvailability
from ...utils import parse_float, parse_int
from .estimator import estimate_metadata
from .models import AudioMetadata

logger = get_logger(__name__)

DEFAULT_SAMPLE_RATE = 44100
DEFAULT_CHANNELS = 2


def stat_audio_file(file_path: str) -> Result[os.stat_result]:
    """Existence/readability check shared by every public operation."""
    path = Path(file_path)
    try:
        st = path.stat()
    except (OSError, ValueError):
        return Result.Err(ErrorCode.NOT_FOUND, f"Audio file not found: {file_path}")
    if not path.is_file() or not os.access(path, os.R_OK):
        return Result.Err(ErrorCode.NOT_FOUND, f"Audio file not found: {file_path}")
    return Result.Ok(st)


def _positive(value: Optional[int], default: int) -> int:
    return value if value is not None and value > 0 else default


def metadata_from_probe(probe: Dict[str, Any], fmt: str, file_size: int) -> Result[AudioMetadata]:
    """
    Map ffprobe output onto AudioMetadata.

    Duration and bit rate come from the format section, sample rate and channel
    count from the first audio stream. Zero, negative or unparseable fields fall
    back to 44100 Hz / 2 channels; duration and bit rate fall back to 0.
    """
    streams = probe.get("streams") if isinstance(probe.get("streams"), list) else []
    audio_stream = probe.get("audio_stream") or find_audio_stream(streams)
    if not audio_stream:
        return Result.Err(ErrorCode.NO_AUDIO_STREAM, "No audio stream found in file")

    fmt_info = probe.get("format") if isinstance(probe.get("format"), dict) else {}
    duration = parse_float(fmt_info.get("duration")) or 0.0
    sample_rate = _positive(parse_int(audio_stream.get("sample_rate")), DEFAULT_SAMPLE_RATE)
    channels = _positive(parse_int(audio_stream.get("channels")), DEFAULT_CHANNELS)
    bit_rate = _positive(parse_int(fmt_info.get("bit_rate")), 0)

    return Result.Ok(
        AudioMetadata(
            duration=max(0.0, duration),
            sample_rate=sample_rate,
            channels=channels,
            format=fmt,
            file_size=file_size,
            bit_rate=bit_rate,
        )
    )


class MetadataProber:
    """
    Resolves AudioMetadata for an existing file.

    Only a missing file is reported as an error; probe failures are logged and
    answered with an estimate.
    """

    def __init__(self, ffprobe: FFProbe, availability: DecoderAvailability):
        self._ffprobe = ffprobe
        self._availability = availability

    async def probe(self, file_path: str) -> Result[AudioMetadata]:
        st = stat_audio_file(file_path)
        if not st.ok or st.data is None:
            return st.forward("Audio file not found")

        file_size = int(st.data.st_size)
        fmt = extension_token(file_path)

        if not self._availability.available:
            return self._estimate(file_path, file_size, fmt, ErrorCode.TOOL_MISSING.value)

        probed = await self._ffprobe.aread(file_path)
        if not probed.ok or not isinstance(probed.data, dict):
            return self._estimate(file_path, file_size, fmt, probed.code, probed.error)

        parsed = metadata_from_probe(probed.data, fmt, file_size)
        if not parsed.ok or parsed.data is None:
            return self._estimate(file_path, file_size, fmt, parsed.code, parsed.error)
        return Result.Ok(parsed.data, source="ffprobe")

    def _estimate(
        self,
        file_path: str,
        file_size: int,
        fmt: str,
        reason: str,
        detail: Optional[str] = None,
    ) -> Result[AudioMetadata]:
        log_structured(
            logger,
            logging.WARNING,
            "Using fallback metadata estimation",
            event="metadata_fallback",
            path=file_path,
            reason=reason,
            detail=detail,
        )
        return Result.Ok(estimate_metadata(file_size, fmt), source="estimate", fallback_reason=reason)
