"""
PCM extraction: decode an audio file to mono 8 kHz s16le through a scoped temp file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from ...adapters.tools import FFmpeg
from ...config import PCM_CHANNELS, PCM_FORMAT, PCM_SAMPLE_RATE, WAVEFORM_TEMP_DIR
from ...shared import ErrorCode, Result, get_logger, log_structured
from ...tool_detect import DecoderAvailability

logger = get_logger(__name__)

TEMP_PREFIX = "waveform_"
TEMP_SUFFIX = ".raw"


class PcmExtractor:
    """
    Runs one ffmpeg transcode per call into a fresh temp file and returns its bytes.

    The temp file is removed before `extract` returns or raises, including
    when the awaiting task is cancelled.
    """

    def __init__(
        self,
        ffmpeg: FFmpeg,
        availability: DecoderAvailability,
        temp_dir: Optional[str] = None,
    ):
        self._ffmpeg = ffmpeg
        self._availability = availability
        self._temp_dir = temp_dir or WAVEFORM_TEMP_DIR

    async def extract(self, file_path: str) -> Result[bytes]:
        if not self._availability.available:
            return Result.Err(ErrorCode.TOOL_MISSING, "ffmpeg is not available")

        allocated = self._allocate_temp_path()
        if not allocated.ok or allocated.data is None:
            return allocated.forward("Failed to allocate temp file")
        temp_path = allocated.data

        try:
            decoded = await self._ffmpeg.transcode_pcm(
                file_path,
                str(temp_path),
                sample_rate=PCM_SAMPLE_RATE,
                channels=PCM_CHANNELS,
                sample_format=PCM_FORMAT,
            )
            if not decoded.ok:
                return decoded.forward("ffmpeg failed")
            try:
                raw = temp_path.read_bytes()
            except OSError as exc:
                return Result.Err(ErrorCode.DECODE_FAILED, f"Failed to read decoded samples: {exc}")
            return Result.Ok(raw, bytes=len(raw))
        finally:
            self._release(temp_path)

    def _allocate_temp_path(self) -> Result[Path]:
        try:
            os.makedirs(self._temp_dir, exist_ok=True)
            fd, name = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=TEMP_SUFFIX, dir=self._temp_dir)
            os.close(fd)
        except OSError as exc:
            logger.error(f"Failed to create waveform temp file in {self._temp_dir}: {exc}")
            return Result.Err(ErrorCode.DECODE_FAILED, f"Failed to create temp file: {exc}")
        return Result.Ok(Path(name))

    def _release(self, temp_path: Path) -> None:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError as exc:
            log_structured(
                logger,
                logging.WARNING,
                "Failed to remove waveform temp file",
                event="temp_cleanup_failed",
                path=str(temp_path),
                reason=str(exc),
            )
