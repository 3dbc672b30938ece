"""
Dependency injection - builds services.
Simple, debug-friendly DI without framework magic.
"""

from typing import Optional

from .adapters.tools import FFmpeg, FFProbe
from .config import (
    DECODER_ENABLED,
    FFMPEG_BIN,
    FFMPEG_DECODE_TIMEOUT,
    FFPROBE_BIN,
    FFPROBE_TIMEOUT,
)
from .features.waveform import WaveformService
from .shared import Result, get_logger

logger = get_logger(__name__)


def _init_tools() -> tuple[FFmpeg, FFProbe]:
    ffmpeg = FFmpeg(bin_name=FFMPEG_BIN or "ffmpeg", timeout=FFMPEG_DECODE_TIMEOUT)
    ffprobe = FFProbe(bin_name=FFPROBE_BIN or "ffprobe", timeout=FFPROBE_TIMEOUT)
    return ffmpeg, ffprobe


async def build_services(
    *,
    initialize: bool = True,
    decoder_enabled: Optional[bool] = None,
) -> Result[dict]:
    """
    Build the service container.

    Returns:
        Result with {"ffmpeg", "ffprobe", "waveform"}
    """
    ffmpeg, ffprobe = _init_tools()
    waveform = WaveformService(
        ffmpeg,
        ffprobe,
        decoder_enabled=DECODER_ENABLED if decoder_enabled is None else decoder_enabled,
    )
    if initialize:
        await waveform.initialize()

    return Result.Ok({
        "ffmpeg": ffmpeg,
        "ffprobe": ffprobe,
        "waveform": waveform,
    })
