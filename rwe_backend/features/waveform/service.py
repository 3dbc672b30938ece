"""
Waveform service - public entry point for metadata and waveform generation.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Callable, Optional

from ...adapters.tools import FFmpeg, FFProbe
from ...config import (
    FFMPEG_MIN_VERSION,
    TOOL_DETECT_TIMEOUT,
    WAVEFORM_DEFAULT_WIDTH,
    WAVEFORM_MAX_WIDTH,
)
from ...shared import ErrorCode, Result, get_logger, log_structured, timer
from ...tool_detect import DecoderAvailability, detect_decoder
from .extractor import PcmExtractor
from .models import AudioMetadata, WaveformData
from .peaks import reduce_to_peaks
from .prober import MetadataProber
from .synth import samples_per_pixel, synthesize_waveform

logger = get_logger(__name__)

DecoderDetector = Callable[..., DecoderAvailability]


class WaveformService:
    """
    Metadata and waveform generation for audio files.

    Decoder availability is detected once by `initialize()` and never
    re-checked. Once a file is known to exist, both public operations always
    succeed: probe failures degrade to a size-based estimate and decode
    failures degrade to a synthetic waveform, each with a WARNING log.
    """

    def __init__(
        self,
        ffmpeg: FFmpeg,
        ffprobe: FFProbe,
        *,
        decoder_enabled: bool = True,
        min_version: str = FFMPEG_MIN_VERSION,
        detect_timeout: float = TOOL_DETECT_TIMEOUT,
        max_width: int = WAVEFORM_MAX_WIDTH,
        temp_dir: Optional[str] = None,
        detector: DecoderDetector = detect_decoder,
        rng: Optional[random.Random] = None,
    ):
        self.ffmpeg = ffmpeg
        self.ffprobe = ffprobe
        self._decoder_enabled = decoder_enabled
        self._min_version = min_version
        self._detect_timeout = detect_timeout
        self._max_width = max_width
        self._temp_dir = temp_dir
        self._detector = detector
        self._rng = rng or random.Random()
        self._init_lock = asyncio.Lock()
        self._availability: Optional[DecoderAvailability] = None
        self._prober: Optional[MetadataProber] = None
        self._extractor: Optional[PcmExtractor] = None

    @property
    def is_initialized(self) -> bool:
        return self._availability is not None

    @property
    def availability(self) -> Optional[DecoderAvailability]:
        return self._availability

    async def initialize(self) -> DecoderAvailability:
        """Detect the decoder once; later calls return the cached outcome."""
        if self._availability is not None:
            return self._availability
        async with self._init_lock:
            if self._availability is None:
                self._set_availability(await self._detect())
        assert self._availability is not None
        return self._availability

    async def _detect(self) -> DecoderAvailability:
        if not self._decoder_enabled:
            logger.warning("Decoder disabled by configuration - metadata and waveforms will use fallback methods")
            return DecoderAvailability.unavailable("disabled by configuration")
        return await asyncio.to_thread(
            self._detector,
            self.ffmpeg.bin,
            self.ffprobe.bin,
            timeout=self._detect_timeout,
            min_version=self._min_version,
        )

    def _set_availability(self, availability: DecoderAvailability) -> None:
        self._availability = availability
        self._prober = MetadataProber(self.ffprobe, availability)
        self._extractor = PcmExtractor(self.ffmpeg, availability, temp_dir=self._temp_dir)

    async def get_metadata(self, file_path: str) -> Result[AudioMetadata]:
        """
        Resolve technical metadata for an audio file.

        Returns:
            Result with AudioMetadata; NOT_FOUND is the only error outcome.
            meta["source"] is "ffprobe" or "estimate".
        """
        await self.initialize()
        assert self._prober is not None
        return await self._prober.probe(file_path)

    async def get_waveform(self, file_path: str, width: Optional[int] = None) -> Result[WaveformData]:
        """
        Build a `width`-bucket waveform for an audio file.

        Returns:
            Result with WaveformData; errors are NOT_FOUND (missing file) and
            INVALID_INPUT (width out of range). meta["source"] is "decoded" or
            "synthetic".
        """
        if width is None:
            width = min(WAVEFORM_DEFAULT_WIDTH, self._max_width)
        if isinstance(width, bool) or not isinstance(width, int) or not 1 <= width <= self._max_width:
            return Result.Err(ErrorCode.INVALID_INPUT, f"width must be an integer in [1, {self._max_width}]")

        meta_res = await self.get_metadata(file_path)
        if not meta_res.ok or meta_res.data is None:
            return meta_res.forward("Audio file not found")
        metadata = meta_res.data
        metadata_source = meta_res.source

        assert self._availability is not None and self._extractor is not None
        if not self._availability.available:
            return self._fallback(file_path, metadata, width, ErrorCode.TOOL_MISSING.value, metadata_source)

        try:
            with timer(f"waveform extraction for {file_path}", logger) as elapsed:
                extracted = await self._extractor.extract(file_path)
                if not extracted.ok or extracted.data is None:
                    return self._fallback(
                        file_path, metadata, width, extracted.code, metadata_source, extracted.error
                    )
                peaks = await asyncio.to_thread(reduce_to_peaks, extracted.data, width)
        except Exception as exc:
            logger.error("Failed to extract real waveform: %s", exc, exc_info=True)
            return self._fallback(
                file_path, metadata, width, ErrorCode.DECODE_FAILED.value, metadata_source, str(exc)
            )

        waveform = WaveformData(
            peaks=tuple(peaks),
            duration=metadata.duration,
            samples_per_pixel=samples_per_pixel(metadata, width),
            sample_rate=metadata.sample_rate,
            channels=metadata.channels,
            source="decoded",
        )
        return Result.Ok(waveform, source="decoded", metadata_source=metadata_source, elapsed_ms=elapsed.ms)

    def _fallback(
        self,
        file_path: str,
        metadata: AudioMetadata,
        width: int,
        reason: str,
        metadata_source: Optional[str],
        detail: Optional[str] = None,
    ) -> Result[WaveformData]:
        log_structured(
            logger,
            logging.WARNING,
            "Generating fallback waveform data",
            event="waveform_fallback",
            path=file_path,
            reason=reason,
            detail=detail,
        )
        waveform = synthesize_waveform(metadata, width, self._rng)
        return Result.Ok(
            waveform,
            source="synthetic",
            fallback_reason=reason,
            metadata_source=metadata_source,
        )
