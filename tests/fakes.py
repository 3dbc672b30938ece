"""Test doubles for the external decoder."""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from rwe_backend.shared import Result
from rwe_backend.tool_detect import DecoderAvailability


class FakeFFmpeg:
    """Writes `payload` to the destination, or fails after leaving a partial file behind."""

    def __init__(self, payload: bytes = b"", error_code: Optional[str] = None, hang: bool = False):
        self.bin = "ffmpeg"
        self.payload = payload
        self.error_code = error_code
        self.hang = hang
        self.calls: list[dict] = []

    def is_available(self) -> bool:
        return True

    async def transcode_pcm(self, src, dst, *, sample_rate, channels, sample_format):
        self.calls.append({
            "src": src,
            "dst": dst,
            "sample_rate": sample_rate,
            "channels": channels,
            "sample_format": sample_format,
        })
        if self.hang:
            Path(dst).write_bytes(b"\x00\x01")
            await asyncio.sleep(3600)
        if self.error_code:
            Path(dst).write_bytes(b"\x00\x01partial")
            return Result.Err(self.error_code, "Invalid data found when processing input")
        Path(dst).write_bytes(self.payload)
        return Result.Ok(dst)


class FakeFFProbe:
    def __init__(self, data: Optional[dict] = None, error_code: Optional[str] = None):
        self.bin = "ffprobe"
        self.data = data
        self.error_code = error_code
        self.calls: list[str] = []

    def is_available(self) -> bool:
        return True

    async def aread(self, path: str) -> Result[dict]:
        self.calls.append(path)
        if self.error_code:
            return Result.Err(self.error_code, "ffprobe failed")
        return Result.Ok(self.data or {})


class CountingDetector:
    def __init__(self, available: bool = True):
        self.available = available
        self.calls = 0

    def __call__(self, ffmpeg_bin, ffprobe_bin, *, timeout, min_version):
        self.calls += 1
        if not self.available:
            return DecoderAvailability.unavailable("ffmpeg not found")
        return DecoderAvailability(
            available=True,
            ffmpeg_version="ffmpeg version 6.1.1",
            ffprobe_available=True,
            ffprobe_version="ffprobe version 6.1.1",
        )


def probe_payload(duration="10.0", sample_rate="44100", channels=2, bit_rate="128000") -> dict:
    audio = {"codec_type": "audio", "codec_name": "mp3", "sample_rate": sample_rate, "channels": channels}
    return {
        "format": {"duration": duration, "bit_rate": bit_rate},
        "streams": [audio],
        "audio_stream": audio,
    }
