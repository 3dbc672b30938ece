"""
Size-based metadata estimation used when the file cannot be probed.
"""

from __future__ import annotations

from .models import AudioMetadata

MIN_ESTIMATED_DURATION = 30.0
MAX_ESTIMATED_DURATION = 7200.0
DEFAULT_ESTIMATED_DURATION = 300.0

ESTIMATED_SAMPLE_RATE = 44100
ESTIMATED_CHANNELS = 2

# Bytes per second of audio for each container we know how to guess.
_BYTES_PER_SECOND = {
    "wav": 44100 * 2 * 2,    # CD quality PCM: 44.1 kHz, stereo, 16-bit
    "mp3": 128_000 / 8,      # 128 kbps
    "flac": 100_000,         # typical lossless compression
}


def estimate_duration(file_size: int, fmt: str) -> float:
    """Duration in seconds guessed from size and format, clamped to [30, 7200]."""
    rate = _BYTES_PER_SECOND.get(fmt)
    duration = DEFAULT_ESTIMATED_DURATION if rate is None else file_size / rate
    return max(MIN_ESTIMATED_DURATION, min(MAX_ESTIMATED_DURATION, duration))


def estimate_metadata(file_size: int, fmt: str) -> AudioMetadata:
    return AudioMetadata(
        duration=estimate_duration(file_size, fmt),
        sample_rate=ESTIMATED_SAMPLE_RATE,
        channels=ESTIMATED_CHANNELS,
        format=fmt,
        file_size=file_size,
    )
