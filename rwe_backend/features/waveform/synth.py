"""
Synthetic waveform envelope used when real samples are unavailable.

The output only looks like audio; it must always be tagged as synthetic.
"""

from __future__ import annotations

import random
from typing import List, Optional

from .models import AudioMetadata, WaveformData

FADE_FRACTION = 0.05
BASE_LEVEL_MIN = 0.2
BASE_LEVEL_SPAN = 0.5
PEAK_PROBABILITY = 0.1
PEAK_MAX = 0.3
VARIATION_SPAN = 0.2


def envelope_at(progress: float) -> float:
    """Linear fade-in over the first 5%, fade-out over the last 5%, 1.0 in between."""
    if progress < FADE_FRACTION:
        return progress / FADE_FRACTION
    if progress > 1.0 - FADE_FRACTION:
        return (1.0 - progress) / FADE_FRACTION
    return 1.0


def synthesize_peaks(width: int, rng: Optional[random.Random] = None) -> List[float]:
    rng = rng or random.Random()
    peaks: List[float] = []
    for i in range(width):
        envelope = envelope_at(i / width)
        base_level = BASE_LEVEL_MIN + rng.random() * BASE_LEVEL_SPAN
        peak = rng.random() * PEAK_MAX if rng.random() < PEAK_PROBABILITY else 0.0
        variation = (rng.random() - 0.5) * VARIATION_SPAN
        level = (base_level + peak + variation) * envelope
        peaks.append(min(1.0, max(0.0, level)))
    return peaks


def samples_per_pixel(metadata: AudioMetadata, width: int) -> int:
    return int(metadata.duration * metadata.sample_rate // width)


def synthesize_waveform(
    metadata: AudioMetadata,
    width: int,
    rng: Optional[random.Random] = None,
) -> WaveformData:
    return WaveformData(
        peaks=tuple(synthesize_peaks(width, rng)),
        duration=metadata.duration,
        samples_per_pixel=samples_per_pixel(metadata, width),
        sample_rate=metadata.sample_rate,
        channels=metadata.channels,
        source="synthetic",
    )
