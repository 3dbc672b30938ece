"""
Peak reduction of 16-bit little-endian PCM into fixed-width display buckets.
"""

from __future__ import annotations

from typing import List

import numpy as np

FULL_SCALE = 32768.0
SAMPLE_WIDTH = 2


def decode_s16le(raw: bytes) -> np.ndarray:
    """Interpret `raw` as signed 16-bit LE samples; a trailing odd byte is ignored."""
    even_len = len(raw) - (len(raw) % SAMPLE_WIDTH)
    return np.frombuffer(raw[:even_len], dtype="<i2")


def reduce_to_peaks(raw: bytes, width: int) -> List[float]:
    """
    Reduce a raw s16le buffer to `width` peak magnitudes in [0, 1].

    Each bucket covers floor(len(raw) / (width * 2)) samples and reports the
    maximum |sample| / 32768 inside it. Samples past width * bucket_size are
    not represented; a buffer shorter than `width` samples yields all zeros.
    """
    if width < 1:
        raise ValueError(f"width must be >= 1, got {width}")

    samples_per_bucket = len(raw) // (width * SAMPLE_WIDTH)
    if samples_per_bucket == 0:
        return [0.0] * width

    # int32 so that |-32768| does not wrap
    samples = decode_s16le(raw)[: width * samples_per_bucket].astype(np.int32)
    buckets = np.abs(samples).reshape(width, samples_per_bucket)
    return (buckets.max(axis=1) / FULL_SCALE).tolist()
