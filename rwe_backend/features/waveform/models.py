"""
Value types produced by the waveform engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple

WaveformSource = Literal["decoded", "synthetic"]


@dataclass(frozen=True)
class AudioMetadata:
    """Technical metadata for one audio file. `format` is the lower-cased extension token."""

    duration: float
    sample_rate: int
    channels: int
    format: str
    file_size: int
    bit_rate: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "duration": self.duration,
            "sampleRate": self.sample_rate,
            "channels": self.channels,
            "format": self.format,
            "fileSize": self.file_size,
        }
        if self.bit_rate is not None:
            out["bitRate"] = self.bit_rate
        return out


@dataclass(frozen=True)
class WaveformData:
    """
    Fixed-width amplitude profile.

    `peaks` always holds exactly the requested width, each value in [0, 1].
    `samples_per_pixel` is derived from metadata (duration * sample_rate / width)
    and is display-only; it is not the bucket size used to reduce decoded samples.
    """

    peaks: Tuple[float, ...]
    duration: float
    samples_per_pixel: int
    sample_rate: int
    channels: int
    source: WaveformSource

    @property
    def width(self) -> int:
        return len(self.peaks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "peaks": list(self.peaks),
            "duration": self.duration,
            "samplesPerPixel": self.samples_per_pixel,
            "sampleRate": self.sample_rate,
            "channels": self.channels,
            "source": self.source,
        }
