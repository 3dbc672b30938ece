"""
Waveform feature module.

Audio metadata probing and fixed-width waveform extraction with estimate/synthetic fallbacks.
"""

from .estimator import estimate_metadata
from .extractor import PcmExtractor
from .models import AudioMetadata, WaveformData
from .peaks import reduce_to_peaks
from .prober import MetadataProber
from .service import WaveformService
from .synth import synthesize_peaks, synthesize_waveform

__all__ = [
    "AudioMetadata",
    "WaveformData",
    "MetadataProber",
    "PcmExtractor",
    "WaveformService",
    "estimate_metadata",
    "reduce_to_peaks",
    "synthesize_peaks",
    "synthesize_waveform",
]
