"""External tool adapters."""
from .ffmpeg import FFmpeg
from .ffprobe import FFProbe, find_audio_stream

__all__ = ["FFmpeg", "FFProbe", "find_audio_stream"]
