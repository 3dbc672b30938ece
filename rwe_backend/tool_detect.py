"""
Decoder detection for FFmpeg and FFprobe.

Detection runs once per service lifetime; the outcome is an immutable
DecoderAvailability handed to the components that need it.
"""
import logging
import re
import shutil
import subprocess
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .shared import get_logger, log_structured, log_success

logger = get_logger(__name__)


@dataclass(frozen=True)
class DecoderAvailability:
    """Outcome of the one-shot decoder probe."""

    available: bool
    ffmpeg_version: Optional[str] = None
    ffprobe_available: bool = False
    ffprobe_version: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def unavailable(cls, reason: str) -> "DecoderAvailability":
        return cls(available=False, reason=reason)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "available": self.available,
            "reason": self.reason,
            "ffmpeg": {"version": self.ffmpeg_version},
            "ffprobe": {"available": self.ffprobe_available, "version": self.ffprobe_version},
        }


def parse_tool_version(value: Optional[str]) -> Tuple[int, ...]:
    if not value:
        return ()
    # "ffmpeg version n6.1.1-static ..." -> the token after "version"
    match = re.search(r"version\s+\S*?(\d+(?:\.\d+)*)", value)
    text = match.group(1) if match else value
    return tuple(int(part) for part in re.findall(r"\d+", text))


def version_satisfies_minimum(actual: Optional[str], minimum: str) -> bool:
    if not minimum:
        return True
    minimum_parts = parse_tool_version(minimum)
    if not minimum_parts:
        return True
    actual_parts = parse_tool_version(actual or "")
    if not actual_parts:
        return False
    length = max(len(actual_parts), len(minimum_parts))
    padded_actual = list(actual_parts) + [0] * (length - len(actual_parts))
    padded_minimum = list(minimum_parts) + [0] * (length - len(minimum_parts))
    return tuple(padded_actual) >= tuple(padded_minimum)


def _run_command(cmd: list[str], timeout: float) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        timeout=timeout,
        check=False,
    )


def _first_line(text: str) -> str:
    return text.split("\n")[0].strip() if text else ""


def _read_version(bin_name: str, timeout: float) -> Optional[str]:
    try:
        result = _run_command([bin_name, "-version"], timeout)
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("%s -version failed: %s", bin_name, exc)
        return None
    if result.returncode != 0:
        return None
    return _first_line(result.stdout) or None


def detect_decoder(
    ffmpeg_bin: str = "ffmpeg",
    ffprobe_bin: str = "ffprobe",
    *,
    timeout: float = 5.0,
    min_version: str = "",
) -> DecoderAvailability:
    """
    Query FFmpeg's format listing to decide whether decoding is possible.

    Never raises: a missing binary, a failing command or a timeout all yield
    an unavailable result.
    """
    ffmpeg_bin = ffmpeg_bin or "ffmpeg"
    ffprobe_bin = ffprobe_bin or "ffprobe"
    if shutil.which(ffmpeg_bin) is None:
        logger.debug("FFmpeg binary not found in PATH: %s", ffmpeg_bin)

    try:
        result = _run_command([ffmpeg_bin, "-hide_banner", "-formats"], timeout)
    except (FileNotFoundError, PermissionError) as exc:
        return _report_unavailable(f"ffmpeg not found: {exc}")
    except subprocess.TimeoutExpired:
        return _report_unavailable(f"ffmpeg -formats timed out after {timeout}s")
    except Exception as exc:
        return _report_unavailable(f"ffmpeg detection raised unexpected error: {exc}")

    if result.returncode != 0:
        return _report_unavailable(f"ffmpeg -formats failed: {result.stderr.strip() or result.returncode}")

    ffmpeg_version = _read_version(ffmpeg_bin, timeout)
    if not version_satisfies_minimum(ffmpeg_version, min_version):
        logger.warning(
            "FFmpeg version %s does not meet minimum required %s",
            ffmpeg_version or "<unknown>",
            min_version,
        )
        return _report_unavailable(f"ffmpeg older than {min_version}", ffmpeg_version=ffmpeg_version)

    ffprobe_version = _read_version(ffprobe_bin, timeout)
    if ffprobe_version is None:
        logger.warning("FFprobe not usable (%s) - metadata will be estimated from file size", ffprobe_bin)

    log_success(logger, f"FFmpeg is available for audio processing: {ffmpeg_version or '<unknown version>'}")
    return DecoderAvailability(
        available=True,
        ffmpeg_version=ffmpeg_version,
        ffprobe_available=ffprobe_version is not None,
        ffprobe_version=ffprobe_version,
    )


def _report_unavailable(reason: str, *, ffmpeg_version: Optional[str] = None) -> DecoderAvailability:
    log_structured(
        logger,
        logging.WARNING,
        "FFmpeg not available, waveforms will use fallback method",
        event="decoder_unavailable",
        reason=reason,
    )
    return DecoderAvailability(available=False, ffmpeg_version=ffmpeg_version, reason=reason)
