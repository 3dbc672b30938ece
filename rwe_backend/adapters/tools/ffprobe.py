"""
FFprobe adapter for audio stream/format introspection.
"""
import asyncio
import json
import os
from typing import List, Optional

from ...config import FFPROBE_TIMEOUT
from ...shared import ErrorCode, Result, get_logger
from .executable import resolve_executable
from .process import terminate_process

logger = get_logger(__name__)


class FFProbe:
    """
    FFprobe wrapper for audio metadata probing.

    Never raises exceptions - always returns Result.
    """

    def __init__(self, bin_name: str = "ffprobe", timeout: Optional[float] = None):
        """
        Initialize FFprobe adapter.

        Args:
            bin_name: FFprobe binary name or path
            timeout: Command timeout in seconds
        """
        self.bin = bin_name
        self.timeout = float(timeout) if timeout is not None else float(FFPROBE_TIMEOUT)
        self._resolved_bin: Optional[str] = resolve_executable(self.bin, "ffprobe")
        self._available = self._resolved_bin is not None

    def is_available(self) -> bool:
        """Check if ffprobe resolved to an executable."""
        return self._available

    async def aread(self, path: str) -> Result[dict]:
        """
        Probe an audio file with ffprobe through an asyncio subprocess.

        Returns:
            Result with a dict containing 'format', 'streams' and 'audio_stream'
        """
        if not self._available:
            return Result.Err(ErrorCode.TOOL_MISSING, "ffprobe not found in PATH")

        try:
            process = await asyncio.create_subprocess_exec(
                *self._build_ffprobe_cmd(path),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                close_fds=os.name != "nt",
            )
            try:
                stdout_b, stderr_b = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
            except asyncio.TimeoutError:
                await terminate_process(process)
                logger.error(f"ffprobe timeout for {path}")
                return Result.Err(ErrorCode.TIMEOUT, f"ffprobe timeout after {self.timeout}s")
            except asyncio.CancelledError:
                await asyncio.shield(terminate_process(process))
                raise
            stdout = (stdout_b or b"").decode("utf-8", errors="replace")
            stderr = (stderr_b or b"").decode("utf-8", errors="replace")
            return self._parse_ffprobe_output(stdout, stderr, process.returncode, path)
        except json.JSONDecodeError as e:
            logger.error(f"ffprobe JSON parse error: {e}")
            return Result.Err(ErrorCode.PARSE_ERROR, f"Failed to parse ffprobe output: {e}")
        except OSError as e:
            logger.error(f"ffprobe failed to start: {e}")
            return Result.Err(ErrorCode.FFPROBE_ERROR, str(e))

    def _build_ffprobe_cmd(self, path: str) -> List[str]:
        return [
            self._resolved_bin or self.bin,
            "-v", "error",
            "-print_format", "json",
            "-show_format",
            "-show_streams",
            path,
        ]

    def _parse_ffprobe_output(
        self,
        stdout: str,
        stderr: str,
        returncode: Optional[int],
        path: str,
    ) -> Result[dict]:
        if returncode != 0:
            stderr_msg = stderr.strip()
            logger.warning(f"ffprobe error for {path}: {stderr_msg}")
            return Result.Err(ErrorCode.FFPROBE_ERROR, stderr_msg or "ffprobe command failed")
        if not stdout.strip():
            logger.warning(f"ffprobe returned empty output for {path}")
            return Result.Err(ErrorCode.FFPROBE_ERROR, "No ffprobe output")
        data = json.loads(stdout)
        if not isinstance(data, dict):
            return Result.Err(ErrorCode.PARSE_ERROR, "Invalid ffprobe output format")
        streams = data.get("streams")
        if not isinstance(streams, list):
            streams = []
        fmt = data.get("format")
        result = {
            "format": fmt if isinstance(fmt, dict) else {},
            "streams": streams,
            "audio_stream": find_audio_stream(streams),
        }
        return Result.Ok(result)


def find_audio_stream(streams: list) -> dict:
    """Find first audio stream in streams list."""
    for stream in streams:
        if isinstance(stream, dict) and stream.get("codec_type") == "audio":
            return stream
    return {}
