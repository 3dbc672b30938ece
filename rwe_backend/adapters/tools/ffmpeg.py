"""
FFmpeg adapter for transcoding audio to headerless PCM.
"""
import asyncio
import os
from typing import List, Optional

from ...config import FFMPEG_DECODE_TIMEOUT
from ...shared import ErrorCode, Result, get_logger
from .executable import resolve_executable
from .process import terminate_process

logger = get_logger(__name__)

_STDERR_TAIL_CHARS = 500


class FFmpeg:
    """
    FFmpeg wrapper for raw sample extraction.

    Never raises exceptions (except task cancellation) - always returns Result.
    """

    def __init__(self, bin_name: str = "ffmpeg", timeout: Optional[float] = None):
        self.bin = bin_name
        self.timeout = float(timeout) if timeout is not None else float(FFMPEG_DECODE_TIMEOUT)
        self._resolved_bin: Optional[str] = resolve_executable(self.bin, "ffmpeg")

    def is_available(self) -> bool:
        return self._resolved_bin is not None

    def build_transcode_cmd(
        self,
        src: str,
        dst: str,
        *,
        sample_rate: int,
        channels: int,
        sample_format: str,
    ) -> List[str]:
        return [
            self._resolved_bin or self.bin,
            "-hide_banner",
            "-nostdin",
            "-v", "error",
            "-y",
            "-i", src,
            "-vn",
            "-ac", str(channels),
            "-ar", str(sample_rate),
            "-f", sample_format,
            "-acodec", f"pcm_{sample_format}",
            dst,
        ]

    async def transcode_pcm(
        self,
        src: str,
        dst: str,
        *,
        sample_rate: int,
        channels: int,
        sample_format: str,
    ) -> Result[str]:
        """
        Decode `src` into raw PCM written to `dst`.

        The process is killed on timeout or cancellation; the caller owns `dst`
        and is responsible for removing it.

        Returns:
            Result with `dst` on success
        """
        cmd = self.build_transcode_cmd(
            src, dst, sample_rate=sample_rate, channels=channels, sample_format=sample_format
        )
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
                close_fds=os.name != "nt",
            )
        except OSError as exc:
            logger.error(f"ffmpeg failed to start: {exc}")
            return Result.Err(ErrorCode.FFMPEG_ERROR, f"ffmpeg failed to start: {exc}")

        try:
            _, stderr_b = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            await terminate_process(process)
            logger.error(f"ffmpeg timeout for {src}")
            return Result.Err(ErrorCode.TIMEOUT, f"ffmpeg timeout after {self.timeout}s")
        except asyncio.CancelledError:
            await asyncio.shield(terminate_process(process))
            raise

        if process.returncode != 0:
            stderr = (stderr_b or b"").decode("utf-8", errors="replace").strip()
            logger.warning(f"ffmpeg waveform extraction error for {src}: {stderr[-_STDERR_TAIL_CHARS:]}")
            return Result.Err(
                ErrorCode.FFMPEG_ERROR,
                stderr[-_STDERR_TAIL_CHARS:] or f"ffmpeg exited with code {process.returncode}",
                returncode=process.returncode,
            )
        return Result.Ok(dst)
