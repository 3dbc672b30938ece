"""
Subprocess teardown shared by the FFmpeg and FFprobe adapters.
"""
import asyncio


async def terminate_process(process: asyncio.subprocess.Process) -> None:
    """Kill `process` if still running and reap it."""
    try:
        process.kill()
    except ProcessLookupError:
        pass
    await process.wait()
