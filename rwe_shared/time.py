"""
Timing helper for decode/reduce performance logging.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager


class Elapsed:
    """Wall-clock seconds spent inside a `timer` block; final once the block exits."""

    __slots__ = ("seconds",)

    def __init__(self) -> None:
        self.seconds = 0.0

    @property
    def ms(self) -> float:
        return round(self.seconds * 1000.0, 1)


@contextmanager
def timer(label: str, logger: logging.Logger) -> Iterator[Elapsed]:
    """
    Usage:
        with timer("waveform extraction", logger) as elapsed:
            await extractor.extract(path)
        meta["elapsed_ms"] = elapsed.ms
    """
    elapsed = Elapsed()
    start = time.perf_counter()
    try:
        yield elapsed
    finally:
        elapsed.seconds = time.perf_counter() - start
        logger.debug("%s took %.3fs", label, elapsed.seconds)
