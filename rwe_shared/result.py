"""
Result type returned by adapters and services instead of raising.

A decoder fault is data, not an exception: callers branch on `ok`, read
`code` (an ErrorCode value) and carry provenance such as "source" and
"fallback_reason" in `meta`.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from .types import ErrorCode

T = TypeVar("T")


@dataclass
class Result(Generic[T]):
    """
    Usage:
        probed = await ffprobe.aread(path)
        if not probed.ok:
            return estimate(...)  # probed.code == "FFPROBE_ERROR"
        return Result.Ok(metadata, source="ffprobe")
    """
    ok: bool
    data: Optional[T] = None
    error: Optional[str] = None
    code: str = "OK"  # OK, NOT_FOUND, TOOL_MISSING, FFPROBE_ERROR, DECODE_FAILED, etc.
    meta: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def Ok(data: T, **meta: Any) -> "Result[T]":
        return Result(ok=True, data=data, code="OK", meta=meta)

    @staticmethod
    def Err(code: ErrorCode | str | Enum, error: str, **meta: Any) -> "Result[T]":
        code_value = code.value if isinstance(code, Enum) else code
        return Result(ok=False, error=error, code=str(code_value), meta=meta)

    @property
    def source(self) -> Optional[str]:
        """Provenance recorded by the producer: ffprobe, estimate, decoded or synthetic."""
        return self.meta.get("source")

    def forward(self, default_error: str) -> "Result[Any]":
        """Re-emit this failure as a Result of another payload type, keeping code and meta."""
        return Result(ok=False, error=self.error or default_error, code=self.code, meta=dict(self.meta))
