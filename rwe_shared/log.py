"""
Logging for the waveform engine.

Every logger lives under the "rwe." namespace and shares one stream handler
installed on that namespace root, so a single `configure_logging()` call
controls the whole engine.
"""
import json
import logging
import os
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Final

ROOT_LOGGER_NAME: Final[str] = "rwe"
PREFIX: Final[str] = "📻 Waveform"

SUCCESS_LEVEL: Final[int] = 25  # Between INFO (20) and WARNING (30)
logging.addLevelName(SUCCESS_LEVEL, "SUCCESS")

LEVEL_EMOJI: Final[dict[int, str]] = {
    logging.DEBUG: "🔍",
    logging.INFO: "ℹ️",
    SUCCESS_LEVEL: "✅",
    logging.WARNING: "⚠️",
    logging.ERROR: "❌",
    logging.CRITICAL: "🔥",
}

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class CorrelationFilter(logging.Filter):
    """Copy the current request id onto the record (empty outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")
        return True


class EmojiFormatter(logging.Formatter):
    """📻 Waveform [⚠️] features.waveform.service [a1b2c3]: message"""

    def format(self, record: logging.LogRecord) -> str:
        emoji = LEVEL_EMOJI.get(record.levelno, "📻")
        name = record.name[len(ROOT_LOGGER_NAME) + 1:] if record.name.startswith(ROOT_LOGGER_NAME + ".") else record.name
        rid = str(getattr(record, "request_id", "") or "").strip()
        rid_part = f" [{rid}]" if rid else ""
        line = f"{PREFIX} [{emoji}] {name}{rid_part}: {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(EmojiFormatter())
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        root.propagate = False
    return root


def configure_logging(level: str | int | None = None) -> None:
    """Set the engine log level; defaults to $RWE_LOG_LEVEL, then INFO."""
    value = level if level is not None else os.getenv("RWE_LOG_LEVEL", "INFO")
    if isinstance(value, str):
        value = logging.getLevelName(value.strip().upper())
    if not isinstance(value, int):
        value = logging.INFO
    _root_logger().setLevel(value)


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a module, named "rwe.<module path without package prefix>".

    Args:
        name: Usually __name__
    """
    if name.startswith("__main__"):
        name = "main"
    else:
        head, _, tail = name.partition(".")
        if head in ("rwe_backend", "rwe_shared") and tail:
            name = tail

    _root_logger()
    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    if not any(isinstance(f, CorrelationFilter) for f in logger.filters):
        logger.addFilter(CorrelationFilter())
    return logger


def log_success(logger: logging.Logger, message: str) -> None:
    logger.log(SUCCESS_LEVEL, message)


def log_structured(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """Emit one JSON line: {"message", "timestamp", "context": {event, path, reason, ...}}."""
    payload = {
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "context": context,
    }
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))
