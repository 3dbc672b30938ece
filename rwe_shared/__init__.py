"""Shared utilities for the radio waveform engine."""
from .errors import mask_paths, public_error_message
from .log import configure_logging, get_logger, log_structured, log_success, request_id_var
from .result import Result
from .time import timer
from .types import ErrorCode, extension_token

__all__ = [
    "Result",
    "configure_logging",
    "get_logger",
    "log_success",
    "log_structured",
    "request_id_var",
    "timer",
    "ErrorCode",
    "extension_token",
    "mask_paths",
    "public_error_message",
]
