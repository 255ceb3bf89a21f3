"""Shared utilities for the ComfyUI PNG prompt inspector."""
from .errors import FormatError, sanitize_error_message
from .log import get_logger, log_structured, log_success, request_id_var
from .result import Result
from .time import timer
from .types import PNG_SIGNATURE, TEXT_CHUNK_KINDS, ChunkKind, ErrorCode

__all__ = [
    "Result",
    "get_logger",
    "log_success",
    "timer",
    "ChunkKind",
    "ErrorCode",
    "FormatError",
    "PNG_SIGNATURE",
    "TEXT_CHUNK_KINDS",
    "log_structured",
    "request_id_var",
    "sanitize_error_message",
]
