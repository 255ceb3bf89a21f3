"""Backend-facing alias for shared utilities.

Backend modules import shared helpers from here so the backend package has a
single seam onto `cpi_shared`.
"""

from __future__ import annotations

import cpi_shared as _root_shared

Result = _root_shared.Result
ErrorCode = _root_shared.ErrorCode
FormatError = _root_shared.FormatError
ChunkKind = _root_shared.ChunkKind
PNG_SIGNATURE = _root_shared.PNG_SIGNATURE
TEXT_CHUNK_KINDS = _root_shared.TEXT_CHUNK_KINDS
get_logger = _root_shared.get_logger
log_success = _root_shared.log_success
log_structured = _root_shared.log_structured
request_id_var = _root_shared.request_id_var
sanitize_error_message = _root_shared.sanitize_error_message
timer = _root_shared.timer

__all__ = [
    "Result",
    "ErrorCode",
    "FormatError",
    "ChunkKind",
    "PNG_SIGNATURE",
    "TEXT_CHUNK_KINDS",
    "get_logger",
    "log_success",
    "log_structured",
    "request_id_var",
    "sanitize_error_message",
    "timer",
]
