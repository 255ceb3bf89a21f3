"""
Core utilities for route handlers.
"""
from .request_body import _read_upload_bytes
from .response import _json_response, safe_error_message

__all__ = [
    "_json_response",
    "_read_upload_bytes",
    "safe_error_message",
]
