"""
Configuration for the PNG prompt inspector.

Values are read from the environment once, at import time.
"""
import logging
import os

from .utils import env_bool

logger = logging.getLogger(__name__)


def _env_raw(*names: str, default: str | None = None) -> str | None:
    for name in names:
        if not name:
            continue
        val = os.getenv(name)
        if val is not None and str(val).strip() != "":
            return str(val).strip()
    return default


def _env_int(default: int, *names: str, min_value: int | None = None, max_value: int | None = None) -> int:
    raw = _env_raw(*names)
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid integer for %s=%r, using default=%s", names[0] if names else "<unknown>", raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("Value too small for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, min_value)
        value = min_value
    if max_value is not None and value > max_value:
        logger.warning("Value too large for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, max_value)
        value = max_value
    return value


def _env_bool(default: bool, *names: str) -> bool:
    for name in names:
        if name and name in os.environ:
            return env_bool(name, default)
    return default


DEFAULT_MAX_UPLOAD_BYTES = 64 * 1024 * 1024
MIN_UPLOAD_BYTES = 1024

# Largest PNG body accepted by POST /cpi/pnginfo
MAX_UPLOAD_BYTES = _env_int(DEFAULT_MAX_UPLOAD_BYTES, "CPI_MAX_UPLOAD_BYTES", min_value=MIN_UPLOAD_BYTES)

# Standalone server bind address
SERVER_HOST = _env_raw("CPI_HOST", default="127.0.0.1") or "127.0.0.1"
SERVER_PORT = _env_int(8190, "CPI_PORT", min_value=1, max_value=65535)

# Include the raw chunk listing next to the extracted payload
INCLUDE_CHUNKS = _env_bool(True, "CPI_INCLUDE_CHUNKS")

DEBUG = _env_bool(False, "CPI_DEBUG")
