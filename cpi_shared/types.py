"""
Shared types, enums, and constants.
"""
from enum import Enum
from typing import Final, Literal

# PNG text chunk kinds surfaced by the scanner
ChunkKind = Literal["tEXt", "iTXt", "zTXt"]

TEXT_CHUNK_KINDS: Final[frozenset[str]] = frozenset({"tEXt", "iTXt", "zTXt"})

PNG_SIGNATURE: Final[bytes] = bytes([137, 80, 78, 71, 13, 10, 26, 10])

# Error codes
class ErrorCode(str, Enum):
    """Standardized error codes (string enum)."""

    # Client / validation
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_FORMAT = "INVALID_FORMAT"

    # Transport
    UPLOAD_FAILED = "UPLOAD_FAILED"

    # Server
    INTERNAL_ERROR = "INTERNAL_ERROR"
