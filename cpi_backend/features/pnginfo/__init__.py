"""
PNG prompt metadata feature: chunk scanning, prompt extraction, inspection service.
"""

from .chunks import (
    ITXT_COMPRESSED_SENTINEL,
    ZTXT_COMPRESSED_SENTINEL,
    TextChunk,
    scan_png_text_chunks,
)
from .extractor import PromptGraphNode, PromptPayload, extract_prompt_payload
from .service import inspect_png_bytes, settings_rows

__all__ = [
    "ITXT_COMPRESSED_SENTINEL",
    "ZTXT_COMPRESSED_SENTINEL",
    "TextChunk",
    "scan_png_text_chunks",
    "PromptGraphNode",
    "PromptPayload",
    "extract_prompt_payload",
    "inspect_png_bytes",
    "settings_rows",
]
