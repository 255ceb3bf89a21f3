"""
PNG inspection service: scan + extract behind a Result.
"""

from __future__ import annotations

from typing import Any

from ...shared import ErrorCode, FormatError, Result, get_logger, timer
from .chunks import TextChunk, scan_png_text_chunks
from .extractor import PromptPayload, extract_prompt_payload

logger = get_logger(__name__)


def settings_rows(payload: PromptPayload) -> list[dict[str, str]]:
    """Settings as ordered label/value rows, in discovery order."""
    return [{"label": label, "value": value} for label, value in payload.settings.items()]


def _chunk_summary(chunk: TextChunk) -> dict[str, Any]:
    return {"keyword": chunk.keyword, "kind": chunk.kind, "length": len(chunk.text)}


def inspect_png_bytes(buffer: Any, *, include_chunks: bool = True) -> Result[dict[str, Any]]:
    """
    Extract the ComfyUI prompt payload from raw PNG bytes.

    Returns:
        Result.Ok({"positive_prompt", "negative_prompt", "settings", ["chunks"]})
        or Result.Err(INVALID_INPUT | INVALID_FORMAT, message).
    """
    if not isinstance(buffer, (bytes, bytearray, memoryview)):
        return Result.Err(ErrorCode.INVALID_INPUT, "Expected PNG bytes")

    with timer("png inspection", logger):
        try:
            chunks = scan_png_text_chunks(bytes(buffer))
        except FormatError as exc:
            logger.debug("Rejected upload: %s", exc)
            return Result.Err(exc.code, str(exc))
        payload = extract_prompt_payload(chunks)

    data: dict[str, Any] = {
        "positive_prompt": payload.positive_prompt,
        "negative_prompt": payload.negative_prompt,
        "settings": settings_rows(payload),
    }
    if include_chunks:
        data["chunks"] = [_chunk_summary(chunk) for chunk in chunks]
    return Result.Ok(data, chunk_count=len(chunks))
