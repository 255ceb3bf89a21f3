"""
PNG text chunk scanner.

Walks the chunk stream of a PNG buffer and returns the textual metadata chunks
(tEXt, iTXt, zTXt) in file order. Pixel data and CRCs are never inspected, and
compressed payloads are reported with a sentinel instead of being inflated.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from ...shared import PNG_SIGNATURE, TEXT_CHUNK_KINDS, ChunkKind, FormatError, get_logger

logger = get_logger(__name__)

ITXT_COMPRESSED_SENTINEL = "[compressed iTXt data not decoded]"
ZTXT_COMPRESSED_SENTINEL = "[compressed zTXt data not decoded]"

_CHUNK_HEADER = struct.Struct(">I4s")
_CRC_SIZE = 4


@dataclass(frozen=True)
class TextChunk:
    keyword: str
    text: str
    kind: ChunkKind


def _decode_text(data: bytes, encoding: str) -> str:
    try:
        return data.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        return data.decode("utf-8", errors="replace")


def _find_null(data: bytes, start: int = 0) -> int:
    if start >= len(data):
        return -1
    return data.find(b"\x00", start)


def _skip_null_terminated(data: bytes, cursor: int) -> int:
    """Move past a NUL-terminated field; a missing terminator means an empty field."""
    end = _find_null(data, cursor)
    return cursor if end == -1 else end + 1


def _parse_text(data: bytes) -> TextChunk | None:
    split = _find_null(data)
    if split == -1:
        return None
    keyword = _decode_text(data[:split], "latin-1")
    text = _decode_text(data[split + 1:], "latin-1")
    return TextChunk(keyword=keyword, text=text, kind="tEXt")


def _parse_itxt(data: bytes) -> TextChunk | None:
    keyword_end = _find_null(data)
    if keyword_end == -1:
        return None
    keyword = _decode_text(data[:keyword_end], "latin-1")

    cursor = keyword_end + 1
    compression_flag = data[cursor] if cursor < len(data) else None
    # compression flag + compression method
    cursor += 2
    cursor = _skip_null_terminated(data, cursor)  # language tag
    cursor = _skip_null_terminated(data, cursor)  # translated keyword

    if compression_flag == 0:
        text = _decode_text(data[cursor:], "utf-8")
    else:
        text = ITXT_COMPRESSED_SENTINEL
    return TextChunk(keyword=keyword, text=text, kind="iTXt")


def _parse_ztxt(data: bytes) -> TextChunk | None:
    split = _find_null(data)
    if split == -1:
        return None
    keyword = _decode_text(data[:split], "latin-1")
    return TextChunk(keyword=keyword, text=ZTXT_COMPRESSED_SENTINEL, kind="zTXt")


_PARSERS = {
    "tEXt": _parse_text,
    "iTXt": _parse_itxt,
    "zTXt": _parse_ztxt,
}


def scan_png_text_chunks(buffer: bytes) -> list[TextChunk]:
    """
    Extract the text chunks of a PNG buffer, in file order.

    Raises:
        FormatError: when the buffer does not start with the PNG signature.

    A truncated tail ends the scan quietly; malformed text chunks are dropped.
    """
    data = bytes(buffer)
    if data[: len(PNG_SIGNATURE)] != PNG_SIGNATURE:
        raise FormatError()

    chunks: list[TextChunk] = []
    offset = len(PNG_SIGNATURE)
    total = len(data)

    while offset + _CHUNK_HEADER.size <= total:
        length, raw_type = _CHUNK_HEADER.unpack_from(data, offset)
        chunk_type = raw_type.decode("latin-1")
        data_start = offset + _CHUNK_HEADER.size
        data_end = data_start + length

        if data_end > total:
            logger.debug(
                "Stopping at truncated %s chunk (offset=%s, declared=%s, available=%s)",
                chunk_type,
                offset,
                length,
                total - data_start,
            )
            break

        if chunk_type in TEXT_CHUNK_KINDS:
            record = _PARSERS[chunk_type](data[data_start:data_end])
            if record is None:
                logger.debug("Dropping %s chunk without keyword terminator at offset %s", chunk_type, offset)
            else:
                chunks.append(record)

        offset = data_end + _CRC_SIZE

    return chunks
