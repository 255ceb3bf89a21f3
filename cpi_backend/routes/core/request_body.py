"""
Bounded request body reading for PNG uploads.

Guarantees:
- Never raises to handlers (returns Result)
- Enforces an upper bound on the body size to avoid memory DoS
"""

from __future__ import annotations

from typing import Any, Optional

from aiohttp import web

from cpi_backend import config
from cpi_backend.shared import ErrorCode, Result, sanitize_error_message

REQUEST_STREAM_CHUNK_BYTES = 64 * 1024
UPLOAD_FIELD_NAME = "file"


def _content_length_error(request: web.Request, limit: int) -> Optional[Result[bytes]]:
    cl = request.headers.get("Content-Length")
    if not cl:
        return None
    try:
        size = int(cl)
    except ValueError:
        return None
    if size <= limit:
        return None
    return Result.Err(ErrorCode.INVALID_INPUT, f"Upload too large ({size} > {limit})", limit=limit, size=size)


def _is_multipart(request: web.Request) -> bool:
    ctype = (request.headers.get("Content-Type") or "").lower()
    return ctype.startswith("multipart/")


async def _read_request_body_limited(request: web.Request, limit: int) -> Result[bytes]:
    buf = bytearray()
    try:
        async for chunk in request.content.iter_chunked(REQUEST_STREAM_CHUNK_BYTES):
            if not chunk:
                continue
            buf.extend(chunk)
            if len(buf) > limit:
                return Result.Err(ErrorCode.INVALID_INPUT, f"Upload too large (> {limit})", limit=limit, size=len(buf))
    except Exception as exc:
        return Result.Err(ErrorCode.UPLOAD_FAILED, sanitize_error_message(exc, "Failed to read request body"))
    return Result.Ok(bytes(buf))


async def _read_field_limited(field: Any, limit: int) -> Result[bytes]:
    buf = bytearray()
    try:
        while True:
            chunk = await field.read_chunk(REQUEST_STREAM_CHUNK_BYTES)
            if not chunk:
                break
            buf.extend(chunk)
            if len(buf) > limit:
                return Result.Err(ErrorCode.INVALID_INPUT, f"Upload too large (> {limit})", limit=limit, size=len(buf))
    except Exception as exc:
        return Result.Err(ErrorCode.UPLOAD_FAILED, sanitize_error_message(exc, "Failed to read upload"))
    return Result.Ok(bytes(buf))


async def _read_multipart_file(request: web.Request, limit: int) -> Result[bytes]:
    try:
        reader = await request.multipart()
        field = await reader.next()
    except Exception as exc:
        return Result.Err(ErrorCode.UPLOAD_FAILED, sanitize_error_message(exc, "Upload failed"))
    if field is None or str(getattr(field, "name", "") or "") != UPLOAD_FIELD_NAME:
        return Result.Err(ErrorCode.INVALID_INPUT, f"Expected '{UPLOAD_FIELD_NAME}' field")
    return await _read_field_limited(field, limit)


async def _read_upload_bytes(request: web.Request, *, max_bytes: Optional[int] = None) -> Result[bytes]:
    """
    Read an uploaded PNG, either as a multipart `file` field or as the raw body.

    Returns:
        Result.Ok(bytes) or Result.Err(code, error, ...)
    """
    limit = int(max_bytes) if max_bytes is not None else config.MAX_UPLOAD_BYTES
    limit = max(config.MIN_UPLOAD_BYTES, limit)

    length_error = _content_length_error(request, limit)
    if length_error is not None:
        return length_error

    if _is_multipart(request):
        body = await _read_multipart_file(request, limit)
    else:
        body = await _read_request_body_limited(request, limit)
    if body.ok and not body.data:
        return Result.Err(ErrorCode.INVALID_INPUT, "Empty upload")
    return body
