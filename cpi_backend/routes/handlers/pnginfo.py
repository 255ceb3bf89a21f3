"""
PNG prompt inspection endpoint.
"""
from aiohttp import web

from cpi_backend import config
from cpi_backend.features.pnginfo import inspect_png_bytes
from cpi_backend.shared import ErrorCode, Result, get_logger
from cpi_backend.utils import parse_bool

from ..core import _json_response, _read_upload_bytes, safe_error_message

logger = get_logger(__name__)


def register_pnginfo_routes(routes: web.RouteTableDef) -> None:
    """Register POST /cpi/pnginfo."""

    @routes.post("/cpi/pnginfo")
    async def inspect_pnginfo(request: web.Request) -> web.Response:
        """
        Extract prompts and sampler settings from an uploaded PNG.

        Body: multipart form data with a 'file' field, or the raw PNG bytes.
        Query params:
            - chunks: bool (optional) - include the text chunk listing
        """
        body = await _read_upload_bytes(request)
        if not body.ok:
            return _json_response(body)

        include_chunks = parse_bool(request.query.get("chunks"), config.INCLUDE_CHUNKS)
        try:
            result = inspect_png_bytes(body.data, include_chunks=include_chunks)
        except Exception as exc:
            logger.error("PNG inspection failed: %s", exc, exc_info=True)
            return _json_response(
                Result.Err(ErrorCode.INTERNAL_ERROR, safe_error_message(exc, "PNG inspection failed")),
                status=500,
            )
        return _json_response(result)
