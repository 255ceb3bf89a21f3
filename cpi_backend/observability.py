"""
Request correlation and request logging for the aiohttp application.
"""
from __future__ import annotations

import logging
import time
from typing import Any
from uuid import uuid4

from aiohttp import web

from .shared import get_logger, log_structured, request_id_var

logger = get_logger(__name__)

MS_PER_S = 1000.0
_APP_KEY_OBSERVABILITY_INSTALLED: web.AppKey[bool] = web.AppKey("_cpi_observability_installed", bool)


def _new_request_id() -> str:
    return uuid4().hex


def _get_request_id(request: web.Request) -> str:
    rid = (request.headers.get("X-Request-ID") or "").strip()
    return rid or _new_request_id()


def _response_status_code(response: Any) -> int:
    try:
        return int(getattr(response, "status", 200) or 200)
    except (TypeError, ValueError):
        return 200


def _emit_request_log(request: web.Request, *, status: int | None, duration_ms: float, error: str | None) -> None:
    fields: dict[str, Any] = {
        "method": request.method,
        "path": request.path,
        "status": status,
        "duration_ms": round(duration_ms, 2),
    }
    if error:
        fields["error"] = error
    if status is not None and status >= 500:
        log_structured(logger, logging.ERROR, "Request handled", **fields)
    else:
        log_structured(logger, logging.DEBUG, "Request handled", **fields)


@web.middleware
async def request_context_middleware(request: web.Request, handler):
    """Add request-id correlation and lightweight request logging."""
    rid = _get_request_id(request)
    request["cpi_request_id"] = rid
    token = request_id_var.set(rid)
    start = time.perf_counter()
    status: int | None = None
    error: str | None = None
    try:
        response = await handler(request)
        status = _response_status_code(response)
        response.headers["X-Request-ID"] = rid
        return response
    except web.HTTPException as exc:
        status = exc.status
        exc.headers["X-Request-ID"] = rid
        raise
    except Exception as exc:
        status = 500
        error = f"{exc.__class__.__name__}: {exc}"
        raise
    finally:
        duration_ms = (time.perf_counter() - start) * MS_PER_S
        request_id_var.reset(token)
        _emit_request_log(request, status=status, duration_ms=duration_ms, error=error)


def ensure_observability(app: web.Application) -> None:
    """Install the request context middleware once per application."""
    if app.get(_APP_KEY_OBSERVABILITY_INSTALLED):
        return
    app.middlewares.append(request_context_middleware)
    app[_APP_KEY_OBSERVABILITY_INSTALLED] = True
