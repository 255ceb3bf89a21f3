"""Standalone aiohttp server for the PNG prompt inspector.

Usage:
    cpi-server --host 127.0.0.1 --port 8190
"""
from __future__ import annotations

import argparse

from aiohttp import web

from . import config
from .routes import register_all_routes
from .shared import get_logger, log_success

logger = get_logger(__name__)


def create_app() -> web.Application:
    # Multipart framing on top of the PNG itself.
    app = web.Application(client_max_size=config.MAX_UPLOAD_BYTES + 64 * 1024)
    register_all_routes(app)
    return app


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the ComfyUI PNG prompt inspector API.")
    parser.add_argument("--host", default=config.SERVER_HOST, help="bind host (default: %(default)s)")
    parser.add_argument("--port", type=int, default=config.SERVER_PORT, help="bind port (default: %(default)s)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    app = create_app()
    log_success(logger, f"Serving on http://{args.host}:{args.port}")
    web.run_app(app, host=args.host, port=args.port, print=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
