"""
Version reporting endpoint.
"""
from aiohttp import web

from cpi_backend.shared import Result
from cpi_shared.version import get_version_info

from ..core import _json_response


def register_version_routes(routes: web.RouteTableDef) -> None:
    """
    Expose the currently installed inspector version.
    """
    async def _get_version(_request: web.Request) -> web.Response:
        data = get_version_info()
        return _json_response(Result.Ok(data))

    routes.get("/cpi/version")(_get_version)
