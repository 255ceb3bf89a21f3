"""
Route handlers.
"""
from .pnginfo import register_pnginfo_routes
from .version import register_version_routes

__all__ = [
    "register_pnginfo_routes",
    "register_version_routes",
]
