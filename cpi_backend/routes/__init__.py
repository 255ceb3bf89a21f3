"""
Route system for the PNG prompt inspector.
Importing this package is side-effect free; route registration is explicit.
"""
from .registry import API_PREFIX, build_route_table, register_all_routes

__all__ = [
    "API_PREFIX",
    "build_route_table",
    "register_all_routes",
]
