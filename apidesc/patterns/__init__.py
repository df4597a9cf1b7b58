"""
Route template model used for path-parameter membership tests.
"""

from .route import RoutePattern, RouteToken

__all__ = ["RoutePattern", "RouteToken"]
