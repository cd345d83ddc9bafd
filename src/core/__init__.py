# src/core/__init__.py
"""
Доменный слой (Core Domain).
Логика, независимая от HTTP и хранилища.
"""

from src.core.geo import RouteAggregator, RouteResult, Coordinate

__all__ = [
    "RouteAggregator",
    "RouteResult",
    "Coordinate",
]
