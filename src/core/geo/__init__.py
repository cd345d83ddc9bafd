# src/core/geo/__init__.py
"""
Geo-сервис.
Геокодирование адресов (Nominatim) и расчёт маршрутов (OSRM).
"""

from src.core.geo.errors import (
    GeocodingFailure,
    GeocodingFailureKind,
    RouteComputationFailure,
    RoutingError,
)
from src.core.geo.models import Coordinate, RouteResult
from src.core.geo.service import (
    NominatimGeocoder,
    OsrmRouteEngine,
    RouteAggregator,
    create_route_aggregator,
)

__all__ = [
    "Coordinate",
    "RouteResult",
    "RoutingError",
    "GeocodingFailure",
    "GeocodingFailureKind",
    "RouteComputationFailure",
    "NominatimGeocoder",
    "OsrmRouteEngine",
    "RouteAggregator",
    "create_route_aggregator",
]
