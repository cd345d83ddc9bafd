# src/core/geo/errors.py
"""
Ошибки геокодирования и расчёта маршрута.
"""

from __future__ import annotations

from enum import Enum


class GeocodingFailureKind(str, Enum):
    """Причина неудачного геокодирования."""
    ADDRESS_NOT_FOUND = "address_not_found"
    UPSTREAM_ERROR = "upstream_error"

    def __str__(self) -> str:
        return self.value


class RoutingError(Exception):
    """Базовая ошибка маршрутизации. HTTP-слой отвечает на неё 400."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class GeocodingFailure(RoutingError):
    """Адрес не удалось превратить в координаты."""

    def __init__(
        self,
        address: str,
        reason: str,
        kind: GeocodingFailureKind = GeocodingFailureKind.UPSTREAM_ERROR,
    ) -> None:
        super().__init__(f'Error geocoding address "{address}": {reason}')
        self.address = address
        self.reason = reason
        self.kind = kind


class RouteComputationFailure(RoutingError):
    """Движок маршрутизации вернул ошибку или недоступен."""

    UNKNOWN = "Unknown error"

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason or self.UNKNOWN
        super().__init__(f"Error calculating route: {self.reason}")
