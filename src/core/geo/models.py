# src/core/geo/models.py
"""
Модели геоданных: координата и результат расчёта маршрута.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Coordinate:
    """Географическая координата (результат геокодирования)."""
    latitude: float
    longitude: float

    def to_lon_lat(self) -> str:
        """Формат точки для OSRM: 'долгота,широта'."""
        return f"{self.longitude},{self.latitude}"


@dataclass
class RouteResult:
    """
    Маршрут, полученный от движка маршрутизации.

    distance в метрах, duration в секундах, geometry: GeoJSON LineString.
    Производные поля вычисляются из базовых и не хранятся отдельно.
    """
    distance: float
    duration: float
    geometry: dict[str, Any] | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def distance_km(self) -> float:
        return self.distance / 1000

    @property
    def duration_minutes(self) -> float:
        return self.duration / 60

    @property
    def duration_hours(self) -> float:
        # Считается от минут, а не от секунд
        return self.duration_minutes / 60

    @classmethod
    def from_osrm(cls, route: dict[str, Any]) -> "RouteResult":
        """Создаёт результат из элемента массива routes ответа OSRM."""
        return cls(
            distance=route["distance"],
            duration=route["duration"],
            geometry=route.get("geometry"),
            raw=dict(route),
        )

    def to_dict(self) -> dict[str, Any]:
        """Исходные поля маршрута плюс distance_km, duration_minutes, duration_hours."""
        return {
            **self.raw,
            "distance": self.distance,
            "duration": self.duration,
            "geometry": self.geometry,
            "distance_km": self.distance_km,
            "duration_minutes": self.duration_minutes,
            "duration_hours": self.duration_hours,
        }
