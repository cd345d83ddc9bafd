# src/core/geo/service.py
"""
Расчёт маршрутов по адресам.

Геокодирование выполняется через Nominatim (OpenStreetMap), построение
маршрута через OSRM. RouteAggregator параллельно геокодирует все точки,
собирает их в исходном порядке и запрашивает маршрут.
"""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

import httpx

from src.common.constants import TypeMsg
from src.common.logger import log_info, log_warning
from src.core.geo.errors import (
    GeocodingFailure,
    GeocodingFailureKind,
    RouteComputationFailure,
)
from src.core.geo.models import Coordinate, RouteResult


class NominatimGeocoder:
    """Прямое геокодирование: адрес -> первая найденная координата."""

    def __init__(self, client: httpx.AsyncClient, url: str, user_agent: str) -> None:
        self._client = client
        self._url = url
        self._user_agent = user_agent

    async def resolve(self, address: str) -> Coordinate:
        """
        Геокодирует адрес одним запросом, без повторов.

        Raises:
            GeocodingFailure: адрес не найден или сервис ответил ошибкой
        """
        try:
            response = await self._client.get(
                self._url,
                params={"format": "json", "q": address},
                headers={"User-Agent": self._user_agent},
            )
            response.raise_for_status()
            results = response.json()
        except httpx.TimeoutException:
            raise GeocodingFailure(address, "Geocoding service timed out")
        except httpx.HTTPStatusError as e:
            raise GeocodingFailure(address, f"Geocoding service responded with HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            raise GeocodingFailure(address, str(e) or e.__class__.__name__)
        except ValueError:
            raise GeocodingFailure(address, "Invalid response from geocoding service")

        if not isinstance(results, list) or not results:
            raise GeocodingFailure(address, "Address not found", GeocodingFailureKind.ADDRESS_NOT_FOUND)

        first = results[0]
        try:
            return Coordinate(latitude=float(first["lat"]), longitude=float(first["lon"]))
        except (KeyError, TypeError, ValueError):
            raise GeocodingFailure(address, "Malformed geocoding result")


class OsrmRouteEngine:
    """Построение маршрута по упорядоченной последовательности точек через OSRM."""

    def __init__(self, client: httpx.AsyncClient, base_url: str, profile: str = "driving") -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._profile = profile

    def build_url(self, waypoints: Sequence[Coordinate]) -> str:
        """URL вида {base}/route/v1/{profile}/lon,lat;lon,lat;..."""
        coordinates = ";".join(point.to_lon_lat() for point in waypoints)
        return f"{self._base_url}/route/v1/{self._profile}/{coordinates}"

    async def compute_route(self, waypoints: Sequence[Coordinate]) -> RouteResult:
        """
        Запрашивает маршрут с полной геометрией в GeoJSON.

        Raises:
            RouteComputationFailure: code != "Ok", пустой список маршрутов или сервис недоступен
        """
        if len(waypoints) < 2:
            raise RouteComputationFailure("At least two waypoints are required")

        try:
            response = await self._client.get(
                self.build_url(waypoints),
                params={"overview": "full", "geometries": "geojson"},
            )
            data: Any = response.json()
        except httpx.TimeoutException:
            raise RouteComputationFailure("Routing service timed out")
        except httpx.HTTPError as e:
            raise RouteComputationFailure(str(e) or e.__class__.__name__)
        except ValueError:
            raise RouteComputationFailure("Invalid response from routing service")

        # OSRM отдаёт JSON с code/message и на HTTP 400
        if not isinstance(data, dict) or data.get("code") != "Ok":
            message = data.get("message") if isinstance(data, dict) else None
            raise RouteComputationFailure(message)

        routes = data.get("routes") or []
        if not routes:
            raise RouteComputationFailure("No route found")

        try:
            return RouteResult.from_osrm(routes[0])
        except (KeyError, TypeError):
            raise RouteComputationFailure("Malformed route in routing service response")


class RouteAggregator:
    """
    Оркестрация расчёта маршрута по адресам.

    Реализует:
    - Геокодирование одного адреса (resolve_address)
    - Параллельное геокодирование всех точек и расчёт маршрута (calculate_route)
    """

    def __init__(
        self,
        geocoder: NominatimGeocoder,
        route_engine: OsrmRouteEngine,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            geocoder: Сервис геокодирования (метод resolve)
            route_engine: Движок маршрутизации (метод compute_route)
            http_client: Общий HTTP клиент, закрывается в close()
        """
        self._geocoder = geocoder
        self._route_engine = route_engine
        self._http_client = http_client

    async def close(self) -> None:
        """Закрывает HTTP клиент."""
        if self._http_client is not None:
            await self._http_client.aclose()

    async def resolve_address(self, address: str) -> Coordinate:
        """Адрес -> координата. Пустой адрес отклоняется без обращения к сервису."""
        if not address or not address.strip():
            raise GeocodingFailure(address or "", "Address must not be empty", GeocodingFailureKind.ADDRESS_NOT_FOUND)
        return await self._geocoder.resolve(address)

    async def calculate_route(
        self,
        origin: str,
        destination: str,
        stops: Sequence[str] = (),
    ) -> RouteResult:
        """
        Рассчитывает маршрут origin -> stops (в переданном порядке) -> destination.

        Все адреса геокодируются одновременно. Первая же ошибка прерывает
        расчёт, остальные запросы отменяются, маршрут не запрашивается.

        Raises:
            GeocodingFailure: один из адресов не геокодирован
            RouteComputationFailure: ошибка движка маршрутизации
        """
        addresses = [origin, *stops, destination]

        tasks = [asyncio.create_task(self.resolve_address(address)) for address in addresses]
        try:
            # gather сохраняет порядок аргументов, а не порядок завершения
            waypoints = await asyncio.gather(*tasks)
        except Exception as e:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            await log_warning(f"Маршрут не рассчитан: {e}")
            raise

        await log_info(
            f"Геокодировано точек: {len(waypoints)}, запрос маршрута",
            type_msg=TypeMsg.DEBUG,
        )

        route = await self._route_engine.compute_route(waypoints)

        await log_info(
            f"Маршрут рассчитан: {route.distance_km:.2f} км, {route.duration_minutes:.1f} мин",
            type_msg=TypeMsg.DEBUG,
        )
        return route


def create_route_aggregator() -> RouteAggregator:
    """Собирает RouteAggregator по настройкам из конфигурации."""
    from src.config import settings

    client = httpx.AsyncClient(timeout=settings.routing.ROUTING_HTTP_TIMEOUT)
    return RouteAggregator(
        geocoder=NominatimGeocoder(
            client,
            url=settings.routing.NOMINATIM_URL,
            user_agent=settings.routing.GEOCODER_USER_AGENT,
        ),
        route_engine=OsrmRouteEngine(
            client,
            base_url=settings.routing.OSRM_URL,
            profile=settings.routing.OSRM_PROFILE,
        ),
        http_client=client,
    )
