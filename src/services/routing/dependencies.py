# src/services/routing/dependencies.py
"""
Dependency Injection для расчёта маршрутов.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.core.geo.service import RouteAggregator


# Синглтон (общий HTTP клиент на всё приложение)
_aggregator: "RouteAggregator | None" = None


async def init_routing() -> None:
    """Создать агрегатор маршрутов при старте приложения."""
    global _aggregator
    from src.core.geo.service import create_route_aggregator
    _aggregator = create_route_aggregator()


def get_route_aggregator() -> "RouteAggregator":
    """Получить агрегатор маршрутов."""
    if _aggregator is None:
        raise RuntimeError("RouteAggregator не инициализирован. Вызовите init_routing()")
    return _aggregator


async def close_routing() -> None:
    """Закрыть HTTP клиент агрегатора."""
    global _aggregator
    if _aggregator:
        await _aggregator.close()
        _aggregator = None
