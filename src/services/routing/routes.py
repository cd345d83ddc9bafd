from typing import Any

from fastapi import APIRouter, Depends, status

from src.core.geo.service import RouteAggregator
from src.services.routing.dependencies import get_route_aggregator
from src.shared.models.routing_dto import CalculateRouteRequest

router = APIRouter(prefix="/routing", tags=["routing"])

@router.post("/calculate", status_code=status.HTTP_200_OK)
async def calculate_route(
    data: CalculateRouteRequest,
    aggregator: RouteAggregator = Depends(get_route_aggregator),
) -> dict[str, Any]:
    """Маршрут origin -> stops -> destination. Ошибки геокодирования и OSRM -> 400."""
    route = await aggregator.calculate_route(
        data.origin_address,
        data.destination_address,
        data.stops_addresses or [],
    )
    return route.to_dict()
