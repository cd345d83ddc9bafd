from typing import Optional

from pydantic import Field

from src.shared.models.common import RequestModel

class CalculateRouteRequest(RequestModel):
    """Запрос на расчёт маршрута: origin -> stops (по порядку) -> destination."""
    origin_address: str = Field(..., min_length=1)
    destination_address: str = Field(..., min_length=1)
    # null и отсутствие поля равнозначны: маршрут без промежуточных точек
    stops_addresses: Optional[list[str]] = None
