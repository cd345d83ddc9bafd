from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, StrictInt

from src.shared.models.common import CamelModel, RequestModel

class CreateVehicleRequest(RequestModel):
    plate: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    year: StrictInt
    capacity: Optional[StrictInt] = None

class UpdateVehicleRequest(RequestModel):
    plate: Optional[str] = Field(default=None, min_length=1)
    brand: Optional[str] = Field(default=None, min_length=1)
    model: Optional[str] = Field(default=None, min_length=1)
    year: Optional[StrictInt] = None
    capacity: Optional[StrictInt] = None

class VehicleDTO(CamelModel):
    id: UUID
    plate: str
    brand: str
    model: str
    year: int
    capacity: Optional[int] = None
    driver_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime
