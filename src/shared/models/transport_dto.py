from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from src.shared.models.common import CamelModel, RequestModel
from src.shared.models.driver_dto import DriverBaseDTO
from src.shared.models.enums import TransportStatus, TransportType
from src.shared.models.vehicle_dto import VehicleDTO

class CreateTransportRequest(RequestModel):
    code: str = Field(..., min_length=1)
    type: TransportType = TransportType.FREIGHT
    status: Optional[TransportStatus] = None
    pickup_address: str = Field(..., min_length=1)
    delivery_address: str = Field(..., min_length=1)
    pickup_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None
    driver_id: Optional[UUID] = None
    vehicle_id: Optional[UUID] = None
    cargo_details: Optional[str] = None

class UpdateTransportRequest(RequestModel):
    code: Optional[str] = Field(default=None, min_length=1)
    type: Optional[TransportType] = None
    status: Optional[TransportStatus] = None
    pickup_address: Optional[str] = Field(default=None, min_length=1)
    delivery_address: Optional[str] = Field(default=None, min_length=1)
    pickup_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None
    driver_id: Optional[UUID] = None
    vehicle_id: Optional[UUID] = None
    cargo_details: Optional[str] = None

class TransportDTO(CamelModel):
    id: UUID
    code: str
    type: TransportType = TransportType.FREIGHT
    status: TransportStatus = TransportStatus.SCHEDULED
    pickup_address: str
    delivery_address: str
    pickup_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None
    driver_id: Optional[UUID] = None
    vehicle_id: Optional[UUID] = None
    cargo_details: Optional[str] = None
    driver: Optional[DriverBaseDTO] = None
    vehicle: Optional[VehicleDTO] = None
    created_at: datetime
    updated_at: datetime
