from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import EmailStr, Field

from src.shared.models.common import CamelModel, RequestModel
from src.shared.models.enums import DriverApprovalStatus
from src.shared.models.vehicle_dto import VehicleDTO

class CreateDriverRequest(RequestModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    license_number: str = Field(..., min_length=1)

class UpdateDriverRequest(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, min_length=1)
    license_number: Optional[str] = Field(default=None, min_length=1)

class AssignVehicleRequest(RequestModel):
    vehicle_id: UUID

class UpdateDriverDocumentsRequest(RequestModel):
    documents: Optional[dict[str, Any]] = None
    approval_status: Optional[DriverApprovalStatus] = None

class DriverBaseDTO(CamelModel):
    """Водитель без связанных транспортных средств."""
    id: UUID
    name: str
    email: str
    phone: str
    license_number: str
    approval_status: DriverApprovalStatus = DriverApprovalStatus.PENDING
    documents: Optional[dict[str, Any]] = None
    created_by: str
    updated_by: Optional[str] = None
    removed_by: Optional[str] = None
    removed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

class DriverDTO(DriverBaseDTO):
    vehicles: list[VehicleDTO] = Field(default_factory=list)
