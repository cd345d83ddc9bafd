from typing import Any, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.services.drivers.dependencies import get_driver_service
from src.services.drivers.service import DriverService, parse_fields
from src.services.gateway.security import get_acting_user_id
from src.shared.models.common import MessageResponse
from src.shared.models.driver_dto import (
    AssignVehicleRequest,
    CreateDriverRequest,
    DriverDTO,
    UpdateDriverDocumentsRequest,
    UpdateDriverRequest,
)

router = APIRouter(prefix="/drivers", tags=["drivers"])

@router.post("", response_model=DriverDTO, status_code=status.HTTP_201_CREATED)
async def create_driver(
    data: CreateDriverRequest,
    user_id: str = Depends(get_acting_user_id),
    service: DriverService = Depends(get_driver_service),
):
    return await service.create_driver(data, user_id)

@router.get("")
async def list_drivers(
    fields: Optional[str] = Query(default=None, description="Поля через запятую, например name,email,vehicles"),
    service: DriverService = Depends(get_driver_service),
) -> List[dict[str, Any]]:
    return await service.list_drivers(parse_fields(fields))

@router.get("/{driver_id}", response_model=DriverDTO)
async def get_driver(
    driver_id: UUID,
    service: DriverService = Depends(get_driver_service),
):
    return await service.get_driver(driver_id)

@router.patch("/{driver_id}", response_model=DriverDTO)
async def update_driver(
    driver_id: UUID,
    data: UpdateDriverRequest,
    user_id: str = Depends(get_acting_user_id),
    service: DriverService = Depends(get_driver_service),
):
    return await service.update_driver(driver_id, data, user_id)

@router.delete("/{driver_id}", response_model=MessageResponse)
async def remove_driver(
    driver_id: UUID,
    user_id: str = Depends(get_acting_user_id),
    service: DriverService = Depends(get_driver_service),
):
    return await service.remove_driver(driver_id, user_id)

@router.post("/{driver_id}/vehicles", response_model=DriverDTO)
async def assign_vehicle(
    driver_id: UUID,
    data: AssignVehicleRequest,
    service: DriverService = Depends(get_driver_service),
):
    return await service.assign_vehicle(driver_id, data.vehicle_id)

@router.put("/{driver_id}/documents", response_model=DriverDTO)
async def update_driver_documents(
    driver_id: UUID,
    data: UpdateDriverDocumentsRequest,
    user_id: str = Depends(get_acting_user_id),
    service: DriverService = Depends(get_driver_service),
):
    return await service.update_documents(driver_id, data, user_id)
