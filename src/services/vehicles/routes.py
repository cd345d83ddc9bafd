from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.services.vehicles.dependencies import get_vehicle_service
from src.services.vehicles.service import VehicleService
from src.shared.models.common import MessageResponse
from src.shared.models.vehicle_dto import CreateVehicleRequest, UpdateVehicleRequest, VehicleDTO

router = APIRouter(prefix="/vehicles", tags=["vehicles"])

@router.post("", response_model=VehicleDTO, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    data: CreateVehicleRequest,
    service: VehicleService = Depends(get_vehicle_service),
):
    return await service.create_vehicle(data)

@router.get("", response_model=List[VehicleDTO])
async def list_vehicles(service: VehicleService = Depends(get_vehicle_service)):
    return await service.list_vehicles()

@router.get("/{vehicle_id}", response_model=VehicleDTO)
async def get_vehicle(
    vehicle_id: UUID,
    service: VehicleService = Depends(get_vehicle_service),
):
    return await service.get_vehicle(vehicle_id)

@router.patch("/{vehicle_id}", response_model=VehicleDTO)
async def update_vehicle(
    vehicle_id: UUID,
    data: UpdateVehicleRequest,
    service: VehicleService = Depends(get_vehicle_service),
):
    return await service.update_vehicle(vehicle_id, data)

@router.delete("/{vehicle_id}", response_model=MessageResponse)
async def remove_vehicle(
    vehicle_id: UUID,
    service: VehicleService = Depends(get_vehicle_service),
):
    return await service.remove_vehicle(vehicle_id)
