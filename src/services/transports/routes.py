from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.services.transports.dependencies import get_transport_service
from src.services.transports.service import TransportService
from src.shared.models.common import MessageResponse
from src.shared.models.transport_dto import CreateTransportRequest, TransportDTO, UpdateTransportRequest

router = APIRouter(prefix="/transports", tags=["transports"])

@router.post("", response_model=TransportDTO, status_code=status.HTTP_201_CREATED)
async def create_transport(
    data: CreateTransportRequest,
    service: TransportService = Depends(get_transport_service),
):
    return await service.create_transport(data)

@router.get("", response_model=List[TransportDTO])
async def list_transports(service: TransportService = Depends(get_transport_service)):
    return await service.list_transports()

@router.get("/{transport_id}", response_model=TransportDTO)
async def get_transport(
    transport_id: UUID,
    service: TransportService = Depends(get_transport_service),
):
    return await service.get_transport(transport_id)

@router.patch("/{transport_id}", response_model=TransportDTO)
async def update_transport(
    transport_id: UUID,
    data: UpdateTransportRequest,
    service: TransportService = Depends(get_transport_service),
):
    return await service.update_transport(transport_id, data)

@router.delete("/{transport_id}", response_model=MessageResponse)
async def remove_transport(
    transport_id: UUID,
    service: TransportService = Depends(get_transport_service),
):
    return await service.remove_transport(transport_id)
