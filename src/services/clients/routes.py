from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.services.clients.dependencies import get_client_service
from src.services.clients.service import ClientService
from src.services.gateway.security import get_acting_user_id
from src.shared.models.client_dto import ClientDTO, CreateClientRequest, UpdateClientRequest
from src.shared.models.common import MessageResponse

router = APIRouter(prefix="/clients", tags=["clients"])

@router.post("", response_model=ClientDTO, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: CreateClientRequest,
    user_id: str = Depends(get_acting_user_id),
    service: ClientService = Depends(get_client_service),
):
    return await service.create_client(data, user_id)

@router.get("", response_model=List[ClientDTO])
async def list_clients(service: ClientService = Depends(get_client_service)):
    return await service.list_clients()

@router.get("/{client_id}", response_model=ClientDTO)
async def get_client(
    client_id: UUID,
    service: ClientService = Depends(get_client_service),
):
    return await service.get_client(client_id)

@router.patch("/{client_id}", response_model=ClientDTO)
async def update_client(
    client_id: UUID,
    data: UpdateClientRequest,
    user_id: str = Depends(get_acting_user_id),
    service: ClientService = Depends(get_client_service),
):
    return await service.update_client(client_id, data, user_id)

@router.delete("/{client_id}", response_model=MessageResponse)
async def remove_client(
    client_id: UUID,
    user_id: str = Depends(get_acting_user_id),
    service: ClientService = Depends(get_client_service),
):
    return await service.remove_client(client_id, user_id)
