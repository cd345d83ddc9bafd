from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.services.users.dependencies import get_user_service
from src.services.users.service import UserService
from src.shared.models.common import MessageResponse
from src.shared.models.user_dto import (
    BanUserRequest,
    BlockUserRequest,
    CreateUserRequest,
    UpdateUserRequest,
    UserDTO,
)

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=UserDTO, status_code=status.HTTP_201_CREATED)
async def create_user(data: CreateUserRequest, service: UserService = Depends(get_user_service)):
    return await service.create_user(data)

@router.get("", response_model=List[UserDTO])
async def list_users(service: UserService = Depends(get_user_service)):
    return await service.list_users()

@router.get("/{user_id}", response_model=UserDTO)
async def get_user(user_id: UUID, service: UserService = Depends(get_user_service)):
    return await service.get_user(user_id)

@router.patch("/{user_id}", response_model=UserDTO)
async def update_user(
    user_id: UUID,
    data: UpdateUserRequest,
    service: UserService = Depends(get_user_service),
):
    return await service.update_user(user_id, data)

@router.delete("/{user_id}", response_model=MessageResponse)
async def remove_user(user_id: UUID, service: UserService = Depends(get_user_service)):
    return await service.remove_user(user_id)

@router.patch("/{user_id}/block", response_model=UserDTO)
async def block_user(
    user_id: UUID,
    data: BlockUserRequest,
    service: UserService = Depends(get_user_service),
):
    return await service.block_user(user_id, data.block_reason)

@router.patch("/{user_id}/unblock", response_model=UserDTO)
async def unblock_user(user_id: UUID, service: UserService = Depends(get_user_service)):
    return await service.unblock_user(user_id)

@router.patch("/{user_id}/ban", response_model=UserDTO)
async def ban_user(
    user_id: UUID,
    data: BanUserRequest,
    service: UserService = Depends(get_user_service),
):
    return await service.ban_user(user_id, data.ban_reason)

@router.patch("/{user_id}/unban", response_model=UserDTO)
async def unban_user(user_id: UUID, service: UserService = Depends(get_user_service)):
    return await service.unban_user(user_id)
