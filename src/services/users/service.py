import asyncio
from typing import List
from uuid import UUID

from src.common.exceptions import NotFoundError
from src.common.logger import log_info, TypeMsg
from src.services.users.passwords import hash_password
from src.services.users.repository import UserRepository
from src.services.utils.sql import integrity_errors
from src.shared.models.user_dto import CreateUserRequest, UpdateUserRequest, UserDTO

USER_REMOVED_MESSAGE = "User successfully removed"

class UserService:
    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def create_user(self, data: CreateUserRequest) -> UserDTO:
        values = data.model_dump()
        values["password"] = await asyncio.to_thread(hash_password, data.password)

        with integrity_errors("Error creating user"):
            user = await self.repository.create(values)

        await log_info(f"Пользователь {user.id} ({user.email}) создан", type_msg=TypeMsg.INFO)
        return user

    async def list_users(self) -> List[UserDTO]:
        return await self.repository.get_all()

    async def get_user(self, user_id: UUID) -> UserDTO:
        user = await self.repository.get_by_id(user_id)
        if not user:
            raise NotFoundError.for_entity("User", user_id)
        return user

    async def update_user(self, user_id: UUID, data: UpdateUserRequest) -> UserDTO:
        """Частичное обновление. Новый пароль хэшируется заново (PBKDF2 в отдельном потоке)."""
        updates = data.model_dump(exclude_unset=True)
        if updates.get("password"):
            updates["password"] = await asyncio.to_thread(hash_password, updates["password"])
        else:
            updates.pop("password", None)
        return await self._update(user_id, updates, "Error updating user")

    async def remove_user(self, user_id: UUID) -> dict:
        removed = await self.repository.delete(user_id)
        if not removed:
            raise NotFoundError.for_entity("User", user_id)

        await log_info(f"Пользователь {user_id} удалён", type_msg=TypeMsg.INFO)
        return {"message": USER_REMOVED_MESSAGE}

    # ===== Блокировка и бан =====

    async def block_user(self, user_id: UUID, reason: str) -> UserDTO:
        user = await self._update(user_id, {"is_blocked": True, "block_reason": reason}, "Error blocking user")
        await log_info(f"Пользователь {user_id} заблокирован: {reason}", type_msg=TypeMsg.WARNING)
        return user

    async def unblock_user(self, user_id: UUID) -> UserDTO:
        return await self._update(user_id, {"is_blocked": False, "block_reason": None}, "Error unblocking user")

    async def ban_user(self, user_id: UUID, reason: str) -> UserDTO:
        user = await self._update(user_id, {"is_banned": True, "ban_reason": reason}, "Error banning user")
        await log_info(f"Пользователь {user_id} забанен: {reason}", type_msg=TypeMsg.WARNING)
        return user

    async def unban_user(self, user_id: UUID) -> UserDTO:
        return await self._update(user_id, {"is_banned": False, "ban_reason": None}, "Error unbanning user")

    async def _update(self, user_id: UUID, updates: dict, action: str) -> UserDTO:
        with integrity_errors(action):
            user = await self.repository.update(user_id, updates)
        if not user:
            raise NotFoundError.for_entity("User", user_id)
        return user
