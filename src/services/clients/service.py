from typing import List
from uuid import UUID

from src.common.exceptions import NotFoundError
from src.common.logger import log_info, TypeMsg
from src.services.clients.repository import ClientRepository
from src.services.utils.sql import integrity_errors
from src.shared.models.client_dto import ClientDTO, CreateClientRequest, UpdateClientRequest

class ClientService:
    def __init__(self, repository: ClientRepository):
        self.repository = repository

    async def create_client(self, data: CreateClientRequest, user_id: str) -> ClientDTO:
        """Создаёт клиента. Адрес из объекта сворачивается в строку."""
        values = data.model_dump(mode="json", exclude={"address"})
        values["address"] = data.address.format() if data.address else None
        values["created_by"] = user_id

        with integrity_errors("Error creating client"):
            client = await self.repository.create(values)

        await log_info(f"Клиент {client.id} создан пользователем {user_id}", type_msg=TypeMsg.INFO)
        return client

    async def list_clients(self) -> List[ClientDTO]:
        return await self.repository.get_all()

    async def get_client(self, client_id: UUID) -> ClientDTO:
        client = await self.repository.get_by_id(client_id)
        if not client:
            raise NotFoundError.for_entity("Client", client_id)
        return client

    async def update_client(self, client_id: UUID, data: UpdateClientRequest, user_id: str) -> ClientDTO:
        """
        Частичное обновление клиента.
        Если новый адрес не передан, сохраняется текущий.
        """
        await self.get_client(client_id)

        updates = data.model_dump(mode="json", exclude_unset=True, exclude={"address"})
        if data.address is not None:
            updates["address"] = data.address.format()
        updates["updated_by"] = user_id

        with integrity_errors("Error updating client"):
            client = await self.repository.update(client_id, updates)

        if not client:
            raise NotFoundError.for_entity("Client", client_id)

        await log_info(f"Клиент {client_id} обновлён пользователем {user_id}", type_msg=TypeMsg.DEBUG)
        return client

    async def remove_client(self, client_id: UUID, user_id: str) -> dict:
        """Мягкое удаление: клиент остаётся в БД с отметкой removed_at/removed_by."""
        removed = await self.repository.soft_delete(client_id, user_id)
        if not removed:
            raise NotFoundError.for_entity("Client", client_id)

        await log_info(f"Клиент {client_id} удалён (soft delete) пользователем {user_id}", type_msg=TypeMsg.INFO)
        return {"message": "Client successfully removed (soft delete)"}
