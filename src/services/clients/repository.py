from typing import Any, List, Optional
from uuid import UUID

from src.infra.database import DatabaseManager
from src.services.utils.sql import build_insert, build_update
from src.shared.models.client_dto import ClientDTO

CLIENT_COLUMNS = """
    id, name, email, phone, address, client_type, cpf, cnpj, business_name,
    state_registration, website, notes, created_by, updated_by, removed_by,
    removed_at, created_at, updated_at
"""

WRITABLE_FIELDS = {
    "name", "email", "phone", "address", "client_type", "cpf", "cnpj",
    "business_name", "state_registration", "website", "notes",
    "created_by", "updated_by",
}

class ClientRepository:
    """Клиенты. Удаление мягкое: строки с removed_at не видны."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    async def create(self, values: dict[str, Any]) -> ClientDTO:
        query, params = build_insert("clients", values, CLIENT_COLUMNS, WRITABLE_FIELDS)
        async with self.db.acquire() as conn:
            record = await conn.fetchrow(query, *params)
            return ClientDTO(**dict(record))

    async def get_all(self) -> List[ClientDTO]:
        query = f"""
            SELECT {CLIENT_COLUMNS}
            FROM clients
            WHERE removed_at IS NULL
            ORDER BY created_at DESC
        """
        async with self.db.acquire() as conn:
            records = await conn.fetch(query)
            return [ClientDTO(**dict(record)) for record in records]

    async def get_by_id(self, client_id: UUID) -> Optional[ClientDTO]:
        query = f"""
            SELECT {CLIENT_COLUMNS}
            FROM clients
            WHERE id = $1 AND removed_at IS NULL
        """
        async with self.db.acquire() as conn:
            record = await conn.fetchrow(query, client_id)
            if record:
                return ClientDTO(**dict(record))
            return None

    async def update(self, client_id: UUID, updates: dict[str, Any]) -> Optional[ClientDTO]:
        built = build_update(
            "clients",
            updates,
            CLIENT_COLUMNS,
            WRITABLE_FIELDS,
            where="id = $1 AND removed_at IS NULL",
            where_args=[client_id],
        )
        if built is None:
            return await self.get_by_id(client_id)

        query, params = built
        async with self.db.acquire() as conn:
            record = await conn.fetchrow(query, *params)
            if record:
                return ClientDTO(**dict(record))
            return None

    async def soft_delete(self, client_id: UUID, removed_by: str) -> bool:
        """Помечает клиента удалённым. False, если клиента нет или он уже удалён."""
        query = """
            UPDATE clients
            SET removed_at = NOW(), removed_by = $2, updated_at = NOW()
            WHERE id = $1 AND removed_at IS NULL
            RETURNING id
        """
        async with self.db.acquire() as conn:
            return await conn.fetchval(query, client_id, removed_by) is not None
