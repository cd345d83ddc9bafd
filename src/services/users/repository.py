from typing import Any, List, Optional
from uuid import UUID

from src.infra.database import DatabaseManager
from src.services.utils.sql import build_insert, build_update
from src.shared.models.user_dto import UserDTO

# Пароль наружу не выбирается
USER_COLUMNS = """
    id, name, email, phone, allowed_toasts, is_blocked, block_reason,
    is_banned, ban_reason, created_at, updated_at
"""

WRITABLE_FIELDS = {
    "name", "email", "password", "phone", "allowed_toasts",
    "is_blocked", "block_reason", "is_banned", "ban_reason",
}

class UserRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    async def create(self, values: dict[str, Any]) -> UserDTO:
        query, params = build_insert("users", values, USER_COLUMNS, WRITABLE_FIELDS)
        async with self.db.acquire() as conn:
            record = await conn.fetchrow(query, *params)
            return UserDTO(**dict(record))

    async def get_all(self) -> List[UserDTO]:
        query = f"SELECT {USER_COLUMNS} FROM users ORDER BY created_at DESC"
        async with self.db.acquire() as conn:
            records = await conn.fetch(query)
            return [UserDTO(**dict(record)) for record in records]

    async def get_by_id(self, user_id: UUID) -> Optional[UserDTO]:
        query = f"SELECT {USER_COLUMNS} FROM users WHERE id = $1"
        async with self.db.acquire() as conn:
            record = await conn.fetchrow(query, user_id)
            if record:
                return UserDTO(**dict(record))
            return None

    async def update(self, user_id: UUID, updates: dict[str, Any]) -> Optional[UserDTO]:
        built = build_update("users", updates, USER_COLUMNS, WRITABLE_FIELDS, where_args=[user_id])
        if built is None:
            return await self.get_by_id(user_id)

        query, params = built
        async with self.db.acquire() as conn:
            record = await conn.fetchrow(query, *params)
            if record:
                return UserDTO(**dict(record))
            return None

    async def delete(self, user_id: UUID) -> bool:
        async with self.db.acquire() as conn:
            return await conn.fetchval("DELETE FROM users WHERE id = $1 RETURNING id", user_id) is not None
