from typing import Any, List, Optional, Sequence
from uuid import UUID

from src.infra.database import DatabaseManager
from src.services.utils.sql import build_insert, build_update
from src.shared.models.driver_dto import DriverBaseDTO

SELECTABLE_COLUMNS = (
    "id", "name", "email", "phone", "license_number", "approval_status",
    "documents", "created_by", "updated_by", "removed_by", "removed_at",
    "created_at", "updated_at",
)

DRIVER_COLUMNS = ", ".join(SELECTABLE_COLUMNS)

WRITABLE_FIELDS = {
    "name", "email", "phone", "license_number", "approval_status",
    "documents", "created_by", "updated_by",
}

class DriverRepository:
    """Водители. Удаление мягкое, как у клиентов."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    async def create(self, values: dict[str, Any]) -> DriverBaseDTO:
        query, params = build_insert("drivers", values, DRIVER_COLUMNS, WRITABLE_FIELDS)
        async with self.db.acquire() as conn:
            record = await conn.fetchrow(query, *params)
            return DriverBaseDTO(**dict(record))

    async def get_all(self) -> List[DriverBaseDTO]:
        query = f"""
            SELECT {DRIVER_COLUMNS}
            FROM drivers
            WHERE removed_at IS NULL
            ORDER BY created_at DESC
        """
        async with self.db.acquire() as conn:
            records = await conn.fetch(query)
            return [DriverBaseDTO(**dict(record)) for record in records]

    async def get_columns(self, columns: Sequence[str]) -> List[dict[str, Any]]:
        """Выборка только указанных колонок (для ?fields=)."""
        unknown = [column for column in columns if column not in SELECTABLE_COLUMNS]
        if unknown:
            raise ValueError(f"Недопустимые колонки drivers: {unknown}")

        query = f"""
            SELECT {", ".join(columns)}
            FROM drivers
            WHERE removed_at IS NULL
            ORDER BY created_at DESC
        """
        async with self.db.acquire() as conn:
            records = await conn.fetch(query)
            return [dict(record) for record in records]

    async def get_by_id(self, driver_id: UUID) -> Optional[DriverBaseDTO]:
        query = f"""
            SELECT {DRIVER_COLUMNS}
            FROM drivers
            WHERE id = $1 AND removed_at IS NULL
        """
        async with self.db.acquire() as conn:
            record = await conn.fetchrow(query, driver_id)
            if record:
                return DriverBaseDTO(**dict(record))
            return None

    async def get_by_ids(self, driver_ids: Sequence[UUID]) -> dict[UUID, DriverBaseDTO]:
        ids = list(set(driver_ids))
        if not ids:
            return {}
        query = f"SELECT {DRIVER_COLUMNS} FROM drivers WHERE id = ANY($1::uuid[])"
        async with self.db.acquire() as conn:
            records = await conn.fetch(query, ids)
            return {record["id"]: DriverBaseDTO(**dict(record)) for record in records}

    async def update(self, driver_id: UUID, updates: dict[str, Any]) -> Optional[DriverBaseDTO]:
        built = build_update(
            "drivers",
            updates,
            DRIVER_COLUMNS,
            WRITABLE_FIELDS,
            where="id = $1 AND removed_at IS NULL",
            where_args=[driver_id],
        )
        if built is None:
            return await self.get_by_id(driver_id)

        query, params = built
        async with self.db.acquire() as conn:
            record = await conn.fetchrow(query, *params)
            if record:
                return DriverBaseDTO(**dict(record))
            return None

    async def soft_delete(self, driver_id: UUID, removed_by: str) -> bool:
        query = """
            UPDATE drivers
            SET removed_at = NOW(), removed_by = $2, updated_at = NOW()
            WHERE id = $1 AND removed_at IS NULL
            RETURNING id
        """
        async with self.db.acquire() as conn:
            return await conn.fetchval(query, driver_id, removed_by) is not None
