from typing import Any, List, Optional
from uuid import UUID

from src.infra.database import DatabaseManager
from src.services.utils.sql import build_insert, build_update
from src.shared.models.transport_dto import TransportDTO

TRANSPORT_COLUMNS = """
    id, code, type, status, pickup_address, delivery_address, pickup_date,
    delivery_date, driver_id, vehicle_id, cargo_details, created_at, updated_at
"""

WRITABLE_FIELDS = {
    "code", "type", "status", "pickup_address", "delivery_address",
    "pickup_date", "delivery_date", "driver_id", "vehicle_id", "cargo_details",
}

class TransportRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    async def create(self, values: dict[str, Any]) -> TransportDTO:
        query, params = build_insert("transports", values, TRANSPORT_COLUMNS, WRITABLE_FIELDS)
        async with self.db.acquire() as conn:
            record = await conn.fetchrow(query, *params)
            return TransportDTO(**dict(record))

    async def get_all(self) -> List[TransportDTO]:
        query = f"SELECT {TRANSPORT_COLUMNS} FROM transports ORDER BY created_at DESC"
        async with self.db.acquire() as conn:
            records = await conn.fetch(query)
            return [TransportDTO(**dict(record)) for record in records]

    async def get_by_id(self, transport_id: UUID) -> Optional[TransportDTO]:
        query = f"SELECT {TRANSPORT_COLUMNS} FROM transports WHERE id = $1"
        async with self.db.acquire() as conn:
            record = await conn.fetchrow(query, transport_id)
            if record:
                return TransportDTO(**dict(record))
            return None

    async def update(self, transport_id: UUID, updates: dict[str, Any]) -> Optional[TransportDTO]:
        built = build_update("transports", updates, TRANSPORT_COLUMNS, WRITABLE_FIELDS, where_args=[transport_id])
        if built is None:
            return await self.get_by_id(transport_id)

        query, params = built
        async with self.db.acquire() as conn:
            record = await conn.fetchrow(query, *params)
            if record:
                return TransportDTO(**dict(record))
            return None

    async def delete(self, transport_id: UUID) -> bool:
        query = "DELETE FROM transports WHERE id = $1 RETURNING id"
        async with self.db.acquire() as conn:
            return await conn.fetchval(query, transport_id) is not None
