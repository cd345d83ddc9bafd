from typing import Any, Iterable, List, Optional
from uuid import UUID

from src.infra.database import DatabaseManager
from src.services.utils.sql import build_insert, build_update
from src.shared.models.vehicle_dto import VehicleDTO

VEHICLE_COLUMNS = "id, plate, brand, model, year, capacity, driver_id, created_at, updated_at"

WRITABLE_FIELDS = {"plate", "brand", "model", "year", "capacity", "driver_id"}

class VehicleRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    async def create(self, values: dict[str, Any]) -> VehicleDTO:
        query, params = build_insert("vehicles", values, VEHICLE_COLUMNS, WRITABLE_FIELDS)
        async with self.db.acquire() as conn:
            record = await conn.fetchrow(query, *params)
            return VehicleDTO(**dict(record))

    async def get_all(self) -> List[VehicleDTO]:
        query = f"SELECT {VEHICLE_COLUMNS} FROM vehicles ORDER BY created_at DESC"
        async with self.db.acquire() as conn:
            records = await conn.fetch(query)
            return [VehicleDTO(**dict(record)) for record in records]

    async def get_by_id(self, vehicle_id: UUID) -> Optional[VehicleDTO]:
        query = f"SELECT {VEHICLE_COLUMNS} FROM vehicles WHERE id = $1"
        async with self.db.acquire() as conn:
            record = await conn.fetchrow(query, vehicle_id)
            if record:
                return VehicleDTO(**dict(record))
            return None

    async def get_by_ids(self, vehicle_ids: Iterable[UUID]) -> dict[UUID, VehicleDTO]:
        """Пакетная загрузка по списку id (для встраивания в перевозки)."""
        ids = list(set(vehicle_ids))
        if not ids:
            return {}
        query = f"SELECT {VEHICLE_COLUMNS} FROM vehicles WHERE id = ANY($1::uuid[])"
        async with self.db.acquire() as conn:
            records = await conn.fetch(query, ids)
            return {record["id"]: VehicleDTO(**dict(record)) for record in records}

    async def get_by_driver_ids(self, driver_ids: Iterable[UUID]) -> dict[UUID, List[VehicleDTO]]:
        """ТС водителей одним запросом: driver_id -> список ТС."""
        ids = list(set(driver_ids))
        if not ids:
            return {}
        query = f"""
            SELECT {VEHICLE_COLUMNS}
            FROM vehicles
            WHERE driver_id = ANY($1::uuid[])
            ORDER BY created_at
        """
        grouped: dict[UUID, List[VehicleDTO]] = {driver_id: [] for driver_id in ids}
        async with self.db.acquire() as conn:
            records = await conn.fetch(query, ids)
            for record in records:
                grouped[record["driver_id"]].append(VehicleDTO(**dict(record)))
        return grouped

    async def update(self, vehicle_id: UUID, updates: dict[str, Any]) -> Optional[VehicleDTO]:
        built = build_update("vehicles", updates, VEHICLE_COLUMNS, WRITABLE_FIELDS, where_args=[vehicle_id])
        if built is None:
            return await self.get_by_id(vehicle_id)

        query, params = built
        async with self.db.acquire() as conn:
            record = await conn.fetchrow(query, *params)
            if record:
                return VehicleDTO(**dict(record))
            return None

    async def assign_driver(self, vehicle_id: UUID, driver_id: UUID) -> bool:
        query = """
            UPDATE vehicles
            SET driver_id = $2, updated_at = NOW()
            WHERE id = $1
            RETURNING id
        """
        async with self.db.acquire() as conn:
            return await conn.fetchval(query, vehicle_id, driver_id) is not None

    async def delete(self, vehicle_id: UUID) -> bool:
        query = "DELETE FROM vehicles WHERE id = $1 RETURNING id"
        async with self.db.acquire() as conn:
            return await conn.fetchval(query, vehicle_id) is not None
