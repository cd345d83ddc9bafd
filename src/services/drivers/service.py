from typing import Any, List, Optional
from uuid import UUID

from src.common.constants import NotificationType
from src.common.exceptions import BadRequestError, NotFoundError
from src.common.logger import log_info, TypeMsg
from src.services.drivers.repository import DriverRepository
from src.services.notifications.service import NotificationService
from src.services.utils.sql import integrity_errors
from src.services.vehicles.repository import VehicleRepository
from src.shared.models.driver_dto import (
    CreateDriverRequest,
    DriverBaseDTO,
    DriverDTO,
    UpdateDriverDocumentsRequest,
    UpdateDriverRequest,
)

DRIVER_REMOVED_MESSAGE = "Driver successfully removed"

# Имя в запросе (camelCase или snake_case) -> колонка
FIELD_TO_COLUMN: dict[str, str] = {}
for _name, _field in DriverBaseDTO.model_fields.items():
    FIELD_TO_COLUMN[_name] = _name
    if _field.alias:
        FIELD_TO_COLUMN[_field.alias] = _name


def parse_fields(raw: Optional[str]) -> Optional[List[str]]:
    """'name, email,vehicles' -> ['name', 'email', 'vehicles']; пустая строка -> None."""
    if not raw:
        return None
    fields = [item.strip() for item in raw.split(",") if item.strip()]
    return fields or None


class DriverService:
    def __init__(
        self,
        repository: DriverRepository,
        vehicles: VehicleRepository,
        notifications: NotificationService,
    ):
        self.repository = repository
        self.vehicles = vehicles
        self.notifications = notifications

    async def _attach_vehicles(self, drivers: List[DriverBaseDTO]) -> List[DriverDTO]:
        """Подгружает ТС всех водителей одним запросом."""
        by_driver = await self.vehicles.get_by_driver_ids([driver.id for driver in drivers])
        return [
            DriverDTO(**driver.model_dump(), vehicles=by_driver.get(driver.id, []))
            for driver in drivers
        ]

    async def _notify(self, change_type: NotificationType, data: Any) -> None:
        await self.notifications.notify({"type": change_type.value, "data": data})

    async def create_driver(self, data: CreateDriverRequest, user_id: str) -> DriverDTO:
        values = data.model_dump(mode="json")
        values["created_by"] = user_id

        with integrity_errors("Error creating driver"):
            created = await self.repository.create(values)

        driver = DriverDTO(**created.model_dump())
        await log_info(f"Водитель {driver.id} создан пользователем {user_id}", type_msg=TypeMsg.INFO)
        await self._notify(NotificationType.DRIVER_CREATED, driver.model_dump(mode="json", by_alias=True))
        return driver

    async def list_drivers(self, fields: Optional[List[str]] = None) -> List[dict[str, Any]]:
        """
        Список водителей.

        Без fields: все поля и ТС.
        С fields: только указанные поля и id; ТС только если указано 'vehicles'.
        """
        if not fields:
            drivers = await self._attach_vehicles(await self.repository.get_all())
            return [driver.model_dump(mode="json", by_alias=True) for driver in drivers]

        unknown = [f for f in fields if f != "vehicles" and f not in FIELD_TO_COLUMN]
        if unknown:
            raise BadRequestError(f"Unknown driver fields: {', '.join(unknown)}")

        include_vehicles = "vehicles" in fields
        columns = ["id"]
        for name in fields:
            column = FIELD_TO_COLUMN.get(name)
            if column and column not in columns:
                columns.append(column)

        rows = await self.repository.get_columns(columns)
        vehicles_by_driver = (
            await self.vehicles.get_by_driver_ids([row["id"] for row in rows])
            if include_vehicles
            else {}
        )

        aliases = {column: DriverBaseDTO.model_fields[column].alias or column for column in columns}
        result = []
        for row in rows:
            item = {aliases[column]: row[column] for column in columns}
            if include_vehicles:
                item["vehicles"] = [
                    vehicle.model_dump(mode="json", by_alias=True)
                    for vehicle in vehicles_by_driver.get(row["id"], [])
                ]
            result.append(item)
        return result

    async def get_driver(self, driver_id: UUID) -> DriverDTO:
        driver = await self.repository.get_by_id(driver_id)
        if not driver:
            raise NotFoundError.for_entity("Driver", driver_id)
        return (await self._attach_vehicles([driver]))[0]

    async def update_driver(self, driver_id: UUID, data: UpdateDriverRequest, user_id: str) -> DriverDTO:
        updates = data.model_dump(mode="json", exclude_unset=True)
        driver = await self._save(driver_id, updates, user_id, "Error updating driver")
        await self._notify(NotificationType.DRIVER_UPDATED, driver.model_dump(mode="json", by_alias=True))
        return driver

    async def update_documents(
        self,
        driver_id: UUID,
        data: UpdateDriverDocumentsRequest,
        user_id: str,
    ) -> DriverDTO:
        """Документы и статус одобрения водителя."""
        updates = data.model_dump(mode="json", exclude_unset=True)
        driver = await self._save(driver_id, updates, user_id, "Error updating driver documents")
        await log_info(
            f"Документы водителя {driver_id} обновлены (статус {driver.approval_status})",
            type_msg=TypeMsg.INFO,
        )
        await self._notify(NotificationType.DRIVER_DOCUMENTS_UPDATED, driver.model_dump(mode="json", by_alias=True))
        return driver

    async def _save(self, driver_id: UUID, updates: dict[str, Any], user_id: str, action: str) -> DriverDTO:
        updates["updated_by"] = user_id
        with integrity_errors(action):
            updated = await self.repository.update(driver_id, updates)
        if not updated:
            raise NotFoundError.for_entity("Driver", driver_id)
        return (await self._attach_vehicles([updated]))[0]

    async def remove_driver(self, driver_id: UUID, user_id: str) -> dict:
        removed = await self.repository.soft_delete(driver_id, user_id)
        if not removed:
            raise NotFoundError.for_entity("Driver", driver_id)

        await log_info(f"Водитель {driver_id} удалён (soft delete) пользователем {user_id}", type_msg=TypeMsg.INFO)
        await self._notify(
            NotificationType.DRIVER_REMOVED,
            {"id": str(driver_id), "message": DRIVER_REMOVED_MESSAGE},
        )
        return {"message": DRIVER_REMOVED_MESSAGE}

    async def assign_vehicle(self, driver_id: UUID, vehicle_id: UUID) -> DriverDTO:
        await self.get_driver(driver_id)

        vehicle = await self.vehicles.get_by_id(vehicle_id)
        if not vehicle:
            raise NotFoundError.for_entity("Vehicle", vehicle_id)

        await self.vehicles.assign_driver(vehicle_id, driver_id)
        driver = await self.get_driver(driver_id)

        await log_info(f"ТС {vehicle_id} назначено водителю {driver_id}", type_msg=TypeMsg.INFO)
        await self._notify(
            NotificationType.DRIVER_VEHICLE_ASSIGNED,
            {"driver": driver.model_dump(mode="json", by_alias=True), "vehicleId": str(vehicle_id)},
        )
        return driver
