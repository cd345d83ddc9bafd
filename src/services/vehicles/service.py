from typing import List
from uuid import UUID

from src.common.constants import NotificationType
from src.common.exceptions import NotFoundError
from src.common.logger import log_info, TypeMsg
from src.services.notifications.service import NotificationService
from src.services.utils.sql import integrity_errors
from src.services.vehicles.repository import VehicleRepository
from src.shared.models.vehicle_dto import CreateVehicleRequest, UpdateVehicleRequest, VehicleDTO

VEHICLE_REMOVED_MESSAGE = "Vehicle successfully removed"

class VehicleService:
    def __init__(self, repository: VehicleRepository, notifications: NotificationService):
        self.repository = repository
        self.notifications = notifications

    async def create_vehicle(self, data: CreateVehicleRequest) -> VehicleDTO:
        with integrity_errors("Error creating vehicle"):
            vehicle = await self.repository.create(data.model_dump(mode="json"))

        await log_info(f"ТС {vehicle.id} ({vehicle.plate}) создано", type_msg=TypeMsg.INFO)
        await self.notifications.notify({
            "type": NotificationType.CREATE_VEHICLE.value,
            "data": vehicle.model_dump(mode="json", by_alias=True),
        })
        return vehicle

    async def list_vehicles(self) -> List[VehicleDTO]:
        return await self.repository.get_all()

    async def get_vehicle(self, vehicle_id: UUID) -> VehicleDTO:
        vehicle = await self.repository.get_by_id(vehicle_id)
        if not vehicle:
            raise NotFoundError.for_entity("Vehicle", vehicle_id)
        return vehicle

    async def update_vehicle(self, vehicle_id: UUID, data: UpdateVehicleRequest) -> VehicleDTO:
        with integrity_errors("Error updating vehicle"):
            vehicle = await self.repository.update(vehicle_id, data.model_dump(mode="json", exclude_unset=True))

        if not vehicle:
            raise NotFoundError.for_entity("Vehicle", vehicle_id)

        await self.notifications.notify({
            "type": NotificationType.UPDATE_VEHICLE.value,
            "data": vehicle.model_dump(mode="json", by_alias=True),
        })
        return vehicle

    async def remove_vehicle(self, vehicle_id: UUID) -> dict:
        """Удаляет ТС из БД (без мягкого удаления)."""
        with integrity_errors("Error removing vehicle"):
            removed = await self.repository.delete(vehicle_id)
        if not removed:
            raise NotFoundError.for_entity("Vehicle", vehicle_id)

        await log_info(f"ТС {vehicle_id} удалено", type_msg=TypeMsg.INFO)
        await self.notifications.notify({
            "type": NotificationType.REMOVE_VEHICLE.value,
            "data": {"id": str(vehicle_id), "message": VEHICLE_REMOVED_MESSAGE},
        })
        return {"message": VEHICLE_REMOVED_MESSAGE}
