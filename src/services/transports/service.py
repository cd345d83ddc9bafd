from typing import List, Optional
from uuid import UUID

from src.common.constants import NotificationType
from src.common.exceptions import NotFoundError
from src.common.logger import log_info, TypeMsg
from src.services.drivers.repository import DriverRepository
from src.services.notifications.service import NotificationService
from src.services.transports.repository import TransportRepository
from src.services.utils.sql import integrity_errors
from src.services.vehicles.repository import VehicleRepository
from src.shared.models.transport_dto import CreateTransportRequest, TransportDTO, UpdateTransportRequest

TRANSPORT_REMOVED_MESSAGE = "Transport successfully removed"

class TransportService:
    def __init__(
        self,
        repository: TransportRepository,
        drivers: DriverRepository,
        vehicles: VehicleRepository,
        notifications: NotificationService,
    ):
        self.repository = repository
        self.drivers = drivers
        self.vehicles = vehicles
        self.notifications = notifications

    async def _ensure_references(self, driver_id: Optional[UUID], vehicle_id: Optional[UUID]) -> None:
        """Водитель и ТС, если указаны, должны существовать."""
        if driver_id and not await self.drivers.get_by_id(driver_id):
            raise NotFoundError.for_entity("Driver", driver_id)
        if vehicle_id and not await self.vehicles.get_by_id(vehicle_id):
            raise NotFoundError.for_entity("Vehicle", vehicle_id)

    async def _embed(self, transports: List[TransportDTO]) -> List[TransportDTO]:
        """Подставляет водителя и ТС: по одному запросу на каждую связь."""
        drivers = await self.drivers.get_by_ids([t.driver_id for t in transports if t.driver_id])
        vehicles = await self.vehicles.get_by_ids([t.vehicle_id for t in transports if t.vehicle_id])
        return [
            t.model_copy(update={
                "driver": drivers.get(t.driver_id) if t.driver_id else None,
                "vehicle": vehicles.get(t.vehicle_id) if t.vehicle_id else None,
            })
            for t in transports
        ]

    async def create_transport(self, data: CreateTransportRequest) -> TransportDTO:
        await self._ensure_references(data.driver_id, data.vehicle_id)

        with integrity_errors("Error creating transport"):
            created = await self.repository.create(data.model_dump(exclude_none=True))

        transport = (await self._embed([created]))[0]
        await log_info(f"Перевозка {transport.code} ({transport.id}) создана", type_msg=TypeMsg.INFO)
        await self.notifications.notify({
            "type": NotificationType.CREATE_TRANSPORT.value,
            "data": transport.model_dump(mode="json", by_alias=True),
        })
        return transport

    async def list_transports(self) -> List[TransportDTO]:
        return await self._embed(await self.repository.get_all())

    async def get_transport(self, transport_id: UUID) -> TransportDTO:
        transport = await self.repository.get_by_id(transport_id)
        if not transport:
            raise NotFoundError.for_entity("Transport", transport_id)
        return (await self._embed([transport]))[0]

    async def update_transport(self, transport_id: UUID, data: UpdateTransportRequest) -> TransportDTO:
        await self.get_transport(transport_id)
        await self._ensure_references(data.driver_id, data.vehicle_id)

        with integrity_errors("Error updating transport"):
            updated = await self.repository.update(transport_id, data.model_dump(exclude_unset=True))
        if not updated:
            raise NotFoundError.for_entity("Transport", transport_id)

        transport = (await self._embed([updated]))[0]
        await self.notifications.notify({
            "type": NotificationType.UPDATE_TRANSPORT.value,
            "id": str(transport_id),
            "data": transport.model_dump(mode="json", by_alias=True),
        })
        return transport

    async def remove_transport(self, transport_id: UUID) -> dict:
        removed = await self.repository.delete(transport_id)
        if not removed:
            raise NotFoundError.for_entity("Transport", transport_id)

        await log_info(f"Перевозка {transport_id} удалена", type_msg=TypeMsg.INFO)
        await self.notifications.notify({
            "type": NotificationType.REMOVE_TRANSPORT.value,
            "id": str(transport_id),
        })
        return {"message": TRANSPORT_REMOVED_MESSAGE}
