import logging

from app.config.settings import get_settings
from app.core.exceptions import ConstraintViolation, DeviceNotFound, DuplicateSerialNumber
from app.models.device import Device
from app.storage.device_store import get_device_store

logger = logging.getLogger(__name__)


class DeviceService:
    def __init__(self):
        self.store = get_device_store()
        self.settings = get_settings()

    async def create_device(self, device: Device) -> Device:
        device = device.model_copy(update={"id": None})

        try:
            created = await self.store.save(device)
        except ConstraintViolation as e:
            logger.warning(
                f"Rejected device {device.serial_number}: already registered as {e.owner_id}"
            )
            raise DuplicateSerialNumber(device.serial_number) from e

        logger.info(
            f"Created device {created.id} ({created.serial_number}, {created.life_cycle_state.value})"
        )
        return created

    async def get_device(self, device_id: str) -> Device:
        device = await self.store.find_by_id(device_id)
        if not device:
            logger.info(f"Device {device_id} not found")
            raise DeviceNotFound(device_id)
        return device

    async def list_devices(self, limit: int = 100) -> list[Device]:
        limit = max(0, min(limit, self.settings.device_list_max_limit))
        return await self.store.find_all(limit)


_service = DeviceService()


def get_device_service() -> DeviceService:
    return _service
