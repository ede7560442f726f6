import logging
import uuid
from typing import Optional

from app.core.exceptions import ConstraintViolation
from app.core.redis_client import get_redis_client
from app.models.device import Device

logger = logging.getLogger(__name__)

ALL_DEVICES_KEY = "device:all"

# KEYS: record, serial index, id set. ARGV: id, record json.
# Returns nil on success, or the id that already owns the serial number.
SAVE_DEVICE_SCRIPT = """
local owner = redis.call("get", KEYS[2])
if owner and owner ~= ARGV[1] then
    return owner
end
redis.call("set", KEYS[1], ARGV[2])
redis.call("set", KEYS[2], ARGV[1])
redis.call("sadd", KEYS[3], ARGV[1])
return false
"""


def _device_key(device_id: str) -> str:
    return f"device:id:{device_id}"


def _serial_key(serial_number: str) -> str:
    return f"device:serial:{serial_number}"


class DeviceStore:
    def __init__(self):
        self.redis = None
        self._save_script = None

    async def initialize(self):
        if not self.redis:
            self.redis = await get_redis_client()
            self._save_script = self.redis.register_script(SAVE_DEVICE_SCRIPT)

    def reset(self):
        self.redis = None
        self._save_script = None

    async def save(self, device: Device) -> Device:
        """Insert or update ``device`` and return the persisted copy.

        A missing id is generated here. The serial number index, the record
        and the id set are written by one script, so a serial number owned by
        another id fails the whole write with ``ConstraintViolation``.
        """
        await self.initialize()

        if device.id is None:
            device = device.model_copy(update={"id": str(uuid.uuid4())})

        owner = await self._save_script(
            keys=[
                _device_key(device.id),
                _serial_key(device.serial_number),
                ALL_DEVICES_KEY,
            ],
            args=[device.id, device.model_dump_json()],
        )
        if owner is not None:
            owner_id = owner.decode() if isinstance(owner, bytes) else str(owner)
            raise ConstraintViolation(device.serial_number, owner_id=owner_id)

        logger.debug(f"Saved device {device.id} ({device.serial_number})")
        return device

    async def find_by_id(self, device_id: str) -> Optional[Device]:
        await self.initialize()
        data = await self.redis.get(_device_key(device_id))
        if not data:
            return None
        return Device.model_validate_json(data)

    async def find_by_serial_number(self, serial_number: str) -> Optional[Device]:
        await self.initialize()
        device_id = await self.redis.get(_serial_key(serial_number))
        if not device_id:
            return None
        return await self.find_by_id(device_id.decode())

    async def find_all(self, limit: int = 100) -> list[Device]:
        await self.initialize()

        members = await self.redis.smembers(ALL_DEVICES_KEY)
        device_ids = sorted(m.decode() for m in members)[:limit]
        if not device_ids:
            return []

        records = await self.redis.mget([_device_key(d) for d in device_ids])
        return [Device.model_validate_json(data) for data in records if data]

    async def count(self) -> int:
        await self.initialize()
        return await self.redis.scard(ALL_DEVICES_KEY)


_store = DeviceStore()


def get_device_store() -> DeviceStore:
    return _store
