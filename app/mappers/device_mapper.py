from app.core.exceptions import MalformedInput
from app.models.device import Device, DeviceDTO


def from_dto(dto: DeviceDTO) -> Device:
    """Build an unsaved record from a client payload, dropping any client id."""
    if not dto.serial_number.strip():
        raise MalformedInput("serialNumber must not be blank")

    return Device(serial_number=dto.serial_number, life_cycle_state=dto.life_cycle_state)


def to_dto(device: Device) -> DeviceDTO:
    return DeviceDTO(
        id=device.id,
        serial_number=device.serial_number,
        life_cycle_state=device.life_cycle_state,
    )
