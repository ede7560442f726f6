"""Errors raised by the device registry.

Each one is an expected outcome of normal operation and is translated to an
HTTP status by the handlers registered in ``app.main``.
"""

from typing import Optional


class DeviceRegistryError(Exception):
    """Base class for device registry errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConstraintViolation(DeviceRegistryError):
    """The store refused a write because a serial number is already owned."""

    def __init__(self, serial_number: str, owner_id: Optional[str] = None):
        super().__init__(f"Serial number {serial_number} is already in use")
        self.serial_number = serial_number
        self.owner_id = owner_id


class DuplicateSerialNumber(DeviceRegistryError, ValueError):
    def __init__(self, serial_number: str):
        super().__init__(f"Device with serial number {serial_number} already exists")
        self.serial_number = serial_number


class DeviceNotFound(DeviceRegistryError, KeyError):
    def __init__(self, device_id: str):
        super().__init__(f"Device {device_id} not found")
        self.device_id = device_id


class MalformedInput(DeviceRegistryError, ValueError):
    def __init__(self, message: str, detail: Optional[list] = None):
        super().__init__(message)
        self.detail = detail or []
