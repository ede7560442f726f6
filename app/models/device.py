from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class LifeCycleState(str, Enum):
    PENDING_INSTALL = "PENDING_INSTALL"
    INSTALLED = "INSTALLED"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    RETIRED = "RETIRED"


class Device(BaseModel):
    """A persisted device.

    Identity is the store-generated ``id`` alone. Two records with the same
    ``id`` are the same device even if their other fields differ, and a record
    that has not been saved yet (``id is None``) only equals itself.
    """

    id: Optional[str] = None
    serial_number: str
    life_cycle_state: LifeCycleState

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Device):
            return NotImplemented
        return self.id is not None and self.id == other.id

    def __hash__(self):
        # Must not change when the store assigns the id.
        return hash(type(self))


class DeviceDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = None
    serial_number: str
    life_cycle_state: LifeCycleState
