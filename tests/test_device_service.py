"""
Device registry service tests.
"""
import asyncio
import uuid

import pytest

from app.core.exceptions import DeviceNotFound, DuplicateSerialNumber
from app.models.device import Device, LifeCycleState
from app.services.device_service import get_device_service


@pytest.fixture
def service():
    return get_device_service()


async def test_create_then_get_round_trip(service, serial_number):
    created = await service.create_device(
        Device(serial_number=serial_number, life_cycle_state=LifeCycleState.INSTALLED)
    )

    fetched = await service.get_device(created.id)

    assert fetched == created
    assert fetched.model_dump() == created.model_dump()


async def test_create_discards_supplied_id(service, serial_number):
    supplied_id = str(uuid.uuid4())

    created = await service.create_device(
        Device(
            id=supplied_id,
            serial_number=serial_number,
            life_cycle_state=LifeCycleState.PENDING_INSTALL,
        )
    )

    assert created.id
    assert created.id != supplied_id


async def test_create_duplicate_serial_fails(service, serial_number):
    await service.create_device(
        Device(serial_number=serial_number, life_cycle_state=LifeCycleState.ACTIVE)
    )

    with pytest.raises(DuplicateSerialNumber) as exc_info:
        await service.create_device(
            Device(serial_number=serial_number, life_cycle_state=LifeCycleState.RETIRED)
        )

    assert exc_info.value.serial_number == serial_number


async def test_concurrent_create_same_serial(service, serial_number):
    results = await asyncio.gather(
        service.create_device(
            Device(serial_number=serial_number, life_cycle_state=LifeCycleState.ACTIVE)
        ),
        service.create_device(
            Device(serial_number=serial_number, life_cycle_state=LifeCycleState.INACTIVE)
        ),
        return_exceptions=True,
    )

    assert sum(isinstance(r, Device) for r in results) == 1
    assert sum(isinstance(r, DuplicateSerialNumber) for r in results) == 1


async def test_get_unknown_device_fails(service):
    with pytest.raises(DeviceNotFound):
        await service.get_device(str(uuid.uuid4()))


async def test_list_devices_clamps_limit(service, unique_id):
    for i in range(3):
        await service.create_device(
            Device(serial_number=f"SN-{unique_id}-{i}", life_cycle_state=LifeCycleState.ACTIVE)
        )

    assert len(await service.list_devices(-5)) == 0
    assert len(await service.list_devices(2)) == 2
    assert len(await service.list_devices(10_000)) == 3
