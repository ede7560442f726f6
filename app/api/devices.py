from typing import Optional

from fastapi import APIRouter, Request, Response

from app.mappers.device_mapper import from_dto, to_dto
from app.models.device import DeviceDTO
from app.services.device_service import get_device_service

router = APIRouter()


@router.post("", response_model=DeviceDTO, status_code=201)
async def create_device(payload: DeviceDTO, request: Request, response: Response):
    service = get_device_service()
    device = await service.create_device(from_dto(payload))
    response.headers["Location"] = str(request.url_for("get_device", device_id=device.id))
    return to_dto(device)


@router.get("/{device_id}", response_model=DeviceDTO)
async def get_device(device_id: str):
    service = get_device_service()
    return to_dto(await service.get_device(device_id))


@router.get("", response_model=list[DeviceDTO])
async def list_devices(limit: Optional[int] = None):
    service = get_device_service()
    if limit is None:
        limit = service.settings.device_list_default_limit
    return [to_dto(device) for device in await service.list_devices(limit)]
