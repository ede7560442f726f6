import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.api import devices
from app.config.settings import get_settings
from app.core.exceptions import DeviceNotFound, DuplicateSerialNumber, MalformedInput
from app.core.redis_client import close_redis_client, get_redis_client, ping_redis
from app.storage.device_store import get_device_store

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await get_redis_client()
    logger.info(f"{settings.app_name} started")
    yield
    await close_redis_client()
    get_device_store().reset()
    logger.info(f"{settings.app_name} stopped")


app = FastAPI(title=settings.app_name, version="1.0.0", lifespan=lifespan)

app.include_router(devices.router, prefix="/devices", tags=["devices"])


@app.get("/health")
async def health_check():
    if not await ping_redis():
        return JSONResponse(
            status_code=503, content={"status": "unhealthy", "service": "device-registry"}
        )
    return {"status": "healthy", "service": "device-registry"}


@app.exception_handler(DeviceNotFound)
async def device_not_found_handler(request: Request, exc: DeviceNotFound):
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(DuplicateSerialNumber)
async def duplicate_serial_number_handler(request: Request, exc: DuplicateSerialNumber):
    return JSONResponse(status_code=409, content={"error": str(exc)})


@app.exception_handler(MalformedInput)
async def malformed_input_handler(request: Request, exc: MalformedInput):
    return JSONResponse(
        status_code=400, content={"error": str(exc), "detail": jsonable_encoder(exc.detail)}
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return await malformed_input_handler(
        request, MalformedInput("Invalid device payload", detail=exc.errors())
    )
