import uuid

import fakeredis
import pytest
from fastapi.testclient import TestClient

from app.core import redis_client
from app.main import app
from app.storage.device_store import get_device_store


@pytest.fixture(scope="function", autouse=True)
def fake_redis(monkeypatch):
    """Give each test an empty Redis of its own."""
    fake = fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer())
    monkeypatch.setattr(redis_client, "_redis_client", fake)

    store = get_device_store()
    store.reset()
    yield fake
    store.reset()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def unique_id():
    return uuid.uuid4().hex[:8]


@pytest.fixture
def serial_number(unique_id):
    return f"D{unique_id}{unique_id[:2]}"
