import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from storage.memory import MemoryStore
from storage.sql import SqlStore


# Every store-level property runs against both backends
@pytest.fixture(params=["memory", "sql"])
def store(request):
    if request.param == "memory":
        backend = MemoryStore()
    else:
        backend = SqlStore.from_url("sqlite://")
    yield backend
    backend.close()


@pytest.fixture
def app(store):
    return create_app(store=store, settings=Settings(seed_sample_classes=False))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
