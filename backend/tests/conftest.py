from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.testclient import TestClient

from employee_registry.core.storage import MemoryStorage
from employee_registry.main import app
from employee_registry.models.employee import DocumentInfo, Employee
from employee_registry.services.draft_session import DraftSession, draft_session
from employee_registry.services.record_store import RecordStore, record_store

VALID_FIELDS = {
    "name": "Jane Doe",
    "phone": "01711223344",
    "email": "jane.doe@example.com",
    "national_id": "1990123456789",
    "date_of_birth": "1990-04-12",
    "address": "12 Lake Road, Dhaka",
    "qualification": "MSc Computer Science",
    "religion": "",
    "experience": 6,
    "last_work_place": "Acme Ltd",
    "salary": 85000,
}


@pytest.fixture(autouse=True)
def _memory_backend():
    from employee_registry.core.config import settings

    original_backend = settings.STORAGE_BACKEND
    settings.STORAGE_BACKEND = "memory"
    record_store.storage = MemoryStorage()
    record_store.key = settings.STORAGE_KEY
    record_store.records.set([])
    record_store.dirty = False
    draft_session.start_new()
    yield
    settings.STORAGE_BACKEND = original_backend


@pytest.fixture
def valid_fields():
    return dict(VALID_FIELDS)


@pytest.fixture
def make_employee():
    def _make(name: str = "Jane Doe", **overrides) -> Employee:
        return Employee(**{**VALID_FIELDS, "name": name, **overrides})

    return _make


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return RecordStore(storage)


@pytest.fixture
def session(store):
    return DraftSession(store)


@pytest.fixture
def sample_documents():
    return [
        DocumentInfo(name="cv.pdf", size=183_500),
        DocumentInfo(name="certificate.png", size=2_400_000),
    ]


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
async def async_client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
