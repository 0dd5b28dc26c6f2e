from __future__ import annotations

import pytest

from employee_registry.core.storage import MemoryStorage
from employee_registry.models.employee import DocumentInfo
from employee_registry.services.draft_session import draft_session
from employee_registry.services.record_store import record_store


@pytest.fixture
def seeded_client(client, make_employee):
    record_store.replace_all(
        [
            make_employee("Jane Doe", documents=[DocumentInfo(name="cv.pdf", size=1536)]),
            make_employee("John Roe"),
            make_employee("Madonna"),
        ]
    )
    return client


def test_list_employees_empty(client):
    response = client.get("/api/v1/employees")
    assert response.status_code == 200
    assert response.json() == []


def test_list_employees_read_model(seeded_client):
    response = seeded_client.get("/api/v1/employees")
    assert response.status_code == 200
    data = response.json()

    assert [e["index"] for e in data] == [0, 1, 2]
    assert [e["initials"] for e in data] == ["JD", "JR", "M"]
    first = data[0]
    assert first["nid"] == "1990123456789"
    assert first["lastWorkPlace"] == "Acme Ltd"
    assert first["documents"] == [{"name": "cv.pdf", "size": 1536, "size_label": "1.5 KB"}]


def test_get_employee(seeded_client):
    response = seeded_client.get("/api/v1/employees/1")
    assert response.status_code == 200
    assert response.json()["name"] == "John Roe"


def test_get_employee_not_found(seeded_client):
    response = seeded_client.get("/api/v1/employees/7")
    assert response.status_code == 404


def test_delete_employee_shifts_positions(seeded_client):
    response = seeded_client.delete("/api/v1/employees/0")
    assert response.status_code == 200
    data = response.json()
    assert [e["name"] for e in data] == ["John Roe", "Madonna"]
    assert [e["index"] for e in data] == [0, 1]


def test_delete_unknown_index(seeded_client):
    response = seeded_client.delete("/api/v1/employees/3")
    assert response.status_code == 404


def test_delete_edit_target_resets_draft(seeded_client):
    seeded_client.post("/api/v1/employees/1/edit")

    seeded_client.delete("/api/v1/employees/1")

    draft = seeded_client.get("/api/v1/draft").json()
    assert draft["is_editing"] is False
    assert draft["fields"]["name"] == ""


def test_edit_employee_loads_draft(seeded_client):
    response = seeded_client.post("/api/v1/employees/0/edit")
    assert response.status_code == 200
    draft = response.json()
    assert draft["is_editing"] is True
    assert draft["editing_index"] == 0
    assert draft["fields"]["name"] == "Jane Doe"
    assert draft["documents"][0]["size_label"] == "1.5 KB"


def test_edit_unknown_employee(seeded_client):
    response = seeded_client.post("/api/v1/employees/9/edit")
    assert response.status_code == 404
    assert draft_session.is_editing() is False


def test_delete_reports_persistence_failure(seeded_client):
    record_store.storage = MemoryStorage(quota_bytes=1)

    response = seeded_client.delete("/api/v1/employees/0")

    assert response.status_code == 507
    assert "could not be saved" in response.json()["detail"]
    assert len(record_store) == 2


def test_sync_after_failed_write(seeded_client):
    storage = MemoryStorage(quota_bytes=1)
    record_store.storage = storage
    seeded_client.delete("/api/v1/employees/0")

    response = seeded_client.post("/api/v1/employees/sync")
    assert response.status_code == 507

    storage.quota_bytes = 0
    response = seeded_client.post("/api/v1/employees/sync")
    assert response.status_code == 200
    assert response.json() == {"saved": 2, "dirty": False}


@pytest.mark.anyio
async def test_list_employees_async(async_client, make_employee):
    record_store.replace_all([make_employee("Ada Lovelace")])

    response = await async_client.get("/api/v1/employees")

    assert response.status_code == 200
    assert response.json()[0]["initials"] == "AL"
