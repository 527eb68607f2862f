"""
Tests for the wizard HTTP endpoints.
"""

from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from carbooking.application.use_cases.wizard import WizardUseCase
from carbooking.domain.entities.availability import UnavailablePeriod
from carbooking.domain.entities.car import CustomerProfile
from carbooking.infrastructure.backend.mock_backend import MockRentalBackend
from carbooking.infrastructure.store.memory_store import MemoryWizardStore
from carbooking.main import app
from carbooking.wiring.dependencies import get_wizard_use_case

CARS = [
    {"car_id": 11, "make": "Toyota", "model": "Vios", "rent_price": 1000},
    {"car_id": 12, "make": "Mitsubishi", "model": "Montero", "rent_price": 1500},
]


@pytest.fixture
def client():
    backend = MockRentalBackend(periods={12: [UnavailablePeriod(date(2030, 7, 1), date(2030, 7, 2), "maintenance")]})
    use_case = WizardUseCase(backend=backend, store=MemoryWizardStore(), today_provider=lambda: date(2030, 1, 1))
    app.dependency_overrides[get_wizard_use_case] = lambda: use_case
    yield TestClient(app)
    app.dependency_overrides.clear()


def _open(client: TestClient) -> str:
    response = client.post("/api/v1/wizards", json={"cars": CARS})
    assert response.status_code == 201
    return response.json()["state"]["session_id"]


def _patch_common(client: TestClient, session_id: str, field: str, value) -> dict:
    response = client.patch(f"/api/v1/wizards/{session_id}/common", json={"field": field, "value": value})
    assert response.status_code == 200
    return response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_open_and_read_wizard(client):
    session_id = _open(client)

    state = client.get(f"/api/v1/wizards/{session_id}").json()

    assert state["step"] == "common_details"
    assert state["step_index"] == 0
    assert [d["car"]["car_id"] for d in state["drafts"]] == [11, 12]
    assert state["fees"] == {"reservation_fee": 1000.0, "cleaning_fee": 200.0, "driver_fee": 500.0}


def test_open_requires_cars(client):
    assert client.post("/api/v1/wizards", json={"cars": []}).status_code == 422


def test_full_flow_through_submit(client):
    session_id = _open(client)
    _patch_common(client, session_id, "start_date", "2030-06-01")
    _patch_common(client, session_id, "end_date", "2030-06-03")
    body = _patch_common(client, session_id, "purpose", "Travel")
    assert body["state"]["total_cost"] == 4200 + 5700

    assert client.post(f"/api/v1/wizards/{session_id}/next").json()["action"] == "advanced"
    assert client.post(f"/api/v1/wizards/{session_id}/next").json()["action"] == "advanced"

    warned = client.post(f"/api/v1/wizards/{session_id}/terms/accept", json={"accepted": True}).json()
    assert warned["action"] == "terms_warning"
    client.post(f"/api/v1/wizards/{session_id}/terms/view")
    client.post(f"/api/v1/wizards/{session_id}/terms/accept", json={"accepted": True})
    assert client.post(f"/api/v1/wizards/{session_id}/next").json()["state"]["step"] == "review_submit"

    submitted = client.post(f"/api/v1/wizards/{session_id}/submit").json()
    assert submitted["action"] == "submitted"
    assert submitted["response"]["success"] is True
    assert client.get(f"/api/v1/wizards/{session_id}").status_code == 404


def test_conflicts_are_reported_in_state(client):
    session_id = _open(client)
    _patch_common(client, session_id, "start_date", "2030-06-30")
    body = _patch_common(client, session_id, "end_date", "2030-07-01")

    conflicts = body["state"]["conflicts"]
    assert len(conflicts) == 1
    assert conflicts[0]["car_name"] == "Mitsubishi Montero"
    assert body["state"]["drafts"][1]["has_conflict"] is True


def test_error_status_codes(client):
    session_id = _open(client)

    assert client.get("/api/v1/wizards/missing").status_code == 404
    assert client.patch(
        f"/api/v1/wizards/{session_id}/common", json={"field": "colour", "value": "red"}
    ).status_code == 400
    assert client.patch(
        f"/api/v1/wizards/{session_id}/cars/0", json={"field": "selected_driver", "value": 2}
    ).status_code == 409
    assert client.post(f"/api/v1/wizards/{session_id}/back").status_code == 409


def test_remove_cars_and_close(client):
    session_id = _open(client)

    first = client.delete(f"/api/v1/wizards/{session_id}/cars/0").json()
    assert first["action"] == "updated"
    assert len(first["state"]["drafts"]) == 1

    last = client.delete(f"/api/v1/wizards/{session_id}/cars/0").json()
    assert last["action"] == "closed"
    assert last["state"] is None
    assert client.delete(f"/api/v1/wizards/{session_id}").status_code == 404


def test_close_wizard(client):
    session_id = _open(client)
    assert client.delete(f"/api/v1/wizards/{session_id}").status_code == 204
    assert client.get(f"/api/v1/wizards/{session_id}").status_code == 404


def test_invalid_date_is_rejected(client):
    session_id = _open(client)
    _patch_common(client, session_id, "start_date", "2030-06-01")

    response = client.patch(
        f"/api/v1/wizards/{session_id}/common", json={"field": "start_date", "value": "2030-13-45"}
    )

    assert response.status_code == 400
    assert client.get(f"/api/v1/wizards/{session_id}").json()["common"]["start_date"] == "2030-06-01"


def test_callers_bearer_token_selects_their_profile():
    backend = MockRentalBackend(
        customers_by_token={
            "token-rosa": CustomerProfile(customer_id=5, driver_license_no="N01-11-000001"),
            "token-ben": CustomerProfile(customer_id=6, driver_license_no=None),
        }
    )
    use_case = WizardUseCase(backend=backend, store=MemoryWizardStore(), today_provider=lambda: date(2030, 1, 1))
    app.dependency_overrides[get_wizard_use_case] = lambda: use_case
    try:
        client = TestClient(app)
        rosa = client.post("/api/v1/wizards", json={"cars": CARS}, headers={"Authorization": "Bearer token-rosa"})
        ben = client.post("/api/v1/wizards", json={"cars": CARS}, headers={"Authorization": "Bearer token-ben"})
    finally:
        app.dependency_overrides.clear()

    assert rosa.json()["state"]["can_self_drive"] is True
    assert ben.json()["state"]["can_self_drive"] is False
    assert use_case.get(rosa.json()["state"]["session_id"]).customer_token == "token-rosa"
