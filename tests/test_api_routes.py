"""Tests for API routes."""

import httpx
import pytest
from fastapi.testclient import TestClient

from leaddesk.dependencies import get_store
from leaddesk.main import app


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root_endpoint(client):
    """Test root endpoint returns API info."""
    response = client.get("/")
    assert response.status_code == 200

    data = response.json()
    assert "message" in data
    assert "endpoints" in data


def test_list_leads(client):
    response = client.get("/leads")

    assert response.status_code == 200
    leads = response.json()
    assert len(leads) == 8
    assert leads[0]["name"] == "John Smith"
    assert leads[0]["last_contact"] == "2023-09-15"
    assert leads[0]["activities"][0]["type"] == "Email"


def test_list_leads_search_and_status(client):
    response = client.get("/leads", params={"search": "globex"})
    assert [lead["id"] for lead in response.json()] == [3]

    response = client.get("/leads", params={"status": "Contacted"})
    assert [lead["id"] for lead in response.json()] == [2, 6]


def test_list_leads_status_is_case_insensitive(client):
    response = client.get("/leads", params={"status": "new"})

    assert response.status_code == 200
    assert [lead["id"] for lead in response.json()] == [1, 4, 7]


def test_list_leads_unknown_status(client):
    response = client.get("/leads", params={"status": "Won"})

    assert response.status_code == 422


def test_create_lead(client):
    response = client.post("/leads", json={"name": "Zed", "email": "zed@x.com", "budget": 1000})

    assert response.status_code == 201
    assert response.json() == {"success": True, "error": None}

    first = client.get("/leads").json()[0]
    assert first["name"] == "Zed"
    assert first["status"] == "New"
    assert 70 <= first["score"] <= 99


def test_create_lead_reports_backend_failure_as_warning(client, backend):
    backend.fail_with = httpx.ConnectError("connection refused")

    response = client.post("/leads", json={"name": "Zed", "email": "zed@x.com", "budget": 1000})

    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["error"]
    assert len(client.get("/leads").json()) == 9


def test_create_lead_validation(client):
    response = client.post("/leads", json={"name": "Zed", "budget": 1000})
    assert response.status_code == 422

    response = client.post("/leads", json={"name": "Zed", "email": "zed@x.com", "budget": -1})
    assert response.status_code == 422

    response = client.post("/leads", json={"name": "Zed", "email": "zed@x.com", "budget": 1, "status": "Won"})
    assert response.status_code == 422

    response = client.post("/leads", json={"name": " ", "email": "zed@x.com", "budget": 1})
    assert response.status_code == 400
    assert response.json()["detail"] == "Name and email are required"


def test_get_lead(client):
    response = client.get("/leads/2")

    assert response.status_code == 200
    assert response.json()["email"] == "emily@example.com"


def test_get_lead_not_found(client):
    response = client.get("/leads/999")

    assert response.status_code == 404


def test_patch_lead_changes_only_given_fields(client):
    before = client.get("/leads/3").json()

    response = client.patch("/leads/3", json={"status": "Proposal"})

    assert response.status_code == 200
    after = response.json()
    assert after["status"] == "Proposal"
    after["status"] = before["status"]
    assert after == before


def test_patch_lead_rejects_invalid_score_and_status(client):
    before = client.get("/leads/3").json()

    assert client.patch("/leads/3", json={"score": 150}).status_code == 422
    assert client.patch("/leads/3", json={"score": -1}).status_code == 422
    assert client.patch("/leads/3", json={"status": "Won"}).status_code == 422

    assert client.get("/leads/3").json() == before


def test_patch_lead_not_found(client):
    response = client.patch("/leads/999", json={"status": "Closed"})

    assert response.status_code == 404


def test_add_activity(client):
    response = client.post("/leads/4/activities", json={"type": "Call", "description": "Intro call"})

    assert response.status_code == 201
    lead = response.json()
    assert lead["activities"][0]["description"] == "Intro call"
    assert lead["activities"][0]["lead_id"] == 4
    assert lead["last_contact"] == "2026-03-15"


def test_add_activity_rejects_unknown_type(client):
    response = client.post("/leads/4/activities", json={"type": "Fax", "description": "x"})

    assert response.status_code == 422


def test_add_note(client):
    client.post("/leads/3/notes", json={"text": "hello"})
    response = client.post("/leads/3/notes", json={"text": "world"})

    assert response.status_code == 201
    assert response.json()["notes"] == "hello\n\nworld"


def test_add_note_not_found(client):
    response = client.post("/leads/999/notes", json={"text": "hello"})

    assert response.status_code == 404


def test_lead_score(client, backend):
    backend.scores["john@example.com"] = {"lead_score": "Hot"}

    response = client.get("/leads/1/score")

    assert response.status_code == 200
    assert response.json()["lead_score"] == "Hot"


def test_lead_score_backend_down(client, backend):
    backend.fail_with = httpx.ConnectError("connection refused")

    response = client.get("/leads/1/score")

    assert response.status_code == 200
    data = response.json()
    assert data["lead_score"] is None
    assert data["error"]


def test_sync_merges_backend_leads(client, backend):
    backend.leads = [[50, "Emily Remote", "emily@example.com", 1]]

    response = client.post("/leads/sync")

    assert response.status_code == 200
    leads = response.json()
    assert len(leads) == 8
    assert leads[0]["id"] == 50
    assert [lead["email"] for lead in leads].count("emily@example.com") == 1


def test_sync_backend_down_returns_cache(client, backend):
    backend.fail_with = httpx.ConnectError("connection refused")

    response = client.post("/leads/sync")

    assert response.status_code == 200
    assert len(response.json()) == 8


def test_analytics_endpoints(client):
    sources = client.get("/analytics/sources").json()
    assert sources[0] == {"name": "Website", "value": 2}
    assert len(sources) == 7

    monthly = client.get("/analytics/monthly").json()
    assert [m["month"] for m in monthly] == ["Sep", "Oct", "Nov", "Dec", "Jan", "Feb", "Mar"]

    pipeline = client.get("/analytics/pipeline").json()
    assert [column["status"] for column in pipeline][0] == "New"

    scores = client.get("/analytics/scores").json()
    assert sum(bucket["count"] for bucket in scores) == 8

    summary = client.get("/analytics/summary").json()
    assert summary["total_leads"] == 8


def test_team(client):
    response = client.get("/team")

    assert response.status_code == 200
    assert [member["id"] for member in response.json()] == ["JD", "JS", "RJ"]


def test_assign_lead_to_team_member(client):
    response = client.patch("/leads/1", json={"assignee": "RJ"})
    assert response.status_code == 200
    assert response.json()["assignee"] == "RJ"

    response = client.patch("/leads/1", json={"assignee": "ZZ"})
    assert response.status_code == 400
