from fastapi.testclient import TestClient

from leaddesk.main import app


client = TestClient(app)


def test_health_check():
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"


def test_health_ready():
    resp = client.get("/health/ready")
    assert resp.status_code == 200
    checks = resp.json()
    assert checks["lead_store"] is True
    assert checks["ready"] is True
    assert checks["cached_leads"] == 8
    assert checks["scoring_backend"] == "configured"


def test_health_info():
    resp = client.get("/health/info")
    assert resp.status_code == 200
    data = resp.json()
    assert data["service"] == "leaddesk"
    assert "configuration" in data
    assert "features" in data
    assert data["features"]["deterministic_scores"] is True


def test_metrics_endpoint():
    client.get("/health")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "text/plain" in resp.headers.get("content-type", "")
    assert "api_requests_total" in resp.text
    assert "leads_created_total" in resp.text
