"""HTTP-level tests for the digest and health routes (mock mode, no network)."""

import pytest
from fastapi.testclient import TestClient

from competitor_radar.api.dependencies import get_app_orchestrator
from competitor_radar.config import Settings
from competitor_radar.main import app
from competitor_radar.orchestrator import DigestOrchestrator

from conftest import make_endpoints


@pytest.fixture
def client():
    orchestrator = DigestOrchestrator(
        settings=Settings(mock_mode=True, newsapi_key=""),
        endpoints=make_endpoints(2),
    )
    app.dependency_overrides[get_app_orchestrator] = lambda: orchestrator
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_post_digests(client):
    resp = client.post("/api/digests", json={
        "competitors": ["Acme", " ", "Globex"],
        "industry": "fintech",
        "focus_area": "mobile banking",
    })

    assert resp.status_code == 200
    data = resp.json()
    assert [d["competitor"] for d in data["digests"]] == ["Acme", "Globex"]
    first = data["digests"][0]["updates"][0]
    assert first["impact"] == "high"
    assert first["age_label"] == "2h ago"
    assert "mobile experience" in first["text"]
    assert "generated_at" in data


def test_post_digests_empty_list(client):
    resp = client.post("/api/digests", json={"competitors": []})
    assert resp.status_code == 200
    assert resp.json()["digests"] == []


def test_post_digests_rejects_bad_body(client):
    resp = client.post("/api/digests", json={"competitors": "Acme"})
    assert resp.status_code == 422


def test_industry_news(client):
    resp = client.get("/api/industry-news", params={"industry": "saas", "focus_area": "analytics"})

    assert resp.status_code == 200
    items = resp.json()["items"]
    assert len(items) == 3
    assert items[0]["title"] == "SaaS & Software Market Trends: Key Insights"
    assert {i["impact"] for i in items} <= {"high", "medium", "low"}


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["rotation"] == {"endpoints": ["ep0", "ep1"], "current": "ep0"}
    assert data["config"]["mock_mode"] is True
    assert data["config"]["newsapi_enabled"] is False
