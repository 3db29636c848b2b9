"""
E2E tests for user personas against the mock snapshot provider.

These tests require the mock snapshot server to be running on
SNAPSHOT_API_BASE (default http://localhost:8001):
    uvicorn mocks.snapshot_server.main:app --port 8001

User personas:
- user_healthy: Strong saver, all metrics good
- user_overspender: Spends more than earned, almost no savings
- user_new: Freshly created profile, every total zero, no goals
- user_demo: Demo account with several goals in flight
"""

import pytest
from fastapi.testclient import TestClient


@pytest.mark.integration
def test_user_healthy(client: TestClient):
    """
    user_healthy: five months of cover, 40% spending
    Expected: Good, only generic recommendations
    """
    response = client.post("/v1/health", json={"user_id": "user_healthy"})

    assert response.status_code == 200
    data = response.json()
    assert data["overall_score"] == 77
    assert data["category"] == "Good"
    assert all(m["status"] == "good" for m in data["metrics"].values())
    assert len(data["recommendations"]) == 3


@pytest.mark.integration
def test_user_overspender(client: TestClient):
    """
    user_overspender: expenses above income
    Expected: Poor, four targeted recommendations
    """
    response = client.post("/v1/health", json={"user_id": "user_overspender"})

    assert response.status_code == 200
    data = response.json()
    assert data["category"] == "Poor"
    assert data["metrics"]["spendingRatio"]["status"] == "poor"
    assert data["metrics"]["spendingRatio"]["score"] == 0
    assert data["metrics"]["debtToIncome"]["status"] == "good"
    assert len(data["recommendations"]) == 4


@pytest.mark.integration
def test_user_new_zero_totals(client: TestClient):
    """
    user_new: nothing recorded yet
    Expected: scored without errors, no goals means zero goal progress
    """
    response = client.post("/v1/health", json={"user_id": "user_new"})

    assert response.status_code == 200
    data = response.json()
    assert data["overall_score"] == 45
    assert data["category"] == "Needs Improvement"
    assert data["metrics"]["goalProgress"]["score"] == 0


@pytest.mark.integration
def test_user_demo_history(client: TestClient):
    """Reports for a user show up in history, newest first"""
    first = client.post("/v1/health", json={"user_id": "user_demo"}).json()
    second = client.post("/v1/health", json={"user_id": "user_demo"}).json()

    assert first["overall_score"] == second["overall_score"]

    history = client.get("/v1/health/history?user_id=user_demo").json()
    ids = {r["report_id"] for r in history["reports"]}
    assert {first["report_id"], second["report_id"]} <= ids


@pytest.mark.integration
def test_unknown_user(client: TestClient):
    response = client.post("/v1/health", json={"user_id": "user_missing"})
    assert response.status_code == 404
