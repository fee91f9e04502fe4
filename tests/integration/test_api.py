"""Integration tests for API endpoints"""

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from fico_simulator.domain.exceptions import AnalysisServiceError
from fico_simulator.domain.models import CreditProfile, Goal
from fico_simulator.infrastructure.clients.analysis import AnalysisResult


@pytest.fixture
def simulation(client: TestClient, sample_goal_payload, sample_credit_data) -> dict:
    """Open a session for the 3-step sample goal on the 726 profile"""
    response = client.post(
        "/v1/simulations",
        json={"goal": sample_goal_payload, "credit_data": sample_credit_data},
    )
    assert response.status_code == 201
    return response.json()


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient, sample_credit_data):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/score", json={"credit_data": sample_credit_data})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "fico_score_computed_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"


def test_score_endpoint(client: TestClient, sample_credit_data):
    """Test POST /v1/score on the reference profile"""
    response = client.post("/v1/score", json={"credit_data": sample_credit_data})

    assert response.status_code == 200
    data = response.json()
    assert data["score"] == 726
    assert data["score_band"] == "good"
    assert set(data["categories"]) == {
        "payment_history",
        "amounts_owed",
        "length_of_history",
        "new_credit",
        "credit_mix",
    }
    assert data["categories"]["amounts_owed"]["status"] == "Good"
    assert data["categories"]["amounts_owed"]["overall_utilization"] == 30.0
    assert data["categories"]["payment_history"]["weight_percent"] == 35


def test_score_endpoint_empty_report(client: TestClient):
    """A report without accounts scores the floor"""
    response = client.post("/v1/score", json={"credit_data": {}})

    assert response.status_code == 200
    assert response.json()["score"] == 300
    assert response.json()["score_band"] == "poor"


def test_score_endpoint_tolerates_bad_numbers(client: TestClient, sample_credit_data):
    sample_credit_data["inquiries"] = "lots"
    sample_credit_data["late_payments"] = None

    response = client.post("/v1/score", json={"credit_data": sample_credit_data})

    assert response.status_code == 200
    assert response.json()["categories"]["new_credit"]["status"] == "Excellent"


def test_advice_endpoint(client: TestClient, sample_credit_data):
    """Test POST /v1/advice"""
    response = client.post("/v1/advice", json={"credit_data": sample_credit_data})

    assert response.status_code == 200
    data = response.json()
    assert data["baseline_score"] == 726
    assert data["summary"].startswith("Baseline estimated score: 726.")
    assert data["projected_outcomes"] == {"expected_score": 761, "best_case_score": 786, "timeframe": "3-12 months"}
    assert len(data["action_plan"]) == 2


@patch("fico_simulator.infrastructure.clients.analysis.AnalysisClient.analyze_document")
def test_analyze_endpoint(mock_analyze: AsyncMock, client: TestClient, sample_profile: CreditProfile, sample_goal: Goal):
    """Test POST /v1/analyze with a stubbed analysis service"""
    mock_analyze.return_value = AnalysisResult(profile=sample_profile, goals=[sample_goal])

    response = client.post("/v1/analyze", json={"content": "report text", "mime_type": "text/plain"})

    assert response.status_code == 200
    data = response.json()
    assert data["score"] == 726
    assert data["score_band"] == "good"
    assert data["credit_data"]["accounts"][0]["type"] == "revolving"
    assert data["credit_data"]["credit_mix"] == {"revolving": 1, "installment": 0, "mortgage": 0}
    assert data["goals"][0]["goal_id"] == "goal-1"
    assert [step["impact"] for step in data["goals"][0]["action_plan"]] == [10, 5, -2]
    assert data["advice"]["baseline_score"] == 726
    mock_analyze.assert_awaited_once_with("report text", "text/plain")


@patch("fico_simulator.infrastructure.clients.analysis.AnalysisClient.analyze_document")
def test_analyze_output_opens_simulation(
    mock_analyze: AsyncMock, client: TestClient, sample_profile: CreditProfile, sample_goal: Goal
):
    """credit_data and goals from /v1/analyze can be fed straight into /v1/simulations"""
    mock_analyze.return_value = AnalysisResult(profile=sample_profile, goals=[sample_goal])
    analysis = client.post("/v1/analyze", json={"content": "report text"}).json()

    response = client.post(
        "/v1/simulations",
        json={"goal": analysis["goals"][0], "credit_data": analysis["credit_data"]},
    )

    assert response.status_code == 201
    assert response.json()["score_history"] == [726]


@patch("fico_simulator.infrastructure.clients.analysis.AnalysisClient.analyze_document")
def test_analyze_endpoint_service_unavailable(mock_analyze: AsyncMock, client: TestClient):
    """Analysis failures surface as 503"""
    mock_analyze.side_effect = AnalysisServiceError("Analysis service timeout after 30.0s")

    response = client.post("/v1/analyze", json={"content": "report text"})

    assert response.status_code == 503


def test_analyze_endpoint_requires_content(client: TestClient):
    response = client.post("/v1/analyze", json={"content": ""})
    assert response.status_code == 422


def test_create_simulation(simulation: dict):
    """Test POST /v1/simulations initial state"""
    assert simulation["session_id"]
    assert simulation["current_step"] == 0
    assert simulation["total_steps"] == 3
    assert simulation["completed"] is False
    assert simulation["score_history"] == [726]
    assert simulation["projected_score"] == 726
    assert simulation["adjustments"] == {"utilization_percent": 30, "inquiries": 1, "late_payments": 0}
    assert [entry["month_label"] for entry in simulation["calendar"]] == ["Month 1", "Month 2", "Month 3", "Month 4"]
    assert simulation["goal_issues"] == []


def test_create_simulation_with_starting_score(client: TestClient, sample_goal_payload, sample_credit_data):
    response = client.post(
        "/v1/simulations",
        json={"goal": sample_goal_payload, "credit_data": sample_credit_data, "starting_score": 650},
    )

    assert response.status_code == 201
    assert response.json()["score_history"] == [650]


def test_create_simulation_rejects_out_of_range_score(client: TestClient, sample_goal_payload):
    response = client.post("/v1/simulations", json={"goal": sample_goal_payload, "starting_score": 900})
    assert response.status_code == 422


def test_create_simulation_reports_goal_issues(client: TestClient, sample_goal_payload, sample_credit_data):
    sample_goal_payload["title"] = "Increase Score by 40 Points"

    response = client.post("/v1/simulations", json={"goal": sample_goal_payload, "credit_data": sample_credit_data})

    assert response.status_code == 201
    assert len(response.json()["goal_issues"]) == 1


def test_advance_and_revert(client: TestClient, simulation: dict):
    """Step through the whole plan and back"""
    session_id = simulation["session_id"]

    data = client.post(f"/v1/simulations/{session_id}/advance").json()
    assert data["current_step"] == 1
    assert data["score_history"] == [726, 736]
    assert data["badges"] == ["Great Progress"]
    assert data["calendar"][0]["score"] == 736

    client.post(f"/v1/simulations/{session_id}/advance")
    data = client.post(f"/v1/simulations/{session_id}/advance").json()
    assert data["completed"] is True
    assert data["score_history"] == [726, 736, 741, 739]
    assert "Goal Completed" in data["badges"]

    # Terminal state: advancing again changes nothing
    again = client.post(f"/v1/simulations/{session_id}/advance").json()
    assert again["score_history"] == data["score_history"]

    data = client.post(f"/v1/simulations/{session_id}/revert").json()
    assert data["current_step"] == 2
    assert data["completed"] is False
    assert "Goal Completed" not in data["badges"]


def test_revert_at_start_is_noop(client: TestClient, simulation: dict):
    data = client.post(f"/v1/simulations/{simulation['session_id']}/revert").json()

    assert data["current_step"] == 0
    assert data["score_history"] == [726]


def test_adjustments_flow(client: TestClient, simulation: dict):
    """PATCH adjustments, reset, then snapshot"""
    session_id = simulation["session_id"]
    client.post(f"/v1/simulations/{session_id}/advance")

    data = client.patch(
        f"/v1/simulations/{session_id}/adjustments",
        json={"field": "utilization_percent", "value": 5},
    ).json()
    assert data["adjustments"]["utilization_percent"] == 5
    assert data["projected_score"] == 778

    data = client.patch(
        f"/v1/simulations/{session_id}/adjustments",
        json={"field": "late_payments", "value": "250"},
    ).json()
    assert data["adjustments"]["late_payments"] == 20

    data = client.patch(
        f"/v1/simulations/{session_id}/adjustments",
        json={"field": "inquiries", "value": "abc"},
    ).json()
    assert data["adjustments"]["inquiries"] == 0

    data = client.post(f"/v1/simulations/{session_id}/adjustments/reset").json()
    assert data["adjustments"] == {"utilization_percent": 30, "inquiries": 1, "late_payments": 0}
    assert data["projected_score"] == 736

    response = client.post(f"/v1/simulations/{session_id}/snapshots")
    assert response.status_code == 201
    snapshots = response.json()["snapshots"]
    assert len(snapshots) == 1
    assert snapshots[0]["score"] == 736
    assert snapshots[0]["adjustments"]["utilization_percent"] == 30


def test_adjustment_unknown_field(client: TestClient, simulation: dict):
    response = client.patch(
        f"/v1/simulations/{simulation['session_id']}/adjustments",
        json={"field": "income", "value": 5},
    )
    assert response.status_code == 422


def test_get_and_delete_simulation(client: TestClient, simulation: dict):
    """Test GET and DELETE /v1/simulations/{session_id}"""
    session_id = simulation["session_id"]

    response = client.get(f"/v1/simulations/{session_id}")
    assert response.status_code == 200
    assert response.json()["session_id"] == session_id

    assert client.delete(f"/v1/simulations/{session_id}").status_code == 204
    assert client.get(f"/v1/simulations/{session_id}").status_code == 404
    assert client.delete(f"/v1/simulations/{session_id}").status_code == 404


def test_get_simulation_not_found(client: TestClient):
    response = client.get("/v1/simulations/does-not-exist")
    assert response.status_code == 404
    assert client.post("/v1/simulations/does-not-exist/advance").status_code == 404


def test_sessions_are_isolated(client: TestClient, sample_goal_payload, sample_credit_data):
    first = client.post("/v1/simulations", json={"goal": sample_goal_payload, "credit_data": sample_credit_data}).json()
    second = client.post("/v1/simulations", json={"goal": sample_goal_payload, "credit_data": sample_credit_data}).json()

    client.post(f"/v1/simulations/{first['session_id']}/advance")

    assert client.get(f"/v1/simulations/{second['session_id']}").json()["current_step"] == 0
