"""Pytest fixtures for testing"""

import pytest
from typing import Any, Dict
from fastapi.testclient import TestClient
from fico_simulator.api.main import create_app
from fico_simulator.api.dependencies import get_session_repository
from fico_simulator.infrastructure.repositories import SessionRepository
from fico_simulator.domain.models import Account, ActionStep, CreditMix, CreditProfile, Goal


@pytest.fixture
def session_repository() -> SessionRepository:
    """Fresh, isolated session store per test"""
    return SessionRepository(max_sessions=10)


@pytest.fixture
def client(session_repository: SessionRepository) -> TestClient:
    """Create FastAPI test client with an isolated session repository"""
    app = create_app()
    app.dependency_overrides[get_session_repository] = lambda: session_repository
    return TestClient(app)


@pytest.fixture
def sample_profile() -> CreditProfile:
    """
    One revolving card at 30% utilization, no late payments, one inquiry,
    5 years average age. Scores 726.
    """
    return CreditProfile(
        accounts=[Account(type="revolving", balance=3000, limit=10000, status="Open")],
        collections=[],
        late_payments_total=0,
        inquiries_total=1,
        average_account_age_months=60,
        credit_mix=CreditMix(revolving_count=1),
    )


@pytest.fixture
def sample_credit_data() -> Dict[str, Any]:
    """Same report as sample_profile, in the analysis service's JSON shape"""
    return {
        "accounts": [
            {"type": "Revolving", "balance": 3000, "limit": 10000, "status": "Open", "payment_history": "Current"}
        ],
        "collections": [],
        "late_payments": 0,
        "inquiries": 1,
        "average_account_age_months": 60,
        "credit_mix": {"revolving": 1, "installment": 0, "mortgage": 0},
    }


@pytest.fixture
def sample_goal() -> Goal:
    """Three-step plan with impacts [10, 5, -2]"""
    return Goal(
        goal_id="goal-1",
        title="Increase Score by 13 Points",
        category="Amounts Owed",
        timeframe_months=4,
        action_plan=[
            ActionStep(description="Pay down card balance by $1,000", impact=10),
            ActionStep(description="Enable autopay", impact=5),
            ActionStep(description="Open a secured card", impact=-2),
        ],
    )


@pytest.fixture
def sample_goal_payload() -> Dict[str, Any]:
    return {
        "goal_id": "goal-1",
        "title": "Increase Score by 13 Points",
        "category": "Amounts Owed",
        "timeframe_months": 4,
        "action_plan": [
            {"step": "Pay down card balance by $1,000", "impact": 10},
            {"step": "Enable autopay", "impact": 5},
            {"step": "Open a secured card", "impact": -2},
        ],
    }
