"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from fico_simulator.infrastructure.clients.analysis import AnalysisClient
from fico_simulator.infrastructure.repositories import SessionRepository

_session_repository = SessionRepository()


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_analysis_client() -> AnalysisClient:
    """Provide document analysis client instance"""
    return AnalysisClient()


def get_session_repository() -> SessionRepository:
    """Provide the process-wide simulation session store"""
    return _session_repository
