"""/v1/simulations - step-through goal simulation sessions"""

import logging
from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException, Request, Response

from fico_simulator.api.v1.schemas import AdjustmentRequest, CreateSimulationRequest, SimulationResponse
from fico_simulator.api.dependencies import get_request_id, get_session_repository
from fico_simulator.infrastructure.repositories import SessionRepository
from fico_simulator.domain.parsing import parse_credit_profile, parse_goal
from fico_simulator.domain.simulator import SimulationSession, create_session
from fico_simulator.domain.exceptions import SessionNotFoundError, UnknownAdjustmentFieldError
from fico_simulator.infrastructure.observability.metrics import record_simulation_event
from fico_simulator.infrastructure.observability.logging import log_simulation_event

router = APIRouter()


def _to_response(session_id: str, session: SimulationSession) -> SimulationResponse:
    with session.lock:
        return _view(session_id, session)


def _view(session_id: str, session: SimulationSession) -> SimulationResponse:
    return SimulationResponse(
        session_id=session_id,
        goal_id=session.goal.goal_id,
        title=session.goal.title,
        current_step=session.current_step,
        total_steps=session.total_steps,
        completed=session.is_completed,
        projected_score=session.projected_score,
        score_history=list(session.score_history),
        badges=list(session.badges),
        adjustments=asdict(session.adjustments),
        calendar=[asdict(entry) for entry in session.calendar],
        snapshots=[asdict(snapshot) for snapshot in session.snapshots],
        goal_issues=list(session.goal_issues),
    )


def _load(repository: SessionRepository, session_id: str) -> SimulationSession:
    try:
        return repository.get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _record(request: Request, session_id: str, session: SimulationSession, event: str, applied: bool | None = None):
    record_simulation_event(event)
    log_simulation_event(
        get_request_id(request),
        session_id,
        event,
        session.current_step,
        session.projected_score,
        applied,
    )


@router.post("/simulations", response_model=SimulationResponse, status_code=201)
def open_simulation(
    request_body: CreateSimulationRequest,
    request: Request,
    repository: SessionRepository = Depends(get_session_repository),
):
    """
    Open a simulation session for a goal.

    The session keeps its own copy of the credit profile. starting_score
    defaults to the profile's baseline score.
    """
    goal = parse_goal(request_body.goal)
    profile = parse_credit_profile(request_body.credit_data)

    session = create_session(goal, profile, request_body.starting_score)
    session_id = repository.add(session)

    _record(request, session_id, session, "created")
    return _to_response(session_id, session)


@router.get("/simulations/{session_id}", response_model=SimulationResponse)
def get_simulation(session_id: str, repository: SessionRepository = Depends(get_session_repository)):
    """Current step, projected score, calendar, badges and snapshots"""
    return _to_response(session_id, _load(repository, session_id))


@router.post("/simulations/{session_id}/advance", response_model=SimulationResponse)
def advance_simulation(
    session_id: str,
    request: Request,
    repository: SessionRepository = Depends(get_session_repository),
):
    """Complete the next action step; no-op once the goal is completed"""
    session = _load(repository, session_id)
    with session.lock:
        applied = session.advance()
        _record(request, session_id, session, "advance", applied)
        return _to_response(session_id, session)


@router.post("/simulations/{session_id}/revert", response_model=SimulationResponse)
def revert_simulation(
    session_id: str,
    request: Request,
    repository: SessionRepository = Depends(get_session_repository),
):
    """Undo the last completed step; no-op at the first step"""
    session = _load(repository, session_id)
    with session.lock:
        applied = session.revert()
        _record(request, session_id, session, "revert", applied)
        return _to_response(session_id, session)


@router.patch("/simulations/{session_id}/adjustments", response_model=SimulationResponse)
def adjust_simulation(
    session_id: str,
    request_body: AdjustmentRequest,
    request: Request,
    repository: SessionRepository = Depends(get_session_repository),
):
    """Set one what-if value; out-of-range input is clamped, non-numeric input becomes 0"""
    session = _load(repository, session_id)
    with session.lock:
        try:
            session.set_adjustment(request_body.field, request_body.value)
        except UnknownAdjustmentFieldError as e:
            logging.warning(f"Rejected adjustment: {e}", extra={"request_id": get_request_id(request)})
            raise HTTPException(status_code=422, detail=str(e))

        _record(request, session_id, session, "adjust")
        return _to_response(session_id, session)


@router.post("/simulations/{session_id}/adjustments/reset", response_model=SimulationResponse)
def reset_simulation_adjustments(
    session_id: str,
    request: Request,
    repository: SessionRepository = Depends(get_session_repository),
):
    """Restore the what-if values captured when the session was opened"""
    session = _load(repository, session_id)
    with session.lock:
        session.reset_adjustments()
        _record(request, session_id, session, "reset")
        return _to_response(session_id, session)


@router.post("/simulations/{session_id}/snapshots", response_model=SimulationResponse, status_code=201)
def snapshot_simulation(
    session_id: str,
    request: Request,
    repository: SessionRepository = Depends(get_session_repository),
):
    """Save the current projected score and what-if values"""
    session = _load(repository, session_id)
    with session.lock:
        session.save_snapshot()
        _record(request, session_id, session, "snapshot")
        return _to_response(session_id, session)


@router.delete("/simulations/{session_id}", status_code=204)
def close_simulation(
    session_id: str,
    request: Request,
    repository: SessionRepository = Depends(get_session_repository),
):
    """Discard a session"""
    try:
        repository.delete(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    record_simulation_event("closed")
    logging.info("Simulation closed", extra={"request_id": get_request_id(request), "session_id": session_id})
    return Response(status_code=204)
