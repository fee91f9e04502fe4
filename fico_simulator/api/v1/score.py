"""POST /v1/score and POST /v1/advice - baseline scoring of a credit profile"""

from dataclasses import asdict
from fastapi import APIRouter

from fico_simulator.api.v1.schemas import AdviceResponse, CreditDataRequest, ScoreResponse
from fico_simulator.domain.advice import generate_advice
from fico_simulator.domain.models import CategoryProfile
from fico_simulator.domain.parsing import parse_credit_profile
from fico_simulator.domain.scoring import compute_category_profile, compute_score, score_band
from fico_simulator.infrastructure.observability.metrics import record_score

router = APIRouter()


def categories_payload(category_profile: CategoryProfile) -> dict:
    """Category breakdown keyed by category name, without the baseline score"""
    payload = asdict(category_profile)
    payload.pop("baseline_score")
    return payload


@router.post("/score", response_model=ScoreResponse)
def score_profile(request_body: CreditDataRequest):
    """
    Estimate a FICO score with per-category statuses.

    Missing or malformed numbers in credit_data count as 0; a report without
    accounts scores 300.
    """
    profile = parse_credit_profile(request_body.credit_data)
    score = compute_score(profile)
    record_score(score)

    return ScoreResponse(
        score=score,
        score_band=score_band(score),
        categories=categories_payload(compute_category_profile(profile)),
    )


@router.post("/advice", response_model=AdviceResponse)
def advise_profile(request_body: CreditDataRequest):
    """Rule-based advice and projected outcomes for a credit profile"""
    profile = parse_credit_profile(request_body.credit_data)
    advice = generate_advice(compute_category_profile(profile))
    return AdviceResponse.model_validate(asdict(advice))
