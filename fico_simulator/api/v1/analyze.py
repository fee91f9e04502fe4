"""POST /v1/analyze - extract credit data from a report and score it"""

import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException, Request

from fico_simulator.api.v1.schemas import AdviceResponse, AnalyzeRequest, AnalyzeResponse, GoalSchema, ActionStepSchema
from fico_simulator.api.dependencies import get_analysis_client, get_request_id
from fico_simulator.infrastructure.clients.analysis import AnalysisClient
from fico_simulator.domain.advice import generate_advice
from fico_simulator.domain.scoring import compute_category_profile, compute_score, score_band
from fico_simulator.domain.parsing import credit_profile_payload
from fico_simulator.domain.exceptions import AnalysisServiceError
from fico_simulator.infrastructure.observability.metrics import record_score, analysis_failures_counter
from fico_simulator.infrastructure.observability.logging import log_analysis

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_report(
    request_body: AnalyzeRequest,
    request: Request,
    analysis_client: AnalysisClient = Depends(get_analysis_client),
):
    """
    Analyze an uploaded credit report.

    Flow:
    1. Send report to the document analysis service
    2. Score the extracted credit profile
    3. Build category advice from the baseline
    4. Return normalized credit data, goals, score and advice
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        # 1. Extract credit data and goals
        result = await analysis_client.analyze_document(request_body.content, request_body.mime_type)

    except AnalysisServiceError as e:
        analysis_failures_counter.inc()
        logging.error(f"Analysis service error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Analysis service unavailable")

    # 2. Score
    score = compute_score(result.profile)
    band = score_band(score)

    # 3. Advice
    advice = generate_advice(compute_category_profile(result.profile))

    duration_ms = (time.time() - start_time) * 1000
    record_score(score)
    log_analysis(request_id, score, band, len(result.goals), duration_ms)

    return AnalyzeResponse(
        credit_data=credit_profile_payload(result.profile),
        goals=[
            GoalSchema(
                goal_id=goal.goal_id,
                title=goal.title,
                category=goal.category,
                timeframe_months=goal.timeframe_months,
                action_plan=[ActionStepSchema(step=step.description, impact=step.impact) for step in goal.action_plan],
            )
            for goal in result.goals
        ],
        score=score,
        score_band=band,
        advice=AdviceResponse.model_validate(asdict(advice)),
    )
