"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union


class CreditDataRequest(BaseModel):
    """Request body carrying a credit_data payload; every field inside is optional"""

    credit_data: Dict[str, Any] = Field(default_factory=dict, description="Credit report extracted by the analysis service")


class ScoreResponse(BaseModel):
    """Response for POST /v1/score"""

    score: int
    score_band: str
    categories: Dict[str, Dict[str, Any]]


class AdviceActionSchema(BaseModel):
    action: str
    estimated_point_gain: str
    timeframe: str
    confidence: str
    rationale: str


class ProjectedOutcomesSchema(BaseModel):
    expected_score: int
    best_case_score: int
    timeframe: str


class AdviceResponse(BaseModel):
    """Response for POST /v1/advice"""

    summary: str
    baseline_score: int
    breakdown: Dict[str, str]
    action_plan: List[AdviceActionSchema]
    projected_outcomes: ProjectedOutcomesSchema


class AnalyzeRequest(BaseModel):
    """Request body for POST /v1/analyze"""

    content: str = Field(..., min_length=1, description="Report text, or a data URL for PDFs")
    mime_type: str = Field("text/plain", min_length=1, description="MIME type of the report")


class ActionStepSchema(BaseModel):
    step: str
    impact: int


class GoalSchema(BaseModel):
    goal_id: str
    title: str
    category: str
    timeframe_months: int
    action_plan: List[ActionStepSchema]


class AnalyzeResponse(BaseModel):
    """Response for POST /v1/analyze"""

    credit_data: Dict[str, Any]
    goals: List[GoalSchema]
    score: int
    score_band: str
    advice: AdviceResponse


class CreateSimulationRequest(BaseModel):
    """Request body for POST /v1/simulations"""

    goal: Dict[str, Any] = Field(..., description="Goal as produced by the analysis service")
    credit_data: Dict[str, Any] = Field(default_factory=dict)
    starting_score: Optional[int] = Field(None, ge=300, le=850, description="Defaults to the profile's baseline")


class AdjustmentRequest(BaseModel):
    """Request body for PATCH /v1/simulations/{session_id}/adjustments"""

    field: Literal["utilization_percent", "inquiries", "late_payments"]
    value: Union[int, float, str, None] = Field(None, description="Raw input; clamped, non-numeric becomes 0")


class AdjustmentsSchema(BaseModel):
    utilization_percent: int
    inquiries: int
    late_payments: int


class CalendarEntrySchema(BaseModel):
    month_label: str
    step_description: Optional[str] = None
    score: Optional[int] = None


class SnapshotSchema(BaseModel):
    score: int
    adjustments: AdjustmentsSchema
    timestamp: datetime


class SimulationResponse(BaseModel):
    """Current view of a simulation session"""

    session_id: str
    goal_id: str
    title: str
    current_step: int
    total_steps: int
    completed: bool
    projected_score: int
    score_history: List[int]
    badges: List[str]
    adjustments: AdjustmentsSchema
    calendar: List[CalendarEntrySchema]
    snapshots: List[SnapshotSchema]
    goal_issues: List[str]
