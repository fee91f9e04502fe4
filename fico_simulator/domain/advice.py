"""Rule-based advice composed from a category profile"""

from dataclasses import replace

from fico_simulator.domain.models import Advice, AdviceAction, CategoryProfile, ProjectedOutcomes
from fico_simulator.domain.scoring import MAX_SCORE
from fico_simulator.utils.format_utils import format_number, format_usd

EXPECTED_GAIN = 35
BEST_CASE_GAIN = 60
OUTCOME_TIMEFRAME = "3-12 months"

STANDARD_ACTIONS = (
    AdviceAction(
        action="Reduce revolving utilization to 30% overall",
        estimated_point_gain="+20-40",
        timeframe="1-3 months",
        confidence="high",
        rationale="Lower utilization improves Amounts Owed (30% weight).",
    ),
    AdviceAction(
        action="Avoid new hard inquiries",
        estimated_point_gain="+5-10",
        timeframe="6-12 months",
        confidence="medium",
        rationale="Reduces New Credit pressure (10% weight).",
    ),
)


def generate_advice(category_profile: CategoryProfile) -> Advice:
    """
    Compose category breakdown text, a fixed action list and projected outcomes.

    Deterministic: identical input always yields identical advice. Projections
    are baseline + 35 (expected) and baseline + 60 (best case), capped at 850.
    """
    baseline = category_profile.baseline_score
    payment = category_profile.payment_history
    owed = category_profile.amounts_owed
    length = category_profile.length_of_history
    new_credit = category_profile.new_credit
    mix = category_profile.credit_mix

    utilization = format_number(owed.overall_utilization)

    breakdown = {
        "payment_history": f"Status: {payment.status.value}. Late payments: {payment.late_payments_total}.",
        "amounts_owed": (
            f"Utilization: {utilization}% ({format_usd(owed.total_balance)} of {format_usd(owed.total_limit)}). "
            f"Status: {owed.status.value}."
        ),
        "length_of_history": (
            f"Oldest: {format_number(length.oldest_account_age_years)}y, "
            f"Avg: {format_number(length.average_account_age_years)}y. Status: {length.status.value}."
        ),
        "new_credit": f"Recent inquiries: {new_credit.recent_inquiries}. Status: {new_credit.status.value}.",
        "credit_mix": f"Types: {', '.join(mix.account_types)}. Status: {mix.status.value}.",
    }

    summary = (
        f"Baseline estimated score: {baseline}. "
        f"Key: Utilization {utilization}%, Payment history {payment.status.value}."
    )

    return Advice(
        summary=summary,
        baseline_score=baseline,
        breakdown=breakdown,
        action_plan=[replace(action) for action in STANDARD_ACTIONS],
        projected_outcomes=ProjectedOutcomes(
            expected_score=min(MAX_SCORE, baseline + EXPECTED_GAIN),
            best_case_score=min(MAX_SCORE, baseline + BEST_CASE_GAIN),
            timeframe=OUTCOME_TIMEFRAME,
        ),
    )
