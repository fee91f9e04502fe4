"""FICO score estimation engine - core business logic for score calculation"""

from typing import Dict

from fico_simulator.domain.models import (
    AmountsOwedCategory,
    CategoryProfile,
    CategoryStatus,
    CreditMixCategory,
    CreditProfile,
    LengthOfHistoryCategory,
    NewCreditCategory,
    PaymentHistoryCategory,
)
from fico_simulator.utils.numbers import clamp, non_negative, non_negative_int, round_half_up

MIN_SCORE = 300
MAX_SCORE = 850
SCORE_RANGE = MAX_SCORE - MIN_SCORE

# Official FICO category weights (percent, sum to 100)
CATEGORY_WEIGHTS: Dict[str, int] = {
    "payment_history": 35,
    "amounts_owed": 30,
    "length_of_history": 15,
    "new_credit": 10,
    "credit_mix": 10,
}

STATUS_WEIGHTS: Dict[CategoryStatus, float] = {
    CategoryStatus.EXCELLENT: 1.0,
    CategoryStatus.GOOD: 0.75,
    CategoryStatus.FAIR: 0.5,
    CategoryStatus.POOR: 0.25,
}


def clamp_score(score: float) -> int:
    return int(clamp(score, MIN_SCORE, MAX_SCORE))


def payment_history_status(late_payments: int) -> CategoryStatus:
    if late_payments == 0:
        return CategoryStatus.EXCELLENT
    elif late_payments <= 2:
        return CategoryStatus.GOOD
    elif late_payments <= 5:
        return CategoryStatus.FAIR
    return CategoryStatus.POOR


def utilization_status(utilization_percent: float) -> CategoryStatus:
    if utilization_percent <= 10:
        return CategoryStatus.EXCELLENT
    elif utilization_percent <= 30:
        return CategoryStatus.GOOD
    elif utilization_percent <= 50:
        return CategoryStatus.FAIR
    return CategoryStatus.POOR


def history_length_status(age_years: float) -> CategoryStatus:
    if age_years > 10:
        return CategoryStatus.EXCELLENT
    elif age_years > 5:
        return CategoryStatus.GOOD
    elif age_years > 2:
        return CategoryStatus.FAIR
    return CategoryStatus.POOR


def new_credit_status(inquiries: int) -> CategoryStatus:
    if inquiries == 0:
        return CategoryStatus.EXCELLENT
    elif inquiries <= 2:
        return CategoryStatus.GOOD
    elif inquiries <= 4:
        return CategoryStatus.FAIR
    return CategoryStatus.POOR


def credit_mix_status(diversity: int) -> CategoryStatus:
    if diversity >= 3:
        return CategoryStatus.EXCELLENT
    elif diversity == 2:
        return CategoryStatus.GOOD
    elif diversity == 1:
        return CategoryStatus.FAIR
    return CategoryStatus.POOR


def _payment_history(profile: CreditProfile) -> PaymentHistoryCategory:
    # Coarse: no per-account history, so any late payment counts as one delinquency
    late_payments = non_negative_int(profile.late_payments_total)
    return PaymentHistoryCategory(
        weight_percent=CATEGORY_WEIGHTS["payment_history"],
        status=payment_history_status(late_payments),
        late_payments_total=late_payments,
        delinquencies=1 if late_payments > 0 else 0,
        collections_count=len(profile.collections),
    )


def _amounts_owed(profile: CreditProfile) -> AmountsOwedCategory:
    """
    Utilization over ALL accounts, not only revolving ones.

    Accounts without a limit still contribute their balance, so an installment
    balance with no reported limit raises utilization.
    """
    total_balance = sum(non_negative(account.balance) for account in profile.accounts)
    total_limit = sum(non_negative(account.limit) for account in profile.accounts)

    utilization = round(total_balance / total_limit * 100, 2) if total_limit > 0 else 0.0

    return AmountsOwedCategory(
        weight_percent=CATEGORY_WEIGHTS["amounts_owed"],
        status=utilization_status(utilization),
        overall_utilization=utilization,
        accounts_with_balances=sum(1 for account in profile.accounts if non_negative(account.balance) > 0),
        total_balance=total_balance,
        total_limit=total_limit,
    )


def _length_of_history(profile: CreditProfile) -> LengthOfHistoryCategory:
    age_years = non_negative(profile.average_account_age_months) / 12
    return LengthOfHistoryCategory(
        weight_percent=CATEGORY_WEIGHTS["length_of_history"],
        status=history_length_status(age_years),
        average_account_age_years=age_years,
        oldest_account_age_years=age_years,
    )


def _new_credit(profile: CreditProfile) -> NewCreditCategory:
    inquiries = non_negative_int(profile.inquiries_total)
    return NewCreditCategory(
        weight_percent=CATEGORY_WEIGHTS["new_credit"],
        status=new_credit_status(inquiries),
        recent_inquiries=inquiries,
        new_accounts=0,
    )


def _credit_mix(profile: CreditProfile) -> CreditMixCategory:
    mix = profile.credit_mix
    held = [
        ("credit_card", non_negative_int(mix.revolving_count) > 0),
        ("installment", non_negative_int(mix.installment_count) > 0),
        ("mortgage", non_negative_int(mix.mortgage_count) > 0),
    ]
    account_types = [name for name, present in held if present]
    diversity = len(account_types)
    return CreditMixCategory(
        weight_percent=CATEGORY_WEIGHTS["credit_mix"],
        status=credit_mix_status(diversity),
        account_types=account_types,
        diversity=diversity,
    )


def weighted_category_sum(categories: list) -> float:
    """Sum of weight_percent x status weight; 100 when every category is Excellent"""
    return sum(category.weight_percent * STATUS_WEIGHTS[category.status] for category in categories)


def score_from_weighted_sum(weighted_sum: float) -> int:
    """
    Map a weighted category sum (25-100) onto the 300-850 range.

    Multiplying before dividing keeps results like 712.5 exact, so the
    half-up rounding is not disturbed by float error.
    """
    return clamp_score(round_half_up(weighted_sum * SCORE_RANGE / 100 + MIN_SCORE))


def compute_category_profile(profile: CreditProfile) -> CategoryProfile:
    """
    Rate each FICO category and derive the baseline score.

    Status thresholds:
    - Payment history: 0 late -> Excellent, 1-2 Good, 3-5 Fair, 6+ Poor
    - Amounts owed: utilization <=10% Excellent, <=30% Good, <=50% Fair
    - Length of history: >10y Excellent, >5y Good, >2y Fair
    - New credit: 0 inquiries Excellent, <=2 Good, <=4 Fair
    - Credit mix: 3 account categories Excellent, 2 Good, 1 Fair
    """
    category_profile = CategoryProfile(
        payment_history=_payment_history(profile),
        amounts_owed=_amounts_owed(profile),
        length_of_history=_length_of_history(profile),
        new_credit=_new_credit(profile),
        credit_mix=_credit_mix(profile),
        baseline_score=MIN_SCORE,
    )

    if profile.accounts:
        category_profile.baseline_score = score_from_weighted_sum(weighted_category_sum(category_profile.categories))

    return category_profile


def compute_score(profile: CreditProfile) -> int:
    """
    Main entry point: estimated FICO score between 300 and 850.

    A profile without accounts has nothing to score and sits at the floor.
    """
    if not profile.accounts:
        return MIN_SCORE
    return compute_category_profile(profile).baseline_score


def score_band(score: int) -> str:
    """
    Standard FICO tiers.

    - < 580: poor
    - 580 - 669: fair
    - 670 - 739: good
    - 740 - 799: very_good
    - 800+: exceptional
    """
    if score < 580:
        return "poor"
    elif score < 670:
        return "fair"
    elif score < 740:
        return "good"
    elif score < 800:
        return "very_good"
    else:
        return "exceptional"
