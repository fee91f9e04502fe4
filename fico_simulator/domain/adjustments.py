"""What-if adjustments applied to a credit profile before re-scoring"""

from typing import Any, Dict, Tuple

from fico_simulator.domain.exceptions import UnknownAdjustmentFieldError
from fico_simulator.domain.models import CreditProfile, ManualAdjustments
from fico_simulator.utils.numbers import clamp, non_negative, parse_int, round_half_up

# Inclusive (min, max) per adjustable field
ADJUSTMENT_BOUNDS: Dict[str, Tuple[int, int]] = {
    "utilization_percent": (0, 100),
    "inquiries": (0, 20),
    "late_payments": (0, 20),
}


def clamp_adjustment(field_name: str, raw_value: Any) -> int:
    """
    Coerce a raw UI value (string or number) and clamp it to the field's range.

    Raises:
        UnknownAdjustmentFieldError: field_name is not an adjustable field
    """
    if field_name not in ADJUSTMENT_BOUNDS:
        raise UnknownAdjustmentFieldError(field_name)

    lower, upper = ADJUSTMENT_BOUNDS[field_name]
    return int(clamp(parse_int(raw_value), lower, upper))


def revolving_totals(profile: CreditProfile) -> Tuple[float, float]:
    """(total balance, total limit) across revolving accounts"""
    revolving = [account for account in profile.accounts if account.is_revolving]
    total_balance = sum(non_negative(account.balance) for account in revolving)
    total_limit = sum(non_negative(account.limit) for account in revolving)
    return total_balance, total_limit


def initial_adjustments(profile: CreditProfile) -> ManualAdjustments:
    """
    Starting slider values for a simulation, read from the profile itself.

    Utilization is revolving-only here. With no revolving limit, any revolving
    balance reads as fully utilized.
    """
    total_balance, total_limit = revolving_totals(profile)
    if total_limit > 0:
        utilization = round_half_up(total_balance / total_limit * 100)
    else:
        utilization = 100 if total_balance > 0 else 0

    return ManualAdjustments(
        utilization_percent=clamp_adjustment("utilization_percent", utilization),
        inquiries=clamp_adjustment("inquiries", profile.inquiries_total),
        late_payments=clamp_adjustment("late_payments", profile.late_payments_total),
    )


def apply_adjustments(profile: CreditProfile, adjustments: ManualAdjustments) -> CreditProfile:
    """
    Return an independent copy of profile with the what-if values applied.

    Revolving balances are rescaled so that their total equals
    revolving_limit x utilization_percent / 100, keeping each account's share
    of the original balance (even split when the original balance was zero).
    Non-revolving accounts are never touched. Without any revolving limit the
    utilization setting has no effect.
    """
    adjusted = profile.copy()
    adjusted.inquiries_total = clamp_adjustment("inquiries", adjustments.inquiries)
    adjusted.late_payments_total = clamp_adjustment("late_payments", adjustments.late_payments)

    revolving = [account for account in adjusted.accounts if account.is_revolving]
    original_total_balance, total_limit = revolving_totals(adjusted)

    if total_limit > 0:
        utilization = clamp_adjustment("utilization_percent", adjustments.utilization_percent)
        new_total_balance = total_limit * utilization / 100

        for account in revolving:
            if original_total_balance > 0:
                share = non_negative(account.balance) / original_total_balance
                account.balance = new_total_balance * share
            else:
                account.balance = new_total_balance / len(revolving)

    return adjusted
