"""Conversion of analysis-service payloads into domain models"""

import logging
from typing import Any, Dict, List, Mapping, Tuple

from fico_simulator.domain.models import (
    ACCOUNT_TYPES,
    Account,
    ActionStep,
    Collection,
    CreditMix,
    CreditProfile,
    Goal,
)
from fico_simulator.utils.numbers import non_negative, non_negative_int, round_half_up, safe_number


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def normalize_account_type(raw: Any) -> str:
    """Case-insensitive account type; anything unrecognized becomes "other" """
    account_type = _as_text(raw).strip().lower()
    return account_type if account_type in ACCOUNT_TYPES else "other"


def parse_account(data: Mapping[str, Any]) -> Account:
    return Account(
        type=normalize_account_type(data.get("type")),
        balance=non_negative(data.get("balance")),
        limit=non_negative(data.get("limit")),
        status=_as_text(data.get("status")),
        payment_history_summary=_as_text(data.get("payment_history")),
    )


def parse_collection(data: Mapping[str, Any]) -> Collection:
    return Collection(
        type=_as_text(data.get("type")),
        amount=non_negative(data.get("amount")),
        status=_as_text(data.get("status")),
    )


def parse_credit_profile(data: Any) -> CreditProfile:
    """
    Build a CreditProfile from a credit_data payload.

    Every field is optional. Missing, NaN or negative numbers become 0 and
    malformed list entries are skipped, so scoring never sees bad values.
    """
    payload = _as_mapping(data)

    accounts = []
    for raw_account in _as_list(payload.get("accounts")):
        if not isinstance(raw_account, Mapping):
            logging.warning("Skipping malformed account entry", extra={"entry_type": type(raw_account).__name__})
            continue
        accounts.append(parse_account(raw_account))

    collections = []
    for raw_collection in _as_list(payload.get("collections")):
        if not isinstance(raw_collection, Mapping):
            logging.warning("Skipping malformed collection entry", extra={"entry_type": type(raw_collection).__name__})
            continue
        collections.append(parse_collection(raw_collection))

    mix = _as_mapping(payload.get("credit_mix"))

    return CreditProfile(
        accounts=accounts,
        collections=collections,
        late_payments_total=non_negative_int(payload.get("late_payments")),
        inquiries_total=non_negative_int(payload.get("inquiries")),
        average_account_age_months=non_negative(payload.get("average_account_age_months")),
        credit_mix=CreditMix(
            revolving_count=non_negative_int(mix.get("revolving")),
            installment_count=non_negative_int(mix.get("installment")),
            mortgage_count=non_negative_int(mix.get("mortgage")),
        ),
    )


def parse_goal(data: Any) -> Goal:
    """Build a Goal from a personalized_goals entry; impacts are rounded to whole points"""
    payload = _as_mapping(data)

    action_plan = [
        ActionStep(
            description=_as_text(step.get("step")),
            impact=round_half_up(safe_number(step.get("impact"))),
        )
        for step in _as_list(payload.get("action_plan"))
        if isinstance(step, Mapping)
    ]

    return Goal(
        goal_id=_as_text(payload.get("goal_id")),
        title=_as_text(payload.get("title")),
        category=_as_text(payload.get("category")),
        timeframe_months=non_negative_int(payload.get("timeframe_months")),
        action_plan=action_plan,
    )


def parse_analysis_response(data: Any) -> Tuple[CreditProfile, List[Goal]]:
    """Split an analysis response into the credit profile and its goals"""
    payload = _as_mapping(data)
    profile = parse_credit_profile(payload.get("credit_data"))
    goals = [parse_goal(goal) for goal in _as_list(payload.get("personalized_goals"))]
    return profile, goals


def credit_profile_payload(profile: CreditProfile) -> Dict[str, Any]:
    """Inverse of parse_credit_profile: the credit_data shape the analysis service emits"""
    return {
        "accounts": [
            {
                "type": account.type,
                "balance": account.balance,
                "limit": account.limit,
                "status": account.status,
                "payment_history": account.payment_history_summary,
            }
            for account in profile.accounts
        ],
        "collections": [
            {"type": collection.type, "amount": collection.amount, "status": collection.status}
            for collection in profile.collections
        ],
        "late_payments": profile.late_payments_total,
        "inquiries": profile.inquiries_total,
        "average_account_age_months": profile.average_account_age_months,
        "credit_mix": {
            "revolving": profile.credit_mix.revolving_count,
            "installment": profile.credit_mix.installment_count,
            "mortgage": profile.credit_mix.mortgage_count,
        },
    }
