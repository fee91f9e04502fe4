"""Domain models - pure Python dataclasses representing credit reports and simulations"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

ACCOUNT_TYPES = ("revolving", "installment", "mortgage", "other")

GOAL_CATEGORIES = (
    "Payment History",
    "Amounts Owed",
    "Length of Credit History",
    "Credit Mix",
    "New Credit",
    "Debt Reduction",
    "Collection Resolution",
    "Credit Building",
)


class CategoryStatus(str, Enum):
    """Qualitative rating shared by every FICO category"""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


@dataclass
class Account:
    """Single tradeline extracted from a credit report"""

    type: str  # one of ACCOUNT_TYPES
    balance: float = 0.0
    limit: float = 0.0  # 0 means no limit reported
    status: str = ""
    payment_history_summary: str = ""

    @property
    def is_revolving(self) -> bool:
        return self.type == "revolving"


@dataclass
class Collection:
    """Collection item reported against the consumer"""

    type: str = ""
    amount: float = 0.0
    status: str = ""


@dataclass
class CreditMix:
    """Counts of account categories held"""

    revolving_count: int = 0
    installment_count: int = 0
    mortgage_count: int = 0


@dataclass
class CreditProfile:
    """Normalized credit report - aggregate root for scoring"""

    accounts: List[Account] = field(default_factory=list)
    collections: List[Collection] = field(default_factory=list)
    late_payments_total: int = 0
    inquiries_total: int = 0
    average_account_age_months: float = 0.0
    credit_mix: CreditMix = field(default_factory=CreditMix)

    def copy(self) -> "CreditProfile":
        """Deep, independent clone; mutating the copy never touches the original"""
        return replace(
            self,
            accounts=[replace(account) for account in self.accounts],
            collections=[replace(collection) for collection in self.collections],
            credit_mix=replace(self.credit_mix),
        )


@dataclass
class ManualAdjustments:
    """User-controlled what-if overrides"""

    utilization_percent: int = 0  # 0-100
    inquiries: int = 0  # 0-20
    late_payments: int = 0  # 0-20

    def copy(self) -> "ManualAdjustments":
        return replace(self)


@dataclass
class ActionStep:
    """One recommended action and its estimated point impact"""

    description: str
    impact: int


@dataclass
class Goal:
    """Personalized score-improvement goal with an ordered action plan"""

    goal_id: str
    title: str
    category: str
    timeframe_months: int
    action_plan: List[ActionStep] = field(default_factory=list)

    @property
    def total_impact(self) -> int:
        return sum(step.impact for step in self.action_plan)


@dataclass
class PaymentHistoryCategory:
    status: CategoryStatus
    late_payments_total: int
    delinquencies: int
    collections_count: int
    weight_percent: int


@dataclass
class AmountsOwedCategory:
    status: CategoryStatus
    overall_utilization: float  # percent, 2 decimals
    accounts_with_balances: int
    total_balance: float
    total_limit: float
    weight_percent: int


@dataclass
class LengthOfHistoryCategory:
    status: CategoryStatus
    average_account_age_years: float
    oldest_account_age_years: float  # approximated by the average
    weight_percent: int


@dataclass
class NewCreditCategory:
    status: CategoryStatus
    recent_inquiries: int
    new_accounts: int
    weight_percent: int


@dataclass
class CreditMixCategory:
    status: CategoryStatus
    account_types: List[str]
    diversity: int
    weight_percent: int


@dataclass
class CategoryProfile:
    """Per-category breakdown plus the baseline score it implies"""

    payment_history: PaymentHistoryCategory
    amounts_owed: AmountsOwedCategory
    length_of_history: LengthOfHistoryCategory
    new_credit: NewCreditCategory
    credit_mix: CreditMixCategory
    baseline_score: int

    @property
    def categories(self) -> list:
        return [
            self.payment_history,
            self.amounts_owed,
            self.length_of_history,
            self.new_credit,
            self.credit_mix,
        ]


@dataclass
class AdviceAction:
    action: str
    estimated_point_gain: str
    timeframe: str
    confidence: str  # "low" | "medium" | "high"
    rationale: str


@dataclass
class ProjectedOutcomes:
    expected_score: int
    best_case_score: int
    timeframe: str


@dataclass
class Advice:
    """Human-readable guidance derived from a CategoryProfile"""

    summary: str
    baseline_score: int
    breakdown: Dict[str, str]
    action_plan: List[AdviceAction]
    projected_outcomes: ProjectedOutcomes


@dataclass
class CalendarEntry:
    """One month slot of a simulated goal timeline"""

    month_label: str
    step_description: Optional[str] = None
    score: Optional[int] = None


@dataclass
class Snapshot:
    """Saved what-if state"""

    score: int
    adjustments: ManualAdjustments
    timestamp: datetime
