"""Step-through goal simulation with undo and live what-if re-scoring"""

import logging
import re
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fico_simulator.domain.adjustments import apply_adjustments, clamp_adjustment, initial_adjustments
from fico_simulator.domain.models import (
    GOAL_CATEGORIES,
    CalendarEntry,
    CreditProfile,
    Goal,
    ManualAdjustments,
    Snapshot,
)
from fico_simulator.domain.scoring import clamp_score, compute_score

BADGE_GOAL_COMPLETED = "Goal Completed"
BADGE_GREAT_PROGRESS = "Great Progress"

# A single step worth more than this many points earns "Great Progress"
GREAT_PROGRESS_THRESHOLD = 8

_TITLE_PATTERN = re.compile(r"^Increase Score by (\d+) Points?$")


def month_label(index: int) -> str:
    return f"Month {index + 1}"


def build_calendar(goal: Goal) -> List[CalendarEntry]:
    """One empty slot per month, never fewer slots than action steps"""
    length = max(goal.timeframe_months, len(goal.action_plan))
    return [CalendarEntry(month_label=month_label(i)) for i in range(length)]


def validate_goal(goal: Goal) -> List[str]:
    """
    Check a goal against the contract the analysis service is asked to honor.

    The title must read "Increase Score by N Points" with N equal to the sum
    of the action-plan impacts. Issues are reported, never raised.
    """
    issues = []

    match = _TITLE_PATTERN.match(goal.title.strip())
    if match is None:
        issues.append(f"Title does not follow 'Increase Score by N Points': {goal.title!r}")
    elif int(match.group(1)) != goal.total_impact:
        issues.append(
            f"Title promises {match.group(1)} points but action plan impacts sum to {goal.total_impact}"
        )

    if goal.category not in GOAL_CATEGORIES:
        issues.append(f"Unknown goal category: {goal.category!r}")
    if goal.timeframe_months <= 0:
        issues.append("Timeframe must be a positive number of months")
    if not goal.action_plan:
        issues.append("Action plan is empty")

    return issues


@dataclass
class SimulationSession:
    """
    State of one open goal simulation.

    States are AtStep(i) for 0 <= i <= N (N = number of action steps); i == N
    is terminal. advance/revert outside the valid range are no-ops and return
    False. The projected score is derived on read, never stored.

    Every mutation holds the session's own re-entrant lock, so concurrent
    requests against one session apply one after the other. Readers that need
    a consistent view hold `lock` while they read.
    """

    goal: Goal
    profile: CreditProfile
    starting_score: int
    adjustments: ManualAdjustments
    initial_adjustments: ManualAdjustments
    calendar: List[CalendarEntry]
    current_step: int = 0
    score_history: List[int] = field(default_factory=list)
    badges: List[str] = field(default_factory=list)
    snapshots: List[Snapshot] = field(default_factory=list)
    goal_issues: List[str] = field(default_factory=list)
    lock: Any = field(default_factory=threading.RLock, init=False, repr=False, compare=False)

    def __getstate__(self) -> Dict[str, Any]:
        # Locks cannot be copied; a copied session gets a fresh one
        state = self.__dict__.copy()
        state.pop("lock", None)
        return state

    def __setstate__(self, state: Dict[str, Any]) -> None:
        self.__dict__.update(state)
        self.lock = threading.RLock()

    @property
    def total_steps(self) -> int:
        return len(self.goal.action_plan)

    @property
    def is_completed(self) -> bool:
        return self.current_step >= self.total_steps

    @property
    def last_score(self) -> int:
        return self.score_history[-1]

    @property
    def completed_impact(self) -> int:
        return sum(step.impact for step in self.goal.action_plan[: self.current_step])

    @property
    def projected_score(self) -> int:
        """
        Live score: re-score the original profile with the current adjustments,
        then add the impacts of completed steps only.
        """
        with self.lock:
            base_score = compute_score(apply_adjustments(self.profile, self.adjustments))
            return clamp_score(base_score + self.completed_impact)

    def _award(self, badge: str) -> None:
        if badge not in self.badges:
            self.badges.append(badge)

    def _revoke(self, badge: str) -> None:
        if badge in self.badges:
            self.badges.remove(badge)

    def advance(self) -> bool:
        """Complete the next action step"""
        with self.lock:
            return self._advance()

    def _advance(self) -> bool:
        if self.is_completed:
            return False

        index = self.current_step
        step = self.goal.action_plan[index]
        new_score = self.last_score + step.impact
        self.score_history.append(new_score)

        if index < len(self.calendar):
            self.calendar[index] = CalendarEntry(
                month_label=month_label(index),
                step_description=step.description,
                score=new_score,
            )

        if index == self.total_steps - 1:
            self._award(BADGE_GOAL_COMPLETED)
        if step.impact > GREAT_PROGRESS_THRESHOLD:
            self._award(BADGE_GREAT_PROGRESS)

        self.current_step = index + 1
        return True

    def revert(self) -> bool:
        """Undo the most recently completed step"""
        with self.lock:
            return self._revert()

    def _revert(self) -> bool:
        if self.current_step == 0:
            return False

        index = self.current_step - 1
        self.score_history.pop()

        if index < len(self.calendar):
            self.calendar[index] = CalendarEntry(month_label=month_label(index))

        self._revoke(BADGE_GOAL_COMPLETED)
        still_earned = any(
            step.impact > GREAT_PROGRESS_THRESHOLD for step in self.goal.action_plan[:index]
        )
        if not still_earned:
            self._revoke(BADGE_GREAT_PROGRESS)

        self.current_step = index
        return True

    def set_adjustment(self, field_name: str, raw_value: Any) -> int:
        """Set one what-if field from raw UI input; returns the clamped value"""
        value = clamp_adjustment(field_name, raw_value)
        with self.lock:
            setattr(self.adjustments, field_name, value)
        return value

    def set_adjustments(self, partial: Dict[str, Any]) -> None:
        with self.lock:
            for field_name, raw_value in partial.items():
                self.set_adjustment(field_name, raw_value)

    def reset_adjustments(self) -> None:
        with self.lock:
            self.adjustments = self.initial_adjustments.copy()

    def save_snapshot(self) -> Snapshot:
        """Append the current what-if state; earlier snapshots are never touched"""
        with self.lock:
            snapshot = Snapshot(
                score=self.projected_score,
                adjustments=self.adjustments.copy(),
                timestamp=datetime.now(timezone.utc),
            )
            self.snapshots.append(snapshot)
        return snapshot


def create_session(
    goal: Goal,
    baseline_profile: CreditProfile,
    starting_score: Optional[int] = None,
) -> SimulationSession:
    """
    Open a simulation for goal on top of baseline_profile.

    The session keeps its own copy of the profile, so concurrent sessions never
    share mutable state. starting_score defaults to the profile's baseline.
    """
    profile = baseline_profile.copy()
    if starting_score is None:
        starting_score = compute_score(profile)

    issues = validate_goal(goal)
    for issue in issues:
        logging.warning("Goal validation issue", extra={"goal_id": goal.goal_id, "issue": issue})

    adjustments = initial_adjustments(profile)

    return SimulationSession(
        goal=goal,
        profile=profile,
        starting_score=starting_score,
        adjustments=adjustments,
        initial_adjustments=adjustments.copy(),
        calendar=build_calendar(goal),
        score_history=[starting_score],
        goal_issues=issues,
    )
