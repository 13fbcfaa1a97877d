"""Weekly time-budget arithmetic.

Used by callers to judge whether a goal plan fits the week before any daily
blocks exist: available hours are what remains of 168 after sleep, work,
commute and a fixed life-admin buffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

HOURS_PER_WEEK = 168
LIFE_ADMIN_BUFFER_HOURS = 10
GREEN_THRESHOLD_PCT = 80
AGGRESSIVE_CAP_HOURS = 24
AGGRESSIVE_YELLOW_BELOW_HOURS = 20

FEASIBILITY_MESSAGES = {
    "green": "Plan fits comfortably within your time budget.",
    "yellow": "Tight execution required. Consider reducing scope.",
    "red": "Plan exceeds available time. Must reduce scope or extend timeline.",
}


@dataclass(frozen=True)
class Constraints:
    sleep_floor: float = 7
    work_hours_per_day: float = 8
    work_days_per_week: int = 5
    commute_minutes_per_day: float = 30
    weekly_goal_hours: float = 10
    monthly_budget: float = 500


@dataclass(frozen=True)
class FeasibilityResult:
    status: str  # "green" | "yellow" | "red"
    available_hours: float
    message: str


@dataclass(frozen=True)
class PlanVariant:
    level: str  # "mvg" | "standard" | "aggressive"
    hours: int
    description: str
    feasibility: str


def _round_half_up(x: float) -> int:
    return int(x + 0.5) if x >= 0 else -int(-x + 0.5)


def calculate_available_hours(c: Constraints) -> float:
    sleep = c.sleep_floor * 7
    work = c.work_hours_per_day * c.work_days_per_week
    commute = (c.commute_minutes_per_day * c.work_days_per_week) / 60
    available = HOURS_PER_WEEK - sleep - work - commute - LIFE_ADMIN_BUFFER_HOURS
    return max(0, available)


def calculate_feasibility(plan_hours: float, c: Constraints) -> FeasibilityResult:
    available = calculate_available_hours(c)
    if plan_hours <= available * GREEN_THRESHOLD_PCT / 100:
        status = "green"
    elif plan_hours <= available:
        status = "yellow"
    else:
        status = "red"
    return FeasibilityResult(status=status, available_hours=available, message=FEASIBILITY_MESSAGES[status])


def generate_plan_variants(c: Constraints) -> List[PlanVariant]:
    available = calculate_available_hours(c)
    return [
        PlanVariant(
            level="mvg",
            hours=_round_half_up(available * 0.3),
            description="Core fundamentals only",
            feasibility="green",
        ),
        PlanVariant(
            level="standard",
            hours=_round_half_up(available * 0.6),
            description="Balanced approach with key features",
            feasibility="green",
        ),
        PlanVariant(
            level="aggressive",
            hours=min(AGGRESSIVE_CAP_HOURS, _round_half_up(available * 0.9)),
            description="Full scope, tight execution",
            feasibility="yellow" if available < AGGRESSIVE_YELLOW_BELOW_HOURS else "green",
        ),
    ]


__all__ = [
    "Constraints",
    "FeasibilityResult",
    "PlanVariant",
    "calculate_available_hours",
    "calculate_feasibility",
    "generate_plan_variants",
]
