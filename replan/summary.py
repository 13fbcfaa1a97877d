# replan/summary.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .model import Block, ReplanAction, ReplanResult

ON_TRACK_BELOW_MIN = 10
SLIPPING_BELOW_MIN = 30


@dataclass(frozen=True)
class DayStats:
    planned: int
    done: int
    planned_min: int
    done_min: int


@dataclass(frozen=True)
class ReplanSummary:
    planned: int
    completed: int
    moved: int
    shrunk: int
    skipped: int
    unchanged: int
    protected: int
    minutes_behind: int


def day_stats(blocks: Sequence[Block]) -> DayStats:
    done = [b for b in blocks if b.completed]
    return DayStats(
        planned=len(blocks),
        done=len(done),
        planned_min=sum(b.duration for b in blocks),
        done_min=sum(b.duration for b in done),
    )


def summarize_result(result: ReplanResult, blocks: Sequence[Block]) -> ReplanSummary:
    """Tally a replan's actions against the day it was computed from."""
    counts = {a: 0 for a in ReplanAction}
    for rec in result.actions:
        counts[rec.action] += 1
    return ReplanSummary(
        planned=len(blocks),
        completed=sum(1 for b in blocks if b.completed),
        moved=counts[ReplanAction.MOVED],
        shrunk=counts[ReplanAction.SHRUNK],
        skipped=counts[ReplanAction.SKIPPED],
        unchanged=counts[ReplanAction.UNCHANGED],
        protected=counts[ReplanAction.PROTECTED],
        minutes_behind=int(result.minutes_behind),
    )


def adherence(minutes_behind: int) -> str:
    if minutes_behind < ON_TRACK_BELOW_MIN:
        return "on track"
    if minutes_behind < SLIPPING_BELOW_MIN:
        return "slipping"
    return "off track"


def format_minutes_behind(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes} min"
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"


__all__ = [
    "DayStats",
    "ReplanSummary",
    "day_stats",
    "summarize_result",
    "adherence",
    "format_minutes_behind",
]
