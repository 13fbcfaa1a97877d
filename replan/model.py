# replan/model.py
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from replan.util.clock import minutes_to_hhmm


class Category(str, Enum):
    DEEP = "Deep"
    ADMIN = "Admin"
    HEALTH = "Health"
    LEARNING = "Learning"
    SOCIAL = "Social"
    ERRAND = "Errand"
    OTHER = "Other"


class ReplanAction(str, Enum):
    MOVED = "moved"
    SHRUNK = "shrunk"
    SKIPPED = "skipped"
    UNCHANGED = "unchanged"
    PROTECTED = "protected"


@dataclass(frozen=True)
class Block:
    """A planned activity. `start_min` is minutes since midnight."""

    id: str
    title: str
    category: Category
    start_min: int
    duration: int
    fixed: bool = False
    completed: bool = False
    priority: int = 2
    fallback_minutes: Optional[int] = None
    protected: bool = False

    @property
    def end_min(self) -> int:
        return self.start_min + self.duration

    @property
    def start_time(self) -> str:
        return minutes_to_hhmm(self.start_min)

    def moved_to(self, start_min: int, duration: Optional[int] = None) -> "Block":
        if duration is None:
            return replace(self, start_min=int(start_min))
        return replace(self, start_min=int(start_min), duration=int(duration))


@dataclass(frozen=True)
class TimeSlot:
    start_min: int
    end_min: int

    @property
    def length(self) -> int:
        return self.end_min - self.start_min


@dataclass(frozen=True)
class ActionRecord:
    block_id: str
    action: ReplanAction
    original_start_min: Optional[int] = None
    new_start_min: Optional[int] = None
    original_duration: Optional[int] = None
    new_duration: Optional[int] = None

    @property
    def original_start_time(self) -> Optional[str]:
        if self.original_start_min is None:
            return None
        return minutes_to_hhmm(self.original_start_min)

    @property
    def new_start_time(self) -> Optional[str]:
        if self.new_start_min is None:
            return None
        return minutes_to_hhmm(self.new_start_min)


@dataclass(frozen=True)
class ReplanResult:
    blocks: Tuple[Block, ...]
    actions: Tuple[ActionRecord, ...]
    minutes_behind: int = 0

    def action_for(self, block_id: str) -> Optional[ActionRecord]:
        for a in self.actions:
            if a.block_id == block_id:
                return a
        return None

    def block_by_id(self, block_id: str) -> Optional[Block]:
        for b in self.blocks:
            if b.id == block_id:
                return b
        return None


__all__ = [
    "Category",
    "ReplanAction",
    "Block",
    "TimeSlot",
    "ActionRecord",
    "ReplanResult",
]
