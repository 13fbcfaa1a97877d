# replan/engine.py
from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .config import DEFAULT_CONFIG, ReplanConfig
from .model import ActionRecord, Block, ReplanAction, ReplanResult
from .slots import build_free_slots, claim, first_fit, union_intervals
from .util.clock import Clock, clock_minutes, pct_of, round_up_to_quantum

logger = logging.getLogger(__name__)


class ReplanMode(str, Enum):
    KEEP_PRIORITIES = "keep-priorities"
    SALVAGE_STREAK = "salvage-streak"
    HARD_RESET = "hard-reset"

    @classmethod
    def parse(cls, name: str) -> "ReplanMode":
        key = str(name).strip().lower().replace("_", "-")
        for mode in cls:
            if mode.value == key:
                return mode
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown replan mode: {name!r} (expected one of: {choices})")


def _rounded_now(now: Optional[Clock], config: ReplanConfig) -> int:
    return round_up_to_quantum(clock_minutes(now, tz=config.tz), config.quantum_min)


def _placement_order(b: Block) -> Tuple[int, int, int]:
    # Most important first, then earliest intended start, then shortest.
    return (int(b.priority), b.start_min, b.duration)


def _sorted_by_start(blocks: List[Block]) -> Tuple[Block, ...]:
    return tuple(sorted(blocks, key=lambda b: b.start_min))


def generate_replan(
    blocks: Sequence[Block],
    now: Optional[Clock] = None,
    *,
    config: ReplanConfig = DEFAULT_CONFIG,
) -> ReplanResult:
    """Re-seat flexible blocks around fixed ones for the rest of the day.

    Fixed blocks are kept verbatim. Incomplete flexible blocks are packed
    chronologically first-fit into the free time after `now` (rounded up to
    the quantum), in priority order. Protected blocks that do not fit at full
    length retry at their fallback duration; anything still unplaced is
    skipped and left out of the result.
    """
    now_min = _rounded_now(now, config)

    fixed = [b for b in blocks if b.fixed]
    flexible = [b for b in blocks if not b.fixed and not b.completed]

    minutes_behind = 0
    placed: List[Block] = []
    actions: List[ActionRecord] = []

    for b in fixed:
        if b.start_min < now_min:
            minutes_behind += now_min - b.start_min
        placed.append(b)

    free = build_free_slots(
        ((b.start_min, b.end_min) for b in fixed),
        start_min=now_min,
        end_min=config.day_end_min,
        buffer_min=config.buffer_min,
    )

    for b in sorted(flexible, key=_placement_order):
        if b.start_min < now_min:
            minutes_behind += now_min - b.start_min

        idx = first_fit(free, b.duration)
        if idx is not None:
            start, free = claim(free, idx, b.duration, buffer_min=config.buffer_min)
            placed.append(b.moved_to(start))
            action = ReplanAction.UNCHANGED if start == b.start_min else ReplanAction.MOVED
            actions.append(
                ActionRecord(
                    block_id=b.id,
                    action=action,
                    original_start_min=b.start_min,
                    new_start_min=start,
                )
            )
            logger.debug("block %s %s to %d", b.id, action.value, start)
            continue

        if b.protected:
            fallback = b.fallback_minutes or pct_of(b.duration, config.protected_fallback_pct)
            idx = first_fit(free, fallback)
            if idx is not None:
                start, free = claim(free, idx, fallback, buffer_min=config.buffer_min)
                placed.append(b.moved_to(start, fallback))
                actions.append(
                    ActionRecord(
                        block_id=b.id,
                        action=ReplanAction.SHRUNK,
                        original_start_min=b.start_min,
                        new_start_min=start,
                        original_duration=b.duration,
                        new_duration=fallback,
                    )
                )
                logger.debug("block %s shrunk %d -> %d at %d", b.id, b.duration, fallback, start)
                continue

        actions.append(
            ActionRecord(block_id=b.id, action=ReplanAction.SKIPPED, original_start_min=b.start_min)
        )
        logger.debug("block %s skipped (no slot for %d min)", b.id, b.duration)

    return ReplanResult(
        blocks=_sorted_by_start(placed),
        actions=tuple(actions),
        minutes_behind=minutes_behind,
    )


def generate_salvage_streak_replan(
    blocks: Sequence[Block],
    now: Optional[Clock] = None,
    *,
    config: ReplanConfig = DEFAULT_CONFIG,
) -> ReplanResult:
    """Default replan, with skips of unprotected blocks relabeled as shrinks.

    The relabeled blocks are not re-placed: the block list is the default
    result's, and no slot is checked for the shrunk duration.
    """
    base = generate_replan(blocks, now, config=config)

    by_id: Dict[str, Block] = {}
    for b in blocks:
        by_id.setdefault(b.id, b)

    actions: List[ActionRecord] = []
    for a in base.actions:
        b = by_id.get(a.block_id)
        if a.action is ReplanAction.SKIPPED and b is not None and not b.protected:
            fallback = b.fallback_minutes or pct_of(b.duration, config.salvage_fallback_pct)
            a = replace(
                a,
                action=ReplanAction.SHRUNK,
                original_duration=b.duration,
                new_duration=fallback,
            )
        actions.append(a)

    return replace(base, actions=tuple(actions))


def _clear_start(start: int, duration: int, occupied: List[Tuple[int, int]], buffer_min: int) -> int:
    for s, e in occupied:
        if start < e and start + duration > s:
            start = e + buffer_min
    return start


def _latest_clear_start(duration: int, occupied: List[Tuple[int, int]], config: ReplanConfig) -> Optional[int]:
    """Last start where `duration` still ends by the day end, or None."""
    slots = build_free_slots(occupied, start_min=0, end_min=config.day_end_min, buffer_min=config.buffer_min)
    for sl in reversed(slots):
        if sl.length >= duration:
            return sl.end_min - duration
    return None


def generate_hard_reset_replan(
    blocks: Sequence[Block],
    now: Optional[Clock] = None,
    *,
    config: ReplanConfig = DEFAULT_CONFIG,
) -> ReplanResult:
    """Clear the day down to fixed, protected and completed blocks.

    Protected blocks still outstanding are shrunk to their fallback and
    restacked from `now + hard_reset_offset_min`. A block that would run past
    the day end takes the latest free gap that still holds it, and is skipped
    when there is none. Everything else that is flexible and incomplete is
    skipped. Lateness is not reported.
    """
    now_min = _rounded_now(now, config)

    taken = [(b.start_min, b.end_min) for b in blocks if b.fixed or b.completed]
    cursor = now_min + config.hard_reset_offset_min

    kept: List[Block] = []
    actions: List[ActionRecord] = []
    for b in blocks:
        if b.fixed or b.completed:
            kept.append(b)
            continue
        if not b.protected:
            actions.append(
                ActionRecord(block_id=b.id, action=ReplanAction.SKIPPED, original_start_min=b.start_min)
            )
            continue

        dur = b.fallback_minutes or pct_of(b.duration, config.hard_reset_fallback_pct)
        occupied = union_intervals(taken)
        start = _clear_start(cursor, dur, occupied, config.buffer_min)
        placed = start if start + dur <= config.day_end_min else _latest_clear_start(dur, occupied, config)
        if placed is None:
            logger.debug("no room left today for protected block %s", b.id)
            actions.append(
                ActionRecord(block_id=b.id, action=ReplanAction.SKIPPED, original_start_min=b.start_min)
            )
            continue

        kept.append(b.moved_to(placed, dur))
        taken.append((placed, placed + dur))
        actions.append(
            ActionRecord(
                block_id=b.id,
                action=ReplanAction.PROTECTED,
                original_start_min=b.start_min,
                new_start_min=placed,
                original_duration=b.duration,
                new_duration=dur,
            )
        )
        cursor = max(cursor, placed + dur + config.buffer_min)

    logger.debug("hard reset kept %d of %d blocks", len(kept), len(blocks))
    return ReplanResult(blocks=_sorted_by_start(kept), actions=tuple(actions), minutes_behind=0)


_MODES: Dict[ReplanMode, Callable[..., ReplanResult]] = {
    ReplanMode.KEEP_PRIORITIES: generate_replan,
    ReplanMode.SALVAGE_STREAK: generate_salvage_streak_replan,
    ReplanMode.HARD_RESET: generate_hard_reset_replan,
}


def run_replan(
    blocks: Sequence[Block],
    mode: ReplanMode | str = ReplanMode.KEEP_PRIORITIES,
    now: Optional[Clock] = None,
    *,
    config: ReplanConfig = DEFAULT_CONFIG,
) -> ReplanResult:
    m = mode if isinstance(mode, ReplanMode) else ReplanMode.parse(mode)
    return _MODES[m](blocks, now, config=config)


__all__ = [
    "ReplanMode",
    "generate_replan",
    "generate_salvage_streak_replan",
    "generate_hard_reset_replan",
    "run_replan",
]
