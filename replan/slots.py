"""Free-slot bookkeeping for the replan engine.

All values are minutes since midnight. Slots are half-open `[start, end)` and
are kept sorted by start so that first-fit is always chronological.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from replan.model import TimeSlot


def union_intervals(intervals: Iterable[Tuple[int, int]]) -> List[Tuple[int, int]]:
    ints = sorted(intervals)
    if not ints:
        return []
    out: List[Tuple[int, int]] = []
    cur_s, cur_e = ints[0]
    for s, e in ints[1:]:
        if s <= cur_e:
            cur_e = max(cur_e, e)
        else:
            out.append((cur_s, cur_e))
            cur_s, cur_e = s, e
    out.append((cur_s, cur_e))
    return out


def build_free_slots(
    occupied: Iterable[Tuple[int, int]],
    *,
    start_min: int,
    end_min: int,
    buffer_min: int,
) -> List[TimeSlot]:
    """Complement of `occupied` within `[start_min, end_min)`.

    Each occupied interval is followed by `buffer_min` before free time resumes;
    the free slot ahead of an occupied interval runs right up to its start.
    """
    out: List[TimeSlot] = []
    cursor = int(start_min)
    for s, e in sorted(occupied):
        if cursor < s:
            out.append(TimeSlot(start_min=cursor, end_min=min(s, end_min)))
        cursor = max(cursor, e + buffer_min)
    if cursor < end_min:
        out.append(TimeSlot(start_min=cursor, end_min=int(end_min)))
    return [sl for sl in out if sl.end_min > sl.start_min]


def first_fit(slots: List[TimeSlot], duration: int) -> Optional[int]:
    """Index of the earliest slot long enough for `duration`, or None."""
    for i, sl in enumerate(slots):
        if sl.length >= duration:
            return i
    return None


def claim(slots: List[TimeSlot], index: int, duration: int, *, buffer_min: int) -> Tuple[int, List[TimeSlot]]:
    """Place `duration` at the front of `slots[index]`.

    Returns (start_min, new_slots); the claimed slot resumes after the
    placement plus buffer.
    """
    sl = slots[index]
    start = sl.start_min
    out = list(slots)
    out[index] = TimeSlot(start_min=start + int(duration) + buffer_min, end_min=sl.end_min)
    out.sort(key=lambda x: x.start_min)
    return start, out


__all__ = [
    "union_intervals",
    "build_free_slots",
    "first_fit",
    "claim",
]
