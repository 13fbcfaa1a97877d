# replan/drift.py
from __future__ import annotations

import logging
from typing import Optional, Sequence

from .config import DEFAULT_CONFIG, ReplanConfig
from .model import Block
from .util.clock import Clock, clock_minutes

logger = logging.getLogger(__name__)


def check_for_drift(
    blocks: Sequence[Block],
    now: Optional[Clock] = None,
    *,
    config: ReplanConfig = DEFAULT_CONFIG,
) -> Optional[str]:
    """Id of the first outstanding flexible block running late, else None.

    "Late" means its start is more than `drift_threshold_min` before `now`
    (not rounded). Blocks are scanned in list order.
    """
    now_min = clock_minutes(now, tz=config.tz)

    for b in blocks:
        if b.completed or b.fixed:
            continue
        if now_min - b.start_min > config.drift_threshold_min:
            logger.debug("drift: block %s is %d min late", b.id, now_min - b.start_min)
            return b.id
    return None


__all__ = ["check_for_drift"]
