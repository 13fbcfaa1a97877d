# replan/config.py
from __future__ import annotations

from dataclasses import dataclass

# Gap kept after every placed block before the next one may start.
BUFFER_MIN = 5
# `now` is rounded up to this granularity before packing.
QUANTUM_MIN = 15
# A flexible block is "drifting" once its start is this many minutes behind.
DRIFT_THRESHOLD_MIN = 10

# Default fallback durations, as percent of the original duration.
PROTECTED_FALLBACK_PCT = 60
SALVAGE_FALLBACK_PCT = 50
HARD_RESET_FALLBACK_PCT = 50

HARD_RESET_OFFSET_MIN = 30
DAY_END_MIN = 24 * 60


@dataclass(frozen=True)
class ReplanConfig:
    """Tuning knobs for the replan engine; defaults mirror the module constants."""

    buffer_min: int = BUFFER_MIN
    quantum_min: int = QUANTUM_MIN
    drift_threshold_min: int = DRIFT_THRESHOLD_MIN
    protected_fallback_pct: int = PROTECTED_FALLBACK_PCT
    salvage_fallback_pct: int = SALVAGE_FALLBACK_PCT
    hard_reset_fallback_pct: int = HARD_RESET_FALLBACK_PCT
    hard_reset_offset_min: int = HARD_RESET_OFFSET_MIN
    day_end_min: int = DAY_END_MIN
    tz: str = "local"


DEFAULT_CONFIG = ReplanConfig()


__all__ = [
    "BUFFER_MIN",
    "QUANTUM_MIN",
    "DRIFT_THRESHOLD_MIN",
    "PROTECTED_FALLBACK_PCT",
    "SALVAGE_FALLBACK_PCT",
    "HARD_RESET_FALLBACK_PCT",
    "HARD_RESET_OFFSET_MIN",
    "DAY_END_MIN",
    "ReplanConfig",
    "DEFAULT_CONFIG",
]
