"""replan.api

Stable *library* entrypoint for the replan engine.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from typing import Optional, Sequence

from replan.config import DEFAULT_CONFIG, ReplanConfig
from replan.drift import check_for_drift
from replan.engine import (
    ReplanMode,
    generate_hard_reset_replan,
    generate_replan,
    generate_salvage_streak_replan,
    run_replan,
)
from replan.feasibility import (
    Constraints,
    calculate_available_hours,
    calculate_feasibility,
    generate_plan_variants,
)
from replan.io import load_blocks, result_to_dict
from replan.model import ActionRecord, Block, Category, ReplanAction, ReplanResult
from replan.summary import format_minutes_behind, summarize_result
from replan.util.clock import Clock
from replan.validate import BlockValidationError, validate_blocks


def replan_file(
    path,
    mode: ReplanMode | str = ReplanMode.KEEP_PRIORITIES,
    now: Optional[Clock] = None,
    *,
    config: ReplanConfig = DEFAULT_CONFIG,
) -> ReplanResult:
    """Load blocks from a JSON file and replan them; the file is not written."""
    return run_replan(load_blocks(path), mode, now, config=config)


def needs_replan(
    blocks: Sequence[Block],
    now: Optional[Clock] = None,
    *,
    config: ReplanConfig = DEFAULT_CONFIG,
) -> bool:
    return check_for_drift(blocks, now, config=config) is not None


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
# Prefer append-only unless you are intentionally reshaping the public surface.
_PUBLIC_EXPORTS = (
    "ActionRecord",
    "Block",
    "BlockValidationError",
    "Category",
    "Constraints",
    "DEFAULT_CONFIG",
    "ReplanAction",
    "ReplanConfig",
    "ReplanMode",
    "ReplanResult",
    "calculate_available_hours",
    "calculate_feasibility",
    "check_for_drift",
    "format_minutes_behind",
    "generate_hard_reset_replan",
    "generate_plan_variants",
    "generate_replan",
    "generate_salvage_streak_replan",
    "load_blocks",
    "needs_replan",
    "replan_file",
    "result_to_dict",
    "run_replan",
    "summarize_result",
    "validate_blocks",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
