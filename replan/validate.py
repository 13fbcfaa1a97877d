"""Block validation helpers (caller-facing).

The engine assumes valid blocks; this is the check a data-entry or import
layer runs on raw block objects before handing them over.
"""

from __future__ import annotations

from typing import Any, List

from replan.model import Category
from replan.util.clock import parse_hhmm


class BlockValidationError(ValueError):
    """Raised when raw blocks fail validation."""


_CATEGORIES = {c.value for c in Category}


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _valid_hhmm(v: Any) -> bool:
    if not isinstance(v, str):
        return False
    try:
        parse_hhmm(v)
    except ValueError:
        return False
    return True


def validate_blocks(raw: Any) -> List[str]:
    """Return a list of human-readable problems; empty means valid."""
    if not isinstance(raw, list):
        return [f"blocks must be a list, got {type(raw).__name__}"]

    errs: List[str] = []
    seen: set[str] = set()

    for i, b in enumerate(raw):
        label = f"blocks[{i}]"
        if not isinstance(b, dict):
            errs.append(f"{label} must be an object")
            continue

        bid = b.get("id")
        if isinstance(bid, str) and bid.strip():
            _require(bid not in seen, f"{label}.id is duplicated: {bid}", errs)
            seen.add(bid)
        else:
            errs.append(f"{label}.id must be non-empty string")

        _require(isinstance(b.get("title"), str), f"{label}.title must be string", errs)
        _require(b.get("type") in _CATEGORIES, f"{label}.type must be one of {sorted(_CATEGORIES)}", errs)
        _require(_valid_hhmm(b.get("startTime")), f"{label}.startTime must be HH:MM", errs)

        dur = b.get("duration")
        _require(_is_int(dur) and dur > 0, f"{label}.duration must be positive int", errs)

        pri = b.get("priority")
        _require(_is_int(pri) and pri in (1, 2, 3), f"{label}.priority must be 1, 2 or 3", errs)

        for k in ("fixed", "completed"):
            _require(isinstance(b.get(k), bool), f"{label}.{k} must be bool", errs)
        if b.get("protected") is not None:
            _require(isinstance(b.get("protected"), bool), f"{label}.protected must be bool", errs)

        fb = b.get("fallbackMinutes")
        if fb is not None:
            if not _is_int(fb) or fb <= 0:
                errs.append(f"{label}.fallbackMinutes must be positive int")
            elif _is_int(dur) and fb > dur:
                errs.append(f"{label}.fallbackMinutes must not exceed duration")

    return errs


def assert_valid_blocks(raw: Any) -> None:
    errs = validate_blocks(raw)
    if errs:
        raise BlockValidationError("Invalid blocks:\n" + "\n".join(f"  - {e}" for e in errs))


__all__ = [
    "BlockValidationError",
    "validate_blocks",
    "assert_valid_blocks",
]
