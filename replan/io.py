"""Blocks / replan result JSON I/O.

Block objects use the storage shape of the calling layer:
  {"id", "title", "type", "startTime": "HH:MM", "duration", "fixed",
   "completed", "priority", "fallbackMinutes"?, "protected"?}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import orjson

from .model import ActionRecord, Block, Category, ReplanResult
from .util.clock import hhmm_to_minutes, minutes_to_hhmm
from .validate import assert_valid_blocks

JsonDict = Dict[str, Any]
JsonPath = Union[str, Path]


def block_from_dict(raw: JsonDict) -> Block:
    fb = raw.get("fallbackMinutes")
    return Block(
        id=str(raw["id"]),
        title=str(raw.get("title") or ""),
        category=Category(raw.get("type") or Category.OTHER.value),
        start_min=hhmm_to_minutes(raw["startTime"]),
        duration=int(raw["duration"]),
        fixed=bool(raw.get("fixed")),
        completed=bool(raw.get("completed")),
        priority=int(raw.get("priority") or 2),
        fallback_minutes=int(fb) if fb else None,
        protected=bool(raw.get("protected")),
    )


def block_to_dict(b: Block) -> JsonDict:
    out: JsonDict = {
        "id": b.id,
        "title": b.title,
        "type": b.category.value,
        "startTime": minutes_to_hhmm(b.start_min),
        "duration": int(b.duration),
        "fixed": bool(b.fixed),
        "completed": bool(b.completed),
        "priority": int(b.priority),
        "protected": bool(b.protected),
    }
    if b.fallback_minutes is not None:
        out["fallbackMinutes"] = int(b.fallback_minutes)
    return out


def action_to_dict(a: ActionRecord) -> JsonDict:
    out: JsonDict = {"blockId": a.block_id, "action": a.action.value}
    if a.original_start_min is not None:
        out["originalStartTime"] = minutes_to_hhmm(a.original_start_min)
    if a.new_start_min is not None:
        out["newStartTime"] = minutes_to_hhmm(a.new_start_min)
    if a.original_duration is not None:
        out["originalDuration"] = int(a.original_duration)
    if a.new_duration is not None:
        out["newDuration"] = int(a.new_duration)
    return out


def result_to_dict(result: ReplanResult) -> JsonDict:
    return {
        "blocks": [block_to_dict(b) for b in result.blocks],
        "actions": [action_to_dict(a) for a in result.actions],
        "minutesBehind": int(result.minutes_behind),
    }


def blocks_from_obj(obj: Any) -> List[Block]:
    """Validate decoded JSON and build blocks; raises BlockValidationError."""
    assert_valid_blocks(obj)
    return [block_from_dict(raw) for raw in obj]


def load_blocks(path: JsonPath) -> List[Block]:
    p = Path(path)
    obj = json.loads(p.read_text(encoding="utf-8", errors="replace"))
    if not isinstance(obj, list):
        raise ValueError(f"blocks file must hold a JSON list; got {type(obj).__name__}")
    return blocks_from_obj(obj)


def dumps_blocks(blocks: Sequence[Block]) -> str:
    return orjson.dumps([block_to_dict(b) for b in blocks], option=orjson.OPT_INDENT_2).decode("utf-8")


def dumps_result(result: ReplanResult) -> str:
    return orjson.dumps(result_to_dict(result), option=orjson.OPT_INDENT_2).decode("utf-8")


def write_result(path: JsonPath, result: ReplanResult) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(dumps_result(result) + "\n", encoding="utf-8")
    return p


def write_blocks(path: JsonPath, blocks: Sequence[Block]) -> Path:
    """Write the bare block list in the same shape `load_blocks` reads."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(dumps_blocks(blocks) + "\n", encoding="utf-8")
    return p


__all__ = [
    "block_from_dict",
    "block_to_dict",
    "action_to_dict",
    "result_to_dict",
    "blocks_from_obj",
    "load_blocks",
    "dumps_blocks",
    "dumps_result",
    "write_result",
    "write_blocks",
]
