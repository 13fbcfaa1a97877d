#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import List

from replan.config import DEFAULT_CONFIG
from replan.engine import ReplanMode, run_replan
from replan.io import write_blocks, write_result
from replan.model import ActionRecord, ReplanAction
from replan.summary import adherence, format_minutes_behind, summarize_result
from replan.util.clock import clock_minutes, minutes_to_hhmm, wall_clock_tz

from ._cli import die, load_blocks_or_report, setup_logging

PROG = "replan-day"

logger = logging.getLogger(__name__)


def _fmt_action(a: ActionRecord) -> str:
    line = f"  {a.action.value:<10} {a.block_id}"
    if a.original_start_time:
        line += f"  {a.original_start_time}"
    if a.new_start_time and a.action is not ReplanAction.SKIPPED:
        line += f" -> {a.new_start_time}"
    if a.original_duration is not None and a.new_duration is not None:
        line += f" ({a.original_duration} -> {a.new_duration} min)"
    return line


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog=PROG,
        description="Replan the rest of the day from a blocks JSON file.",
    )
    ap.add_argument("--in", dest="in_json", required=True, help="Input blocks JSON path")
    ap.add_argument("--now", default=None, help="Clock override as HH:MM (default: wall clock)")
    ap.add_argument(
        "--mode",
        default=ReplanMode.KEEP_PRIORITIES.value,
        help="keep-priorities | salvage-streak | hard-reset",
    )
    ap.add_argument("--tz", default="local", help="Timezone for the wall clock (default: local)")
    ap.add_argument("--out", default=None, help="Write the result JSON here")
    ap.add_argument("--out-blocks", default=None, help="Write the replanned block list here (input shape)")
    ap.add_argument("--verbose", action="store_true", help="Debug logging")
    ns = ap.parse_args(argv)

    setup_logging(ns.verbose)

    try:
        mode = ReplanMode.parse(ns.mode)
        wall_clock_tz(ns.tz)
        now_min = clock_minutes(ns.now, tz=ns.tz)
    except ValueError as e:
        return die(PROG, str(e))

    blocks, rc = load_blocks_or_report(PROG, Path(ns.in_json))
    if blocks is None:
        return rc

    config = replace(DEFAULT_CONFIG, tz=ns.tz)
    logger.debug("replanning %d blocks at %s (%s)", len(blocks), minutes_to_hhmm(now_min), mode.value)
    result = run_replan(blocks, mode, now_min, config=config)

    print(f"[{PROG}] mode={mode.value} now={minutes_to_hhmm(now_min)}")
    for a in result.actions:
        print(_fmt_action(a))

    s = summarize_result(result, blocks)
    print(
        f"[{PROG}] blocks={len(result.blocks)} moved={s.moved} shrunk={s.shrunk} "
        f"skipped={s.skipped} unchanged={s.unchanged} protected={s.protected} "
        f"behind={format_minutes_behind(s.minutes_behind)} ({adherence(s.minutes_behind)})"
    )

    if ns.out:
        out_path = write_result(ns.out, result)
        print(f"[{PROG}] wrote {out_path}")

    if ns.out_blocks:
        blocks_path = write_blocks(ns.out_blocks, result.blocks)
        print(f"[{PROG}] wrote {blocks_path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
