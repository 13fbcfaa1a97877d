#!/usr/bin/env python3
from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import List

from replan.config import DEFAULT_CONFIG
from replan.drift import check_for_drift
from replan.util.clock import clock_minutes, wall_clock_tz

from ._cli import die, load_blocks_or_report, setup_logging

PROG = "replan-check-drift"


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog=PROG,
        description="Print the id of the first late flexible block, or 'none'.",
    )
    ap.add_argument("--in", dest="in_json", required=True, help="Input blocks JSON path")
    ap.add_argument("--now", default=None, help="Clock override as HH:MM (default: wall clock)")
    ap.add_argument("--tz", default="local", help="Timezone for the wall clock (default: local)")
    ap.add_argument("--verbose", action="store_true", help="Debug logging")
    ns = ap.parse_args(argv)

    setup_logging(ns.verbose)

    try:
        wall_clock_tz(ns.tz)
        now_min = clock_minutes(ns.now, tz=ns.tz)
    except ValueError as e:
        return die(PROG, str(e))

    blocks, rc = load_blocks_or_report(PROG, Path(ns.in_json))
    if blocks is None:
        return rc

    late = check_for_drift(blocks, now_min, config=replace(DEFAULT_CONFIG, tz=ns.tz))
    print(late if late is not None else "none")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
