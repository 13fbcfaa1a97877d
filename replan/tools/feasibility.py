#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List

from replan.feasibility import Constraints, calculate_feasibility, generate_plan_variants

from ._cli import die

PROG = "replan-feasibility"


def main(argv: List[str] | None = None) -> int:
    d = Constraints()
    ap = argparse.ArgumentParser(
        prog=PROG,
        description="Check a weekly plan's hours against the time budget.",
    )
    ap.add_argument("--plan-hours", type=float, required=True, help="Hours/week the plan needs")
    ap.add_argument("--sleep-floor", type=float, default=d.sleep_floor, help="Hours of sleep per night")
    ap.add_argument("--work-hours", type=float, default=d.work_hours_per_day, help="Work hours per day")
    ap.add_argument("--work-days", type=int, default=d.work_days_per_week, help="Work days per week")
    ap.add_argument("--commute", type=float, default=d.commute_minutes_per_day, help="Commute minutes per work day")
    ns = ap.parse_args(argv)

    if ns.plan_hours < 0:
        return die(PROG, "--plan-hours must be >= 0")
    if not (0 <= ns.work_days <= 7):
        return die(PROG, "--work-days must be within 0..7")

    c = Constraints(
        sleep_floor=ns.sleep_floor,
        work_hours_per_day=ns.work_hours,
        work_days_per_week=ns.work_days,
        commute_minutes_per_day=ns.commute,
    )
    res = calculate_feasibility(ns.plan_hours, c)

    print(f"[{PROG}] available={res.available_hours:g}h plan={ns.plan_hours:g}h status={res.status}")
    print(f"  {res.message}")
    for v in generate_plan_variants(c):
        print(f"  {v.level:<10} {v.hours:>3}h  {v.feasibility:<6} {v.description}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
