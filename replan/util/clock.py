# replan/util/clock.py
from __future__ import annotations

import datetime as dt
import re
from typing import Optional, Tuple, Union

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

Clock = Union[dt.datetime, dt.time, str, int]


def parse_hhmm(s: str) -> Tuple[int, int]:
    m = _HHMM_RE.match(s.strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {s!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    return hh, mm


def hhmm_to_minutes(s: str) -> int:
    hh, mm = parse_hhmm(s)
    return hh * 60 + mm


def minutes_to_hhmm(minutes: int) -> str:
    # Wraps past midnight, like a wall clock.
    hh = (int(minutes) // 60) % 24
    mm = int(minutes) % 60
    return f"{hh:02d}:{mm:02d}"


def round_up_to_quantum(minutes: int, quantum_min: int) -> int:
    if quantum_min <= 1:
        return int(minutes)
    r = minutes % quantum_min
    if r == 0:
        return int(minutes)
    return int(minutes + (quantum_min - r))


def pct_of(minutes: int, pct: int) -> int:
    """`pct` percent of `minutes`, rounded half-up."""
    return (int(minutes) * int(pct) + 50) // 100


def wall_clock_tz(name: Optional[str]) -> Optional[dt.tzinfo]:
    """tzinfo for reading the wall clock; None means the machine's local zone.

    `name` is "local" (or empty), "UTC", or an IANA zone name.
    Raises ValueError for anything else.
    """
    s = (name or "").strip()
    if not s or s.lower() == "local":
        return None
    if s.upper() == "UTC":
        return dt.timezone.utc
    try:
        return ZoneInfo(s)
    except (ZoneInfoNotFoundError, ValueError) as ex:
        raise ValueError(f"Unknown timezone: {s!r}") from ex


def clock_minutes(now: Optional[Clock] = None, *, tz: str | None = "local") -> int:
    """Minute of day for a clock reading.

    `now` accepts:
      - None: the wall clock in timezone `tz`
      - datetime: its local hour/minute (aware datetimes are converted to `tz`)
      - time: hour/minute as given
      - "HH:MM" string
      - int minute of day (returned as is)
    """
    if now is None:
        now = dt.datetime.now(wall_clock_tz(tz))
    if isinstance(now, bool):
        raise TypeError("clock reading must not be bool")
    if isinstance(now, int):
        return now
    if isinstance(now, str):
        return hhmm_to_minutes(now)
    if isinstance(now, dt.datetime):
        if now.tzinfo is not None:
            now = now.astimezone(wall_clock_tz(tz))
        return now.hour * 60 + now.minute
    if isinstance(now, dt.time):
        return now.hour * 60 + now.minute
    raise TypeError(f"unsupported clock reading: {type(now).__name__}")
