import datetime as dt
import unittest

from replan.model import TimeSlot
from replan.slots import build_free_slots, claim, first_fit, union_intervals
from replan.util.clock import (
    clock_minutes,
    hhmm_to_minutes,
    minutes_to_hhmm,
    parse_hhmm,
    pct_of,
    round_up_to_quantum,
    wall_clock_tz,
)


class TestClockContract(unittest.TestCase):
    def test_hhmm_conversion(self) -> None:
        self.assertEqual(parse_hhmm("9:05"), (9, 5))
        self.assertEqual(hhmm_to_minutes("09:15"), 555)
        self.assertEqual(minutes_to_hhmm(555), "09:15")
        self.assertEqual(minutes_to_hhmm(0), "00:00")
        self.assertEqual(minutes_to_hhmm(1445), "00:05")

    def test_invalid_hhmm_raises(self) -> None:
        for bad in ("24:00", "09:60", "abc", "", "9"):
            with self.assertRaises(ValueError, msg=bad):
                parse_hhmm(bad)

    def test_round_up_to_quarter(self) -> None:
        self.assertEqual(round_up_to_quantum(555, 15), 555)
        self.assertEqual(round_up_to_quantum(556, 15), 570)
        self.assertEqual(round_up_to_quantum(1439, 15), 1440)
        self.assertEqual(round_up_to_quantum(556, 1), 556)

    def test_pct_of_rounds_half_up(self) -> None:
        self.assertEqual(pct_of(60, 60), 36)
        self.assertEqual(pct_of(45, 60), 27)
        self.assertEqual(pct_of(25, 50), 13)
        self.assertEqual(pct_of(45, 50), 23)

    def test_clock_minutes_accepts_boundary_types(self) -> None:
        self.assertEqual(clock_minutes("09:15"), 555)
        self.assertEqual(clock_minutes(555), 555)
        self.assertEqual(clock_minutes(dt.time(9, 15)), 555)
        self.assertEqual(clock_minutes(dt.datetime(2026, 3, 2, 9, 15, 42)), 555)

    def test_aware_datetime_converted_to_configured_tz(self) -> None:
        plus2 = dt.timezone(dt.timedelta(hours=2))
        now = dt.datetime(2026, 3, 2, 9, 15, tzinfo=plus2)
        self.assertEqual(clock_minutes(now, tz="UTC"), 7 * 60 + 15)

    def test_wall_clock_is_a_minute_of_day(self) -> None:
        m = clock_minutes(None, tz="UTC")
        self.assertTrue(0 <= m < 1440)

    def test_rejects_unsupported_clock_values(self) -> None:
        with self.assertRaises(TypeError):
            clock_minutes(True)
        with self.assertRaises(TypeError):
            clock_minutes(9.5)  # type: ignore[arg-type]


class TestWallClockTimezoneContract(unittest.TestCase):
    def test_local_and_utc_names(self) -> None:
        self.assertIsNone(wall_clock_tz(None))
        self.assertIsNone(wall_clock_tz("  "))
        self.assertIsNone(wall_clock_tz("Local"))
        self.assertIs(wall_clock_tz("utc"), dt.timezone.utc)

    def test_iana_zone_and_unknown_name(self) -> None:
        self.assertEqual(str(wall_clock_tz("Europe/Bucharest")), "Europe/Bucharest")
        with self.assertRaises(ValueError):
            wall_clock_tz("Not/AZone")

    def test_aware_datetime_follows_named_zone(self) -> None:
        now = dt.datetime(2026, 7, 1, 6, 0, tzinfo=dt.timezone.utc)
        # Bucharest is UTC+3 in summer.
        self.assertEqual(clock_minutes(now, tz="Europe/Bucharest"), 9 * 60)


class TestFreeSlotsContract(unittest.TestCase):
    def test_buffer_follows_each_occupied_interval(self) -> None:
        slots = build_free_slots([(540, 600)], start_min=480, end_min=1440, buffer_min=5)
        self.assertEqual(slots, [TimeSlot(480, 540), TimeSlot(605, 1440)])

    def test_overlapping_occupied_intervals(self) -> None:
        slots = build_free_slots([(570, 620), (540, 600)], start_min=480, end_min=1440, buffer_min=5)
        self.assertEqual(slots, [TimeSlot(480, 540), TimeSlot(625, 1440)])

    def test_occupied_time_before_start_is_ignored(self) -> None:
        slots = build_free_slots([(300, 400)], start_min=480, end_min=1440, buffer_min=5)
        self.assertEqual(slots, [TimeSlot(480, 1440)])

    def test_no_free_time_at_end_of_day(self) -> None:
        self.assertEqual(build_free_slots([], start_min=1440, end_min=1440, buffer_min=5), [])

    def test_first_fit_and_claim(self) -> None:
        slots = [TimeSlot(480, 510), TimeSlot(600, 700)]
        self.assertEqual(first_fit(slots, 30), 0)
        self.assertEqual(first_fit(slots, 31), 1)
        self.assertIsNone(first_fit(slots, 101))

        start, rest = claim(slots, 1, 60, buffer_min=5)
        self.assertEqual(start, 600)
        self.assertEqual(rest, [TimeSlot(480, 510), TimeSlot(665, 700)])
        self.assertEqual(slots[1], TimeSlot(600, 700))

    def test_union_intervals(self) -> None:
        self.assertEqual(union_intervals([(5, 8), (1, 3), (2, 4)]), [(1, 4), (5, 8)])
        self.assertEqual(union_intervals([]), [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
