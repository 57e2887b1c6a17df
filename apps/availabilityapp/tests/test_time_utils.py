from datetime import date, datetime

import pytz
from django.test import SimpleTestCase

from algorithms.availability.time_utils import (
    ZonedTime,
    add_minutes,
    date_range,
    get_timezone,
    minutes_between,
    minutes_to_time,
    overlaps,
    parse_date,
    time_to_minutes,
    weekday_name,
)


class TimeArithmeticTest(SimpleTestCase):
    """Test cases for the HH:MM helpers"""

    def test_time_to_minutes(self):
        self.assertEqual(time_to_minutes("00:00"), 0)
        self.assertEqual(time_to_minutes("09:30"), 570)
        self.assertEqual(time_to_minutes("24:00"), 1440)

    def test_time_to_minutes_rejects_bad_values(self):
        for value in ("9", "25:00", "10:60", "24:30", "ab:cd", None):
            with self.assertRaises(ValueError):
                time_to_minutes(value)

    def test_minutes_to_time_pads(self):
        self.assertEqual(minutes_to_time(5), "00:05")
        self.assertEqual(minutes_to_time(615), "10:15")

    def test_add_minutes_and_between(self):
        self.assertEqual(add_minutes("09:00", 75), "10:15")
        self.assertEqual(minutes_between("09:00", "17:00"), 480)


class OverlapTest(SimpleTestCase):
    """Test cases for the half-open overlap rule"""

    def test_touching_intervals_do_not_overlap(self):
        self.assertFalse(overlaps("09:00", 60, "10:00", 60))
        self.assertFalse(overlaps("10:00", 60, "09:00", 60))

    def test_shared_minute_overlaps(self):
        self.assertTrue(overlaps("09:00", 61, "10:00", 60))
        self.assertTrue(overlaps("10:30", 15, "10:00", 60))

    def test_accepts_minutes(self):
        self.assertTrue(overlaps(600, 30, 615, 30))

    def test_symmetry(self):
        starts = ["08:00", "09:00", "09:30", "10:00", "11:45"]
        durations = [15, 30, 60, 90]
        for a in starts:
            for da in durations:
                for b in starts:
                    for db in durations:
                        self.assertEqual(overlaps(a, da, b, db), overlaps(b, db, a, da))


class DateHelpersTest(SimpleTestCase):
    def test_parse_date(self):
        self.assertEqual(parse_date("2025-03-03"), date(2025, 3, 3))
        self.assertEqual(parse_date(date(2025, 3, 3)), date(2025, 3, 3))
        self.assertEqual(parse_date(datetime(2025, 3, 3, 10, 0)), date(2025, 3, 3))
        with self.assertRaises(ValueError):
            parse_date("03/03/2025")

    def test_date_range_is_inclusive(self):
        days = list(date_range(date(2025, 3, 1), date(2025, 3, 3)))
        self.assertEqual(days, [date(2025, 3, 1), date(2025, 3, 2), date(2025, 3, 3)])

    def test_date_range_reaches_last_calendar_day(self):
        days = list(date_range(date(9999, 12, 30), date.max))
        self.assertEqual(days, [date(9999, 12, 30), date.max])

    def test_weekday_name(self):
        self.assertEqual(weekday_name(date(2025, 3, 2)), "sunday")
        self.assertEqual(weekday_name(date(2025, 3, 3)), "monday")

    def test_get_timezone(self):
        self.assertEqual(get_timezone("Europe/Berlin").zone, "Europe/Berlin")
        with self.assertRaises(ValueError):
            get_timezone("Mars/Olympus")


class ZonedTimeTest(SimpleTestCase):
    """Test cases for timezone conversion of wall-clock times"""

    def test_to_datetime_is_aware(self):
        value = ZonedTime.from_label("2025-03-03", "09:00", "Europe/Berlin").to_datetime()
        self.assertEqual(value.astimezone(pytz.utc), pytz.utc.localize(datetime(2025, 3, 3, 8, 0)))

    def test_astimezone_can_change_date(self):
        converted = ZonedTime.from_label("2025-03-03", "01:00", "Europe/Berlin").astimezone(
            "America/New_York"
        )
        self.assertEqual(converted.date_label, "2025-03-02")
        self.assertEqual(converted.label, "19:00")

    def test_same_timezone_is_identity(self):
        value = ZonedTime.from_label("2025-03-03", "09:00", "UTC")
        self.assertEqual(value.astimezone("UTC"), value)

    def test_summer_time(self):
        winter = ZonedTime.from_label("2025-01-06", "09:00", "Europe/London").astimezone("UTC")
        summer = ZonedTime.from_label("2025-07-07", "09:00", "Europe/London").astimezone("UTC")
        self.assertEqual(winter.label, "09:00")
        self.assertEqual(summer.label, "08:00")

    def test_last_calendar_day(self):
        value = ZonedTime(date.max, 9 * 60, "America/New_York").to_datetime()
        self.assertEqual(
            value.astimezone(pytz.utc), pytz.utc.localize(datetime(9999, 12, 31, 14, 0))
        )

    def test_astimezone_past_last_calendar_day(self):
        with self.assertRaises(ValueError):
            ZonedTime(date.max, 23 * 60, "America/New_York").astimezone("UTC")
