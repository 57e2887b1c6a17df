"""
Time-of-day arithmetic for availability calculations.

All times handled here are wall-clock "HH:MM" strings or minutes since
midnight in a single timezone. Overlap checks never carry a date component,
so every comparison made with these helpers is a same-day comparison.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterator, Union

import pytz

logger = logging.getLogger(__name__)

# Index matches Python's date.isoweekday() % 7 (0 = Sunday)
WEEKDAY_NAMES = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)

MINUTES_PER_DAY = 24 * 60


def time_to_minutes(value: str) -> int:
    """
    Convert an "HH:MM" string to minutes since midnight.

    "24:00" is accepted as the end of the day.

    Raises:
        ValueError: If the string is not a valid time of day
    """
    try:
        hours_str, minutes_str = value.strip().split(":")
        hours, minutes = int(hours_str), int(minutes_str)
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid time '{value}', expected HH:MM")

    if not (0 <= minutes < 60) or not (0 <= hours <= 24):
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    if hours == 24 and minutes != 0:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")

    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Format minutes since midnight as a zero-padded "HH:MM" string."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def add_minutes(value: str, minutes: int) -> str:
    return minutes_to_time(time_to_minutes(value) + minutes)


def minutes_between(start: str, end: str) -> int:
    return time_to_minutes(end) - time_to_minutes(start)


def overlaps(start_a: Union[str, int], duration_a: int, start_b: Union[str, int], duration_b: int) -> bool:
    """
    Check whether two same-day intervals overlap.

    Intervals are half-open, so touching intervals (one ending exactly when
    the other starts) do not overlap.

    Args:
        start_a: Start of the first interval ("HH:MM" or minutes)
        duration_a: Length of the first interval in minutes
        start_b: Start of the second interval ("HH:MM" or minutes)
        duration_b: Length of the second interval in minutes

    Returns:
        True if the intervals share at least one minute
    """
    a = start_a if isinstance(start_a, int) else time_to_minutes(start_a)
    b = start_b if isinstance(start_b, int) else time_to_minutes(start_b)
    return a < b + duration_b and a + duration_a > b


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[day.isoweekday() % 7]


def parse_date(value: Union[str, date]) -> date:
    """
    Parse a YYYY-MM-DD string into a date (dates are returned unchanged).

    Raises:
        ValueError: If the string is not a valid ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")


def date_range(start_date: date, end_date: date) -> Iterator[date]:
    """Yield every date from start_date to end_date inclusive, ascending."""
    for offset in range((end_date - start_date).days + 1):
        yield start_date + timedelta(days=offset)


def get_timezone(name: str):
    """
    Resolve an IANA timezone name.

    Raises:
        ValueError: If the name is unknown
    """
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        raise ValueError(f"Unknown timezone '{name}'")


class ZonedTime:
    """
    A wall-clock time on a specific date in a named timezone.

    Slot arithmetic works on plain minutes within one template timezone.
    ZonedTime is the only place where a time crosses into another timezone,
    which keeps conversion a presentation concern.
    """

    def __init__(self, day: date, minutes: int, tz_name: str):
        self.date = day
        self.minutes = minutes
        self.tz_name = tz_name

    @classmethod
    def from_label(cls, day: Union[str, date], value: str, tz_name: str) -> "ZonedTime":
        return cls(parse_date(day), time_to_minutes(value), tz_name)

    @classmethod
    def from_datetime(cls, value: datetime, tz_name: str) -> "ZonedTime":
        """Build from an aware datetime, expressed in tz_name."""
        local = value.astimezone(get_timezone(tz_name))
        return cls(local.date(), local.hour * 60 + local.minute, tz_name)

    def to_datetime(self) -> datetime:
        """Return the aware datetime for this wall-clock time."""
        naive = datetime.combine(self.date, datetime.min.time()) + timedelta(
            minutes=self.minutes
        )
        tz = get_timezone(self.tz_name)
        try:
            # is_dst=False picks the standard-time reading for ambiguous times
            return tz.localize(naive, is_dst=False)
        except OverflowError:
            # localize looks a day either side, which runs off the calendar on
            # its first and last days. No offset changes there, so resolve it
            # two days inward.
            shift = timedelta(days=2) if naive.year == 1 else -timedelta(days=2)
            return tz.localize(naive + shift, is_dst=False) - shift

    def astimezone(self, tz_name: str) -> "ZonedTime":
        """
        Raises:
            ValueError: If the instant falls outside the calendar in tz_name
        """
        if tz_name == self.tz_name:
            return self
        try:
            return ZonedTime.from_datetime(self.to_datetime(), tz_name)
        except OverflowError:
            raise ValueError(
                f"{self.date_label} {self.label} {self.tz_name} cannot be expressed in {tz_name}"
            )

    @property
    def label(self) -> str:
        return minutes_to_time(self.minutes)

    @property
    def date_label(self) -> str:
        return self.date.isoformat()

    def __eq__(self, other):
        if not isinstance(other, ZonedTime):
            return NotImplemented
        return (self.date, self.minutes, self.tz_name) == (
            other.date,
            other.minutes,
            other.tz_name,
        )

    def __hash__(self):
        return hash((self.date, self.minutes, self.tz_name))

    def __repr__(self) -> str:
        return f"ZonedTime({self.date_label} {self.label} {self.tz_name})"
