"""
Value objects used by the availability engine.

These are plain in-memory records. The Django app maps its models onto them
in its store implementations, so nothing in the engine touches the ORM.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from .time_utils import WEEKDAY_NAMES, minutes_between, parse_date, time_to_minutes

BLOCK_TYPE_BLOCKED = "blocked"
BLOCK_TYPE_AVAILABLE = "available"

RECURRENCE_WEEKLY = "weekly"
RECURRENCE_MONTHLY = "monthly"


class TimeWindow:
    """A same-day [start, end) window given as "HH:MM" strings."""

    def __init__(self, start: str, end: str):
        self.start = start
        self.end = end

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start)

    @property
    def duration(self) -> int:
        return minutes_between(self.start, self.end)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimeWindow":
        return cls(data["start"], data["end"])

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start, "end": self.end}

    def __eq__(self, other):
        if not isinstance(other, TimeWindow):
            return NotImplemented
        return (self.start, self.end) == (other.start, other.end)

    def __repr__(self) -> str:
        return f"TimeWindow({self.start}-{self.end})"


class DaySchedule:
    """Working hours for one weekday."""

    def __init__(
        self,
        enabled: bool,
        start: str,
        end: str,
        breaks: Optional[List[TimeWindow]] = None,
    ):
        self.enabled = enabled
        self.start = start
        self.end = end
        self.breaks = breaks or []

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DaySchedule":
        return cls(
            enabled=bool(data.get("enabled", False)),
            start=data.get("start", "00:00"),
            end=data.get("end", "00:00"),
            breaks=[TimeWindow.from_dict(b) for b in data.get("breaks") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "start": self.start,
            "end": self.end,
            "breaks": [b.to_dict() for b in self.breaks],
        }


class WeeklyAvailabilityTemplate:
    """A teacher's recurring weekly availability and booking rules."""

    def __init__(
        self,
        teacher_id: str,
        working_hours: Dict[str, DaySchedule],
        timezone: str = "UTC",
        buffer_time: int = 0,
        min_booking_notice: int = 0,
        max_booking_advance: int = 365,
        school_id: Optional[str] = None,
    ):
        self.teacher_id = str(teacher_id)
        self.school_id = str(school_id) if school_id else None
        self.working_hours = working_hours
        self.timezone = timezone or "UTC"
        self.buffer_time = buffer_time or 0
        self.min_booking_notice = min_booking_notice or 0
        self.max_booking_advance = (
            365 if max_booking_advance is None else max_booking_advance
        )

    def day_schedule(self, day: date) -> Optional[DaySchedule]:
        return self.working_hours.get(WEEKDAY_NAMES[day.isoweekday() % 7])

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeeklyAvailabilityTemplate":
        return cls(
            teacher_id=data["teacher_id"],
            school_id=data.get("school_id"),
            working_hours={
                day: DaySchedule.from_dict(schedule)
                for day, schedule in (data.get("working_hours") or {}).items()
            },
            timezone=data.get("timezone") or "UTC",
            buffer_time=data.get("buffer_time") or 0,
            min_booking_notice=data.get("min_booking_notice") or 0,
            max_booking_advance=data.get("max_booking_advance"),
        )


class AvailabilityBlock:
    """A dated override: "blocked" makes time unavailable."""

    def __init__(
        self,
        teacher_id: str,
        date: date,
        start_time: str,
        end_time: str,
        block_type: str = BLOCK_TYPE_BLOCKED,
        reason: Optional[str] = None,
        recurring: bool = False,
        recurrence_pattern: Optional[str] = None,
        id: Optional[str] = None,
    ):
        self.id = str(id) if id else None
        self.teacher_id = str(teacher_id)
        self.date = parse_date(date)
        self.start_time = start_time
        self.end_time = end_time
        self.block_type = block_type
        self.reason = reason
        self.recurring = recurring
        self.recurrence_pattern = recurrence_pattern

    @property
    def is_blocking(self) -> bool:
        return self.block_type == BLOCK_TYPE_BLOCKED

    @property
    def duration(self) -> int:
        return minutes_between(self.start_time, self.end_time)

    def occurrence_on(self, day: date) -> "AvailabilityBlock":
        """Return a non-recurring copy of this block dated on day."""
        return AvailabilityBlock(
            teacher_id=self.teacher_id,
            date=day,
            start_time=self.start_time,
            end_time=self.end_time,
            block_type=self.block_type,
            reason=self.reason,
            id=self.id,
        )

    def __repr__(self) -> str:
        return (
            f"AvailabilityBlock({self.block_type} {self.date.isoformat()} "
            f"{self.start_time}-{self.end_time})"
        )


class BookedSession:
    """A booked lesson as seen by the engine, in the template timezone."""

    def __init__(self, id: str, date: date, start_time: str, duration: int):
        self.id = str(id)
        self.date = parse_date(date)
        self.start_time = start_time
        self.duration = duration

    def __repr__(self) -> str:
        return (
            f"BookedSession({self.id} {self.date.isoformat()} "
            f"{self.start_time}+{self.duration}m)"
        )


class AvailableSlot:
    """One fixed-duration candidate booking interval."""

    def __init__(self, date: date, start: str, end: str, is_available: bool):
        self.date = date
        self.start = start
        self.end = end
        self.is_available = is_available
        self.display_date = None
        self.display_start = None
        self.display_end = None
        self.display_timezone = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "date": self.date.isoformat(),
            "start": self.start,
            "end": self.end,
            "is_available": self.is_available,
        }
        if self.display_timezone:
            data.update(
                {
                    "display_date": self.display_date,
                    "display_start": self.display_start,
                    "display_end": self.display_end,
                    "display_timezone": self.display_timezone,
                }
            )
        return data

    def __eq__(self, other):
        if not isinstance(other, AvailableSlot):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        flag = "free" if self.is_available else "taken"
        return f"AvailableSlot({self.date.isoformat()} {self.start}-{self.end} {flag})"


class SlotCheckResult:
    """Verdict for a single proposed booking."""

    def __init__(self, available: bool, reason: Optional[str] = None):
        self.available = available
        self.reason = reason

    def to_dict(self) -> Dict[str, Any]:
        data = {"available": self.available}
        if self.reason:
            data["reason"] = self.reason
        return data

    def __bool__(self) -> bool:
        return self.available

    def __repr__(self) -> str:
        return f"SlotCheckResult(available={self.available}, reason={self.reason!r})"
