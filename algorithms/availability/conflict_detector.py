"""
Conflict detection for candidate lesson slots.

A candidate slot on one date is compared against the three sources that can
make it unbookable: break windows of the day's schedule, "blocked" overrides
and already booked sessions. Every comparison goes through the same strict
half-open overlap predicate, which keeps slot listing and single-slot checks
consistent with each other.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from .entities import AvailabilityBlock, BookedSession, DaySchedule
from .time_utils import minutes_to_time, overlaps, time_to_minutes

logger = logging.getLogger(__name__)

CONFLICT_BREAK = "break_conflict"
CONFLICT_BLOCKED = "blocked_conflict"
CONFLICT_SESSION = "session_conflict"

DEFAULT_BLOCK_REASON = "Time slot is blocked"


class TimeRange:
    """A same-day [start, end) range in minutes since midnight."""

    def __init__(self, start: int, end: int):
        self.start = start
        self.end = end

    def __str__(self) -> str:
        return f"{minutes_to_time(self.start)} - {minutes_to_time(self.end)}"

    def __repr__(self) -> str:
        return f"TimeRange({self})"

    @property
    def duration(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "TimeRange") -> bool:
        return overlaps(self.start, self.duration, other.start, other.duration)

    def contains_range(self, other: "TimeRange") -> bool:
        return self.start <= other.start and self.end >= other.end

    @staticmethod
    def from_times(start: str, end: str) -> "TimeRange":
        return TimeRange(time_to_minutes(start), time_to_minutes(end))

    @staticmethod
    def from_start(start: str, duration: int) -> "TimeRange":
        start_minutes = time_to_minutes(start)
        return TimeRange(start_minutes, start_minutes + duration)

    @staticmethod
    def from_session(session: BookedSession, buffer_after: int = 0) -> "TimeRange":
        """
        Create the range a session occupies, including its trailing buffer.

        Args:
            session: The booked session
            buffer_after: Minutes appended to the session's end

        Returns:
            TimeRange covering the session plus buffer
        """
        return TimeRange.from_start(session.start_time, session.duration + buffer_after)


class ConflictDetector:
    """
    Detects conflicts between candidate slots and one day's commitments.

    The detector is built once per date and reused for every candidate on
    that date. Checks run in a fixed order (breaks, blocks, sessions) and
    stop at the first hit.
    """

    def __init__(
        self,
        schedule: DaySchedule,
        blocks: Iterable[AvailabilityBlock] = (),
        sessions: Iterable[BookedSession] = (),
        buffer_time: int = 0,
    ):
        """
        Initialize the conflict detector.

        Args:
            schedule: Working hours of the date being checked
            blocks: Concrete blocks dated on that date
            sessions: Booked sessions on that date
            buffer_time: Minutes of dead time after each session
        """
        self.working_range = TimeRange.from_times(schedule.start, schedule.end)
        self.breaks = [TimeRange.from_times(b.start, b.end) for b in schedule.breaks]
        # "available" overrides never make a slot unavailable
        self.blocks = [
            (TimeRange.from_times(b.start_time, b.end_time), b)
            for b in blocks
            if b.is_blocking
        ]
        self.sessions = []
        for session in sessions:
            if not session.start_time or not session.duration:
                logger.debug(f"Skipping session {session.id} without time data")
                continue
            self.sessions.append((TimeRange.from_session(session, buffer_time), session))

    def within_working_hours(self, candidate: TimeRange) -> bool:
        return self.working_range.contains_range(candidate)

    def first_conflict(
        self, candidate: TimeRange, exclude_session_id: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Find the first conflict for a candidate range.

        Args:
            candidate: The proposed slot
            exclude_session_id: Session to ignore (rescheduling in place)

        Returns:
            None when the slot is free, otherwise a dictionary:
            {
                'type': str,
                'description': str,
                'conflicting_id': str (for blocks and sessions)
            }
        """
        for break_range in self.breaks:
            if candidate.overlaps(break_range):
                return {
                    "type": CONFLICT_BREAK,
                    "description": "Overlaps with break time",
                }

        for block_range, block in self.blocks:
            if candidate.overlaps(block_range):
                return {
                    "type": CONFLICT_BLOCKED,
                    "description": block.reason or DEFAULT_BLOCK_REASON,
                    "conflicting_id": block.id,
                }

        for session_range, session in self.sessions:
            if exclude_session_id is not None and session.id == str(exclude_session_id):
                continue
            if candidate.overlaps(session_range):
                return {
                    "type": CONFLICT_SESSION,
                    "description": "Conflicts with another session",
                    "conflicting_id": session.id,
                }

        return None

    def has_conflict(self, candidate: TimeRange) -> bool:
        return self.first_conflict(candidate) is not None
