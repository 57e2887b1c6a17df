"""
Per-day slot generation.

Candidate slots are laid out from the start of the working day in strides of
duration + buffer time. Only whole slots are offered: the walk stops once the
next slot would end after the working day, so a tail shorter than one stride
stays unused.
"""

import logging
from datetime import date
from typing import Iterable, List

from .conflict_detector import ConflictDetector, TimeRange
from .entities import AvailabilityBlock, AvailableSlot, BookedSession, DaySchedule
from .time_utils import minutes_to_time, time_to_minutes

logger = logging.getLogger(__name__)


class SlotGenerator:
    """Generates fixed-duration candidate slots for a single day."""

    def __init__(self, duration: int, buffer_time: int = 0):
        """
        Args:
            duration: Slot length in minutes (must be positive)
            buffer_time: Minutes left free after each slot
        """
        self.duration = duration
        self.buffer_time = buffer_time or 0

    @property
    def stride(self) -> int:
        return self.duration + self.buffer_time

    def candidate_ranges(self, schedule: DaySchedule) -> List[TimeRange]:
        """Lay out every whole slot that fits in the working day, ascending."""
        ranges = []
        current = time_to_minutes(schedule.start)
        day_end = time_to_minutes(schedule.end)

        while current + self.duration <= day_end:
            ranges.append(TimeRange(current, current + self.duration))
            current += self.stride

        return ranges

    def generate_day_slots(
        self,
        day: date,
        schedule: DaySchedule,
        blocks: Iterable[AvailabilityBlock] = (),
        sessions: Iterable[BookedSession] = (),
    ) -> List[AvailableSlot]:
        """
        Generate slots for one date and flag the ones that are taken.

        Args:
            day: The calendar date
            schedule: That date's working hours (assumed enabled)
            blocks: Concrete blocks on that date
            sessions: Booked sessions on that date

        Returns:
            Slots in chronological order; unavailable slots are included
        """
        detector = ConflictDetector(
            schedule, blocks=blocks, sessions=sessions, buffer_time=self.buffer_time
        )

        slots = []
        for candidate in self.candidate_ranges(schedule):
            slots.append(
                AvailableSlot(
                    date=day,
                    start=minutes_to_time(candidate.start),
                    end=minutes_to_time(candidate.end),
                    is_available=not detector.has_conflict(candidate),
                )
            )

        logger.debug(
            f"Generated {len(slots)} slots for {day.isoformat()} "
            f"({sum(1 for s in slots if s.is_available)} available)"
        )
        return slots
