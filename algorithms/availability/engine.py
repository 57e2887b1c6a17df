"""
Teacher availability engine.

Combines a teacher's weekly template, dated blocks and booked sessions into
bookable slots for a date range, and answers whether one proposed slot can
be booked. The engine holds no state between calls; everything it knows comes
from the injected stores.

Times are compared in the template's own timezone. A display timezone only
changes the labels attached to the returned slots.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Union

from django.utils import timezone as django_timezone

from core.exceptions import InvalidDataException, StoreUnavailableException

from .conflict_detector import ConflictDetector, TimeRange
from .entities import AvailableSlot, SlotCheckResult
from .recurrence import expand_blocks
from .slot_generator import SlotGenerator
from .stores import BlockStore, SessionStore, TemplateStore
from .time_utils import ZonedTime, date_range, get_timezone, parse_date, time_to_minutes

logger = logging.getLogger(__name__)

REASON_NOT_CONFIGURED = "Teacher availability not configured"
REASON_DAY_OFF = "Teacher does not work on this day"
REASON_OUTSIDE_HOURS = "Outside of working hours"

SECONDS_PER_HOUR = 60 * 60


class AvailabilityEngine:
    """
    Computes teacher availability from injected read stores.

    Example:
        engine = AvailabilityEngine(template_store, block_store, session_store)
        slots = engine.get_available_slots(teacher_id, "2025-03-03", "2025-03-09", 60)
    """

    def __init__(
        self,
        template_store: TemplateStore,
        block_store: BlockStore,
        session_store: SessionStore,
        clock: Optional[Callable[[], Any]] = None,
    ):
        """
        Args:
            template_store: Source of weekly templates
            block_store: Source of availability blocks
            session_store: Source of booked sessions
            clock: Returns the current aware datetime (defaults to Django's now)
        """
        self.template_store = template_store
        self.block_store = block_store
        self.session_store = session_store
        self.clock = clock or django_timezone.now

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------
    def get_available_slots(
        self,
        teacher_id: str,
        start_date: Union[str, date],
        end_date: Union[str, date],
        duration_minutes: int,
        display_timezone: Optional[str] = None,
    ) -> List[AvailableSlot]:
        """
        List candidate slots for every date in an inclusive range.

        Args:
            teacher_id: Teacher to compute slots for
            start_date: First date (YYYY-MM-DD or date)
            end_date: Last date (YYYY-MM-DD or date)
            duration_minutes: Slot length
            display_timezone: Optional timezone for the slot labels

        Returns:
            Slots ordered by date then start time. Taken slots are included
            with is_available=False; hours outside the working day never are.

        Raises:
            InvalidDataException: For a non-positive duration, a reversed
                range, malformed dates or an unknown display timezone
            StoreUnavailableException: If the template cannot be read
        """
        start, end = self._validate_range(start_date, end_date)
        self._validate_duration(duration_minutes)
        if display_timezone:
            self._validate_timezone(display_timezone)

        template = self.template_store.get_weekly_template(teacher_id)
        if template is None:
            logger.info(f"No availability settings found for teacher {teacher_id}")
            return []

        blocks = self._load_blocks(teacher_id, start, end)
        sessions = self._load_sessions(teacher_id, start, end, template.timezone)
        logger.debug(
            f"Found {len(blocks)} blocks and {len(sessions)} sessions for teacher "
            f"{teacher_id} between {start} and {end}"
        )

        blocks_by_date = defaultdict(list)
        for block in blocks:
            blocks_by_date[block.date].append(block)
        sessions_by_date = defaultdict(list)
        for session in sessions:
            sessions_by_date[session.date].append(session)

        generator = SlotGenerator(duration_minutes, template.buffer_time)
        slots = []
        for day in date_range(start, end):
            schedule = template.day_schedule(day)
            if schedule is None or not schedule.enabled:
                continue
            slots.extend(
                generator.generate_day_slots(
                    day,
                    schedule,
                    blocks=blocks_by_date.get(day, []),
                    sessions=sessions_by_date.get(day, []),
                )
            )

        if display_timezone and display_timezone != template.timezone:
            self._apply_display_timezone(slots, template.timezone, display_timezone)

        return slots

    def check_slot_availability(
        self,
        teacher_id: str,
        day: Union[str, date],
        start_time: str,
        duration_minutes: int,
        exclude_session_id: Optional[str] = None,
    ) -> SlotCheckResult:
        """
        Decide whether a single proposed booking is possible.

        Checks run in a fixed order and the first failing one supplies the
        reason: configuration, working day, working hours, breaks, blocks,
        sessions, minimum notice, booking horizon.

        Args:
            teacher_id: Teacher being booked
            day: Date of the booking (YYYY-MM-DD or date)
            start_time: "HH:MM" in the template timezone
            duration_minutes: Length of the booking
            exclude_session_id: Session to ignore, for rescheduling in place

        Returns:
            SlotCheckResult with available and, when unavailable, a reason

        Raises:
            InvalidDataException: For malformed input or non-positive duration
            StoreUnavailableException: If the template cannot be read
        """
        booking_date = self._parse_date(day)
        self._validate_duration(duration_minutes)
        try:
            candidate = TimeRange.from_start(start_time, duration_minutes)
        except ValueError as e:
            raise InvalidDataException(str(e))

        template = self.template_store.get_weekly_template(teacher_id)
        if template is None:
            return SlotCheckResult(False, REASON_NOT_CONFIGURED)

        schedule = template.day_schedule(booking_date)
        if schedule is None or not schedule.enabled:
            return SlotCheckResult(False, REASON_DAY_OFF)

        blocks = self._load_blocks(teacher_id, booking_date, booking_date)
        sessions = self._load_sessions(
            teacher_id, booking_date, booking_date, template.timezone
        )
        detector = ConflictDetector(
            schedule,
            blocks=[b for b in blocks if b.date == booking_date],
            sessions=[s for s in sessions if s.date == booking_date],
            buffer_time=template.buffer_time,
        )

        if not detector.within_working_hours(candidate):
            return SlotCheckResult(False, REASON_OUTSIDE_HOURS)

        conflict = detector.first_conflict(candidate, exclude_session_id=exclude_session_id)
        if conflict:
            logger.debug(
                f"Slot {booking_date} {start_time} for teacher {teacher_id} "
                f"rejected: {conflict['type']}"
            )
            return SlotCheckResult(False, conflict["description"])

        booking_start = ZonedTime(
            booking_date, time_to_minutes(start_time), template.timezone
        ).to_datetime()
        hours_until_booking = (booking_start - self.clock()).total_seconds() / SECONDS_PER_HOUR

        if hours_until_booking < template.min_booking_notice:
            return SlotCheckResult(
                False, f"Requires {template.min_booking_notice} hours advance notice"
            )

        if hours_until_booking / 24 > template.max_booking_advance:
            return SlotCheckResult(
                False,
                f"Cannot book more than {template.max_booking_advance} days in advance",
            )

        return SlotCheckResult(True)

    def get_schedule_in_timezone(
        self, teacher_id: str, day: Union[str, date], target_timezone: str
    ) -> Optional[Dict[str, Any]]:
        """
        Return one date's working hours expressed in another timezone.

        Returns:
            The day schedule with start, end and breaks converted, plus
            original_timezone and display_timezone; None when the teacher has
            no template or does not work that day
        """
        schedule_date = self._parse_date(day)
        self._validate_timezone(target_timezone)

        template = self.template_store.get_weekly_template(teacher_id)
        if template is None:
            return None

        schedule = template.day_schedule(schedule_date)
        if schedule is None or not schedule.enabled:
            return None

        def convert(value: str) -> str:
            try:
                zoned = ZonedTime.from_label(schedule_date, value, template.timezone)
                return zoned.astimezone(target_timezone).label
            except ValueError as e:
                raise InvalidDataException(str(e))

        return {
            "enabled": schedule.enabled,
            "start": convert(schedule.start),
            "end": convert(schedule.end),
            "breaks": [
                {"start": convert(b.start), "end": convert(b.end)} for b in schedule.breaks
            ],
            "original_timezone": template.timezone,
            "display_timezone": target_timezone,
        }

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _load_blocks(self, teacher_id, start: date, end: date):
        try:
            blocks = self.block_store.get_blocks(teacher_id, start, end)
        except StoreUnavailableException as e:
            logger.warning(f"Error getting teacher blocks, continuing without them: {e}")
            return []
        return expand_blocks(blocks, start, end)

    def _load_sessions(self, teacher_id, start: date, end: date, tz_name: str):
        try:
            return self.session_store.get_booked_sessions(teacher_id, start, end, tz_name)
        except StoreUnavailableException as e:
            logger.warning(f"Error getting teacher sessions, continuing without them: {e}")
            return []

    @staticmethod
    def _apply_display_timezone(slots: List[AvailableSlot], source_tz: str, target_tz: str):
        for slot in slots:
            try:
                start = ZonedTime.from_label(slot.date, slot.start, source_tz).astimezone(target_tz)
                end = ZonedTime.from_label(slot.date, slot.end, source_tz).astimezone(target_tz)
            except ValueError as e:
                raise InvalidDataException(str(e))
            slot.display_date = start.date_label
            slot.display_start = start.label
            slot.display_end = end.label
            slot.display_timezone = target_tz

    @staticmethod
    def _parse_date(value) -> date:
        try:
            return parse_date(value)
        except ValueError as e:
            raise InvalidDataException(str(e))

    def _validate_range(self, start_date, end_date):
        start = self._parse_date(start_date)
        end = self._parse_date(end_date)
        if end < start:
            raise InvalidDataException("end_date must not be before start_date")
        return start, end

    @staticmethod
    def _validate_duration(duration_minutes):
        if (
            not isinstance(duration_minutes, int)
            or isinstance(duration_minutes, bool)
            or duration_minutes <= 0
        ):
            raise InvalidDataException("duration_minutes must be a positive integer")

    @staticmethod
    def _validate_timezone(name: str):
        try:
            get_timezone(name)
        except ValueError as e:
            raise InvalidDataException(str(e))
