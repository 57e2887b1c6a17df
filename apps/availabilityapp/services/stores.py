"""
Django ORM implementations of the availability engine's read stores.
"""

import logging
from datetime import date, timedelta

from django.db import DatabaseError
from django.db.models import Q

from algorithms.availability.entities import BookedSession
from algorithms.availability.stores import BlockStore, SessionStore, TemplateStore
from algorithms.availability.time_utils import ZonedTime, get_timezone
from apps.availabilityapp.constants import BOOKED_SESSION_STATUSES, TIME_FORMAT
from apps.availabilityapp.models import (
    AvailabilityBlock,
    TeacherAvailability,
    availability_setting,
)
from apps.lessonsapp.models import LessonSession, Student
from core.exceptions import StoreUnavailableException

logger = logging.getLogger(__name__)


class DjangoTemplateStore(TemplateStore):
    def get_weekly_template(self, teacher_id):
        try:
            availability = TeacherAvailability.objects.filter(teacher_id=teacher_id).first()
        except DatabaseError as e:
            logger.error(f"Error getting teacher availability: {e}")
            raise StoreUnavailableException() from e

        if availability is None:
            return None

        try:
            get_timezone(availability.timezone)
        except ValueError as e:
            logger.error(f"Teacher {teacher_id} has an unusable timezone: {e}")
            raise StoreUnavailableException() from e

        return availability.to_template()


class DjangoBlockStore(BlockStore):
    def get_blocks(self, teacher_id, date_start, date_end):
        try:
            blocks = AvailabilityBlock.objects.filter(teacher_id=teacher_id).filter(
                Q(date__gte=date_start, date__lte=date_end)
                | Q(recurring=True, date__lte=date_end)
            )
            return [block.to_entity() for block in blocks]
        except DatabaseError as e:
            # A calendar without blocks is preferable to no calendar
            logger.error(f"Error getting teacher blocks: {e}")
            return []


class DjangoSessionStore(SessionStore):
    """
    Booked sessions of a teacher, from two sources.

    Sessions of students on the teacher's roster and sessions tagged with the
    teacher directly may overlap, so the results are merged by session id.
    """

    def get_booked_sessions(self, teacher_id, date_start, date_end, timezone="UTC"):
        tz = get_timezone(timezone)
        window = {"status__in": BOOKED_SESSION_STATUSES}
        # Open-ended on the first and last calendar days, whose local midnights
        # may fall outside the calendar in UTC
        if date_start > date.min:
            window["scheduled_at__gte"] = ZonedTime(date_start, 0, timezone).to_datetime()
        if date_end < date.max:
            window["scheduled_at__lt"] = ZonedTime(
                date_end + timedelta(days=1), 0, timezone
            ).to_datetime()

        try:
            roster = Student.objects.filter(teacher_id=teacher_id)
            scheduled = LessonSession.objects.filter(**window)

            sessions = {}
            for lesson in scheduled.filter(student__in=roster):
                sessions[lesson.id] = lesson
            for lesson in scheduled.filter(teacher_id=teacher_id):
                sessions.setdefault(lesson.id, lesson)
        except DatabaseError as e:
            logger.error(f"Error getting teacher sessions: {e}")
            return []

        default_duration = availability_setting("DEFAULT_SESSION_DURATION")
        result = []
        for lesson in sorted(sessions.values(), key=lambda s: s.scheduled_at):
            local = lesson.scheduled_at.astimezone(tz)
            result.append(
                BookedSession(
                    id=str(lesson.id),
                    date=local.date(),
                    start_time=local.strftime(TIME_FORMAT),
                    duration=lesson.duration_minutes or default_duration,
                )
            )

        logger.debug(
            f"Found {len(result)} sessions for teacher {teacher_id} "
            f"between {date_start} and {date_end}"
        )
        return result
