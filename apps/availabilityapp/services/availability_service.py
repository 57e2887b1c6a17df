# apps/availabilityapp/services/availability_service.py
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Union

from django.db import transaction

from algorithms.availability.engine import AvailabilityEngine
from algorithms.availability.entities import AvailableSlot, SlotCheckResult
from algorithms.availability.recurrence import expand_blocks
from algorithms.availability.time_utils import parse_date
from apps.availabilityapp.models import AvailabilityBlock, TeacherAvailability
from apps.availabilityapp.services.stores import (
    DjangoBlockStore,
    DjangoSessionStore,
    DjangoTemplateStore,
)
from core.exceptions import InvalidDataException, ResourceNotFoundException

logger = logging.getLogger(__name__)

TEMPLATE_FIELDS = (
    "school_id",
    "working_hours",
    "timezone",
    "buffer_time",
    "min_booking_notice",
    "max_booking_advance",
)


class AvailabilityService:
    """
    Teacher availability backed by the Django ORM.

    Wraps the availability engine with the project's store implementations
    and adds the write operations used by the settings and block forms.
    """

    @staticmethod
    def get_engine(clock=None) -> AvailabilityEngine:
        return AvailabilityEngine(
            DjangoTemplateStore(),
            DjangoBlockStore(),
            DjangoSessionStore(),
            clock=clock,
        )

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    @staticmethod
    def get_teacher_availability(teacher_id) -> Optional[TeacherAvailability]:
        return TeacherAvailability.objects.filter(teacher_id=teacher_id).first()

    @staticmethod
    @transaction.atomic
    def set_working_hours(teacher_id, data: Dict[str, Any]) -> TeacherAvailability:
        """
        Create or update a teacher's availability settings.

        Fields missing from data keep their current values, or the defaults
        when the settings are created.

        Args:
            teacher_id: UUID of the teacher
            data: Validated settings fields

        Returns:
            The saved TeacherAvailability
        """
        values = {key: data[key] for key in TEMPLATE_FIELDS if key in data}
        availability, created = TeacherAvailability.objects.select_for_update().get_or_create(
            teacher_id=teacher_id, defaults=values
        )

        if not created and values:
            for key, value in values.items():
                setattr(availability, key, value)
            availability.save()

        logger.info(
            f"{'Created' if created else 'Updated'} availability settings for teacher {teacher_id}"
        )
        return availability

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------
    @staticmethod
    def block_time_slot(data: Dict[str, Any]) -> AvailabilityBlock:
        """
        Block (or open) a time range for a teacher.

        Args:
            data: Validated block fields (teacher_id, block_type, date,
                start_time, end_time, reason, recurring, recurrence_pattern)

        Returns:
            The created AvailabilityBlock
        """
        if not data.get("recurring"):
            data = {**data, "recurrence_pattern": None}
        block = AvailabilityBlock.objects.create(**data)
        logger.info(
            f"Created {block.block_type} block {block.id} for teacher {block.teacher_id} "
            f"on {block.date}"
        )
        return block

    @staticmethod
    def unblock_time_slot(block_id) -> None:
        deleted, _ = AvailabilityBlock.objects.filter(id=block_id).delete()
        if not deleted:
            raise ResourceNotFoundException("Availability block not found")
        logger.info(f"Deleted availability block {block_id}")

    @staticmethod
    def get_teacher_blocks(
        teacher_id, start_date: Union[str, date], end_date: Union[str, date], expand: bool = False
    ) -> List[Any]:
        """
        List a teacher's blocks within a date range.

        Args:
            teacher_id: UUID of the teacher
            start_date: First date (inclusive)
            end_date: Last date (inclusive)
            expand: Return recurring blocks as dated occurrences

        Returns:
            AvailabilityBlock model instances, or block entities when expand
            is set
        """
        try:
            start, end = parse_date(start_date), parse_date(end_date)
        except ValueError as e:
            raise InvalidDataException(str(e))
        if end < start:
            raise InvalidDataException("end_date must not be before start_date")

        if expand:
            return expand_blocks(DjangoBlockStore().get_blocks(teacher_id, start, end), start, end)

        return list(
            AvailabilityBlock.objects.filter(
                teacher_id=teacher_id, date__gte=start, date__lte=end
            )
        )

    # ------------------------------------------------------------------
    # Engine operations
    # ------------------------------------------------------------------
    @classmethod
    def get_available_slots(
        cls,
        teacher_id,
        start_date,
        end_date,
        duration_minutes: int,
        display_timezone: Optional[str] = None,
    ) -> List[AvailableSlot]:
        return cls.get_engine().get_available_slots(
            str(teacher_id), start_date, end_date, duration_minutes, display_timezone
        )

    @classmethod
    def check_slot_availability(
        cls,
        teacher_id,
        day,
        start_time: str,
        duration_minutes: int,
        exclude_session_id=None,
    ) -> SlotCheckResult:
        return cls.get_engine().check_slot_availability(
            str(teacher_id),
            day,
            start_time,
            duration_minutes,
            exclude_session_id=str(exclude_session_id) if exclude_session_id else None,
        )

    @classmethod
    def get_teacher_schedule_with_timezone(cls, teacher_id, day, target_timezone: str):
        return cls.get_engine().get_schedule_in_timezone(str(teacher_id), day, target_timezone)
