import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from algorithms.availability.entities import (
    AvailabilityBlock as BlockEntity,
)
from algorithms.availability.entities import WeeklyAvailabilityTemplate
from algorithms.availability.time_utils import get_timezone
from apps.availabilityapp.constants import (
    BLOCK_TYPE_CHOICES,
    DEFAULT_DAY_END,
    DEFAULT_DAY_START,
    DEFAULT_WORKING_DAYS,
    RECURRENCE_PATTERN_CHOICES,
    TIME_FORMAT,
    WEEKDAYS,
)


def availability_setting(key):
    """Read a value from the AVAILABILITY settings dict"""
    return settings.AVAILABILITY[key]


def default_working_hours():
    """Monday to Friday 09:00-17:00, weekends off, no breaks"""
    return {
        day: {
            "enabled": day in DEFAULT_WORKING_DAYS,
            "start": DEFAULT_DAY_START,
            "end": DEFAULT_DAY_END,
            "breaks": [],
        }
        for day in WEEKDAYS
    }


def validate_timezone(value):
    try:
        get_timezone(value)
    except ValueError:
        raise ValidationError(_("Unknown timezone: %(value)s"), params={"value": value})


def default_timezone():
    return availability_setting("DEFAULT_TIMEZONE")


def default_buffer_time():
    return availability_setting("DEFAULT_BUFFER_TIME")


def default_min_booking_notice():
    return availability_setting("DEFAULT_MIN_BOOKING_NOTICE")


def default_max_booking_advance():
    return availability_setting("DEFAULT_MAX_BOOKING_ADVANCE")


class TeacherAvailability(models.Model):
    """Weekly working-hours template and booking rules for one teacher"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    teacher_id = models.UUIDField(_("Teacher"), unique=True)
    school_id = models.UUIDField(_("School"), null=True, blank=True, db_index=True)
    working_hours = models.JSONField(_("Working Hours"), default=default_working_hours)
    timezone = models.CharField(
        _("Timezone"), max_length=64, default=default_timezone, validators=[validate_timezone]
    )
    buffer_time = models.PositiveIntegerField(
        _("Buffer Time (minutes)"), default=default_buffer_time
    )
    min_booking_notice = models.PositiveIntegerField(
        _("Minimum Booking Notice (hours)"), default=default_min_booking_notice
    )
    max_booking_advance = models.PositiveIntegerField(
        _("Maximum Booking Advance (days)"),
        default=default_max_booking_advance,
        validators=[MinValueValidator(1)],
    )
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Teacher Availability")
        verbose_name_plural = _("Teacher Availability")

    def __str__(self):
        return f"{self.teacher_id} ({self.timezone})"

    def to_template(self):
        """Convert to the engine's template object"""
        return WeeklyAvailabilityTemplate.from_dict(
            {
                "teacher_id": self.teacher_id,
                "school_id": self.school_id,
                "working_hours": self.working_hours,
                "timezone": self.timezone,
                "buffer_time": self.buffer_time,
                "min_booking_notice": self.min_booking_notice,
                "max_booking_advance": self.max_booking_advance,
            }
        )


class AvailabilityBlock(models.Model):
    """A one-off (or recurring) override of a teacher's working hours"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    teacher_id = models.UUIDField(_("Teacher"), db_index=True)
    block_type = models.CharField(
        _("Type"), max_length=20, choices=BLOCK_TYPE_CHOICES, default="blocked"
    )
    date = models.DateField(_("Date"), db_index=True)
    start_time = models.TimeField(_("Start Time"))
    end_time = models.TimeField(_("End Time"))
    reason = models.CharField(_("Reason"), max_length=255, blank=True)
    recurring = models.BooleanField(_("Recurring"), default=False)
    recurrence_pattern = models.CharField(
        _("Recurrence Pattern"),
        max_length=20,
        choices=RECURRENCE_PATTERN_CHOICES,
        null=True,
        blank=True,
    )
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Availability Block")
        verbose_name_plural = _("Availability Blocks")
        ordering = ["date", "start_time"]
        indexes = [
            models.Index(fields=["teacher_id", "date"]),
            models.Index(fields=["teacher_id", "recurring"]),
        ]

    def __str__(self):
        return (
            f"{self.get_block_type_display()} {self.date} "
            f"{self.start_time.strftime(TIME_FORMAT)}-{self.end_time.strftime(TIME_FORMAT)}"
        )

    def to_entity(self):
        """Convert to the engine's block object"""
        return BlockEntity(
            id=self.id,
            teacher_id=self.teacher_id,
            date=self.date,
            start_time=self.start_time.strftime(TIME_FORMAT),
            end_time=self.end_time.strftime(TIME_FORMAT),
            block_type=self.block_type,
            reason=self.reason or None,
            recurring=self.recurring,
            recurrence_pattern=self.recurrence_pattern,
        )
