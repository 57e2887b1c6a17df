from django.utils.translation import gettext_lazy as _

from algorithms.availability.entities import (
    BLOCK_TYPE_AVAILABLE,
    BLOCK_TYPE_BLOCKED,
    RECURRENCE_MONTHLY,
    RECURRENCE_WEEKLY,
)
from algorithms.availability.time_utils import WEEKDAY_NAMES

# Block types
BLOCK_TYPE_CHOICES = (
    (BLOCK_TYPE_BLOCKED, _("Blocked")),
    (BLOCK_TYPE_AVAILABLE, _("Available")),
)

# Recurrence patterns
RECURRENCE_PATTERN_CHOICES = (
    (RECURRENCE_WEEKLY, _("Weekly")),
    (RECURRENCE_MONTHLY, _("Monthly")),
)

# Weekday keys of the working_hours mapping, Sunday first
WEEKDAYS = WEEKDAY_NAMES

# Default schedule for a day, used when a teacher first saves settings
DEFAULT_DAY_START = "09:00"
DEFAULT_DAY_END = "17:00"
DEFAULT_WORKING_DAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")

# Session statuses that occupy a teacher's time
BOOKED_SESSION_STATUSES = ("scheduled",)

# Time format used across the API
TIME_FORMAT = "%H:%M"
