from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from algorithms.availability.time_utils import get_timezone, time_to_minutes
from apps.availabilityapp.constants import WEEKDAYS
from apps.availabilityapp.models import (
    AvailabilityBlock,
    TeacherAvailability,
    availability_setting,
)

HHMM_REGEX = r"^([01]\d|2[0-3]):[0-5]\d$|^24:00$"


def validate_timezone_name(value):
    try:
        get_timezone(value)
    except ValueError:
        raise serializers.ValidationError(_("Unknown timezone."))
    return value


class TimeWindowSerializer(serializers.Serializer):
    start = serializers.RegexField(HHMM_REGEX)
    end = serializers.RegexField(HHMM_REGEX)

    def validate(self, attrs):
        if time_to_minutes(attrs["start"]) >= time_to_minutes(attrs["end"]):
            raise serializers.ValidationError(_("Start time must be before end time."))
        return attrs


class DayScheduleSerializer(serializers.Serializer):
    enabled = serializers.BooleanField()
    start = serializers.RegexField(HHMM_REGEX)
    end = serializers.RegexField(HHMM_REGEX)
    breaks = TimeWindowSerializer(many=True, required=False, default=list)

    def validate(self, attrs):
        start = time_to_minutes(attrs["start"])
        end = time_to_minutes(attrs["end"])
        if start >= end:
            raise serializers.ValidationError(_("Start time must be before end time."))

        breaks = sorted(attrs.get("breaks", []), key=lambda b: time_to_minutes(b["start"]))
        previous_end = None
        for window in breaks:
            break_start = time_to_minutes(window["start"])
            break_end = time_to_minutes(window["end"])
            if break_start < start or break_end > end:
                raise serializers.ValidationError(
                    _("Breaks must lie within working hours.")
                )
            if previous_end is not None and break_start < previous_end:
                raise serializers.ValidationError(_("Breaks must not overlap."))
            previous_end = break_end

        attrs["breaks"] = breaks
        return attrs


class WorkingHoursSerializer(serializers.Serializer):
    """Mapping of every weekday to its schedule"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for day in WEEKDAYS:
            self.fields[day] = DayScheduleSerializer()


class TeacherAvailabilitySerializer(serializers.ModelSerializer):
    working_hours = WorkingHoursSerializer(required=False)
    timezone = serializers.CharField(
        max_length=64, required=False, validators=[validate_timezone_name]
    )

    class Meta:
        model = TeacherAvailability
        fields = (
            "id",
            "teacher_id",
            "school_id",
            "working_hours",
            "timezone",
            "buffer_time",
            "min_booking_notice",
            "max_booking_advance",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "teacher_id", "created_at", "updated_at")


class AvailabilityBlockSerializer(serializers.ModelSerializer):
    block_type_display = serializers.CharField(
        source="get_block_type_display", read_only=True
    )
    start_time = serializers.TimeField(format="%H:%M")
    end_time = serializers.TimeField(format="%H:%M")

    class Meta:
        model = AvailabilityBlock
        fields = (
            "id",
            "teacher_id",
            "block_type",
            "block_type_display",
            "date",
            "start_time",
            "end_time",
            "reason",
            "recurring",
            "recurrence_pattern",
            "created_at",
        )
        read_only_fields = ("id", "teacher_id", "created_at")

    def validate(self, attrs):
        if attrs["start_time"] >= attrs["end_time"]:
            raise serializers.ValidationError(_("Start time must be before end time."))
        if attrs.get("recurring") and not attrs.get("recurrence_pattern"):
            raise serializers.ValidationError(
                {"recurrence_pattern": _("Recurring blocks need a recurrence pattern.")}
            )
        return attrs


class DateRangeQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()

    def validate(self, attrs):
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError(_("end_date must not be before start_date."))
        max_days = availability_setting("MAX_QUERY_RANGE_DAYS")
        if (attrs["end_date"] - attrs["start_date"]).days >= max_days:
            raise serializers.ValidationError(
                _("Date range must not span more than %(days)d days.") % {"days": max_days}
            )
        return attrs


class BlockRangeQuerySerializer(DateRangeQuerySerializer):
    expand = serializers.BooleanField(required=False, default=False)


class SlotQuerySerializer(DateRangeQuerySerializer):
    duration = serializers.IntegerField(min_value=1, required=False)
    timezone = serializers.CharField(required=False, validators=[validate_timezone_name])


class AvailableSlotSerializer(serializers.Serializer):
    date = serializers.DateField()
    start = serializers.CharField()
    end = serializers.CharField()
    is_available = serializers.BooleanField()
    display_date = serializers.CharField(required=False, allow_null=True)
    display_start = serializers.CharField(required=False, allow_null=True)
    display_end = serializers.CharField(required=False, allow_null=True)
    display_timezone = serializers.CharField(required=False, allow_null=True)


class SlotCheckSerializer(serializers.Serializer):
    date = serializers.DateField()
    start_time = serializers.RegexField(HHMM_REGEX)
    duration = serializers.IntegerField(min_value=1, required=False)
    exclude_session_id = serializers.UUIDField(required=False, allow_null=True)


class BlockEntitySerializer(serializers.Serializer):
    """Dated occurrence of a (possibly recurring) block"""

    id = serializers.CharField(allow_null=True)
    block_type = serializers.CharField()
    date = serializers.DateField()
    start_time = serializers.CharField()
    end_time = serializers.CharField()
    reason = serializers.CharField(allow_null=True)
