from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from apps.availabilityapp.models import AvailabilityBlock, TeacherAvailability


@admin.register(TeacherAvailability)
class TeacherAvailabilityAdmin(admin.ModelAdmin):
    list_display = (
        "teacher_id",
        "school_id",
        "timezone",
        "buffer_time",
        "min_booking_notice",
        "max_booking_advance",
        "updated_at",
    )
    list_filter = ("timezone",)
    search_fields = ("teacher_id", "school_id")
    readonly_fields = ("created_at", "updated_at")
    fieldsets = (
        (None, {"fields": ("teacher_id", "school_id", "timezone")}),
        (_("Schedule"), {"fields": ("working_hours",)}),
        (
            _("Booking Rules"),
            {"fields": ("buffer_time", "min_booking_notice", "max_booking_advance")},
        ),
        (_("Timestamps"), {"fields": ("created_at", "updated_at")}),
    )


@admin.register(AvailabilityBlock)
class AvailabilityBlockAdmin(admin.ModelAdmin):
    list_display = (
        "teacher_id",
        "block_type",
        "date",
        "start_time",
        "end_time",
        "recurring",
        "recurrence_pattern",
    )
    list_filter = ("block_type", "recurring", "recurrence_pattern", "date")
    search_fields = ("teacher_id", "reason")
    date_hierarchy = "date"
