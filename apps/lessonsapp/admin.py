from django.contrib import admin

from apps.lessonsapp.models import LessonSession, Student


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ("name", "school_id", "teacher_id", "created_at")
    search_fields = ("name",)
    list_filter = ("school_id",)


@admin.register(LessonSession)
class LessonSessionAdmin(admin.ModelAdmin):
    list_display = ("id", "student", "teacher_id", "scheduled_at", "duration_minutes", "status")
    list_filter = ("status",)
    date_hierarchy = "scheduled_at"
    raw_id_fields = ("student",)
