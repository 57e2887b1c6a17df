import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _


class Student(models.Model):
    """Student enrolled at a school, optionally on a teacher's roster"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    school_id = models.UUIDField(_("School"), db_index=True)
    teacher_id = models.UUIDField(_("Teacher"), null=True, blank=True, db_index=True)
    name = models.CharField(_("Name"), max_length=255)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)

    class Meta:
        verbose_name = _("Student")
        verbose_name_plural = _("Students")
        ordering = ["name"]

    def __str__(self):
        return self.name


class LessonSession(models.Model):
    """A scheduled lesson, reachable through the student or tagged with a teacher"""

    STATUS_CHOICES = (
        ("scheduled", _("Scheduled")),
        ("completed", _("Completed")),
        ("cancelled", _("Cancelled")),
        ("rescheduled", _("Rescheduled")),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name="sessions",
        verbose_name=_("Student"),
        null=True,
        blank=True,
    )
    teacher_id = models.UUIDField(_("Teacher"), null=True, blank=True, db_index=True)
    scheduled_at = models.DateTimeField(_("Scheduled At"), db_index=True)
    duration_minutes = models.PositiveIntegerField(
        _("Duration (minutes)"), null=True, blank=True
    )
    status = models.CharField(
        _("Status"),
        max_length=20,
        choices=STATUS_CHOICES,
        default="scheduled",
        db_index=True,
    )
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Lesson Session")
        verbose_name_plural = _("Lesson Sessions")
        ordering = ["scheduled_at"]
        indexes = [
            models.Index(fields=["teacher_id", "status", "scheduled_at"]),
            models.Index(fields=["student", "status", "scheduled_at"]),
        ]

    def __str__(self):
        return f"{self.student or self.teacher_id} - {self.scheduled_at.strftime('%Y-%m-%d %H:%M')}"
