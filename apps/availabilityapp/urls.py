from django.urls import path

from apps.availabilityapp import views

urlpatterns = [
    # Weekly settings
    path(
        "teachers/<uuid:teacher_id>/settings/",
        views.TeacherAvailabilityView.as_view(),
        name="teacher-availability",
    ),
    # Blocked time
    path(
        "teachers/<uuid:teacher_id>/blocks/",
        views.TeacherBlocksView.as_view(),
        name="teacher-blocks",
    ),
    path(
        "blocks/<uuid:block_id>/",
        views.AvailabilityBlockDetailView.as_view(),
        name="availability-block-detail",
    ),
    # Booking queries
    path(
        "teachers/<uuid:teacher_id>/slots/",
        views.AvailableSlotsView.as_view(),
        name="teacher-available-slots",
    ),
    path(
        "teachers/<uuid:teacher_id>/check/",
        views.SlotCheckView.as_view(),
        name="teacher-slot-check",
    ),
    path(
        "teachers/<uuid:teacher_id>/schedule/<str:date>/",
        views.TeacherScheduleView.as_view(),
        name="teacher-schedule",
    ),
]
