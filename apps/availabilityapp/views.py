"""
Availability app views for the Tutor CRM platform
Handles teacher working-hours settings, blocked time, open slot listing
and booking checks.
"""

import logging

from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.availabilityapp.models import availability_setting
from apps.availabilityapp.serializers import (
    AvailabilityBlockSerializer,
    AvailableSlotSerializer,
    BlockEntitySerializer,
    BlockRangeQuerySerializer,
    SlotCheckSerializer,
    SlotQuerySerializer,
    TeacherAvailabilitySerializer,
    validate_timezone_name,
)
from apps.availabilityapp.services.availability_service import AvailabilityService
from core.exceptions import ResourceNotFoundException

logger = logging.getLogger(__name__)


class TeacherAvailabilityView(APIView):
    """
    View for a teacher's weekly availability settings

    Endpoints:
    - GET /api/v1/availability/teachers/{teacher_id}/settings/ - Get settings
    - PUT /api/v1/availability/teachers/{teacher_id}/settings/ - Create or update settings
    """

    permission_classes = [IsAuthenticated]

    def get(self, request, teacher_id):
        availability = AvailabilityService.get_teacher_availability(teacher_id)
        if availability is None:
            raise ResourceNotFoundException(_("Teacher availability not configured"))

        serializer = TeacherAvailabilitySerializer(availability)
        return Response(serializer.data)

    def put(self, request, teacher_id):
        """
        Create or update a teacher's settings

        Fields left out of the payload keep their current (or default)
        values. working_hours, when present, must list all seven weekdays.

        Status codes:
            200: Settings saved
            400: Invalid payload
        """
        serializer = TeacherAvailabilitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        availability = AvailabilityService.set_working_hours(
            teacher_id, serializer.validated_data
        )
        return Response(TeacherAvailabilitySerializer(availability).data)


class TeacherBlocksView(APIView):
    """
    View for a teacher's blocked (or explicitly opened) time

    Endpoints:
    - GET /api/v1/availability/teachers/{teacher_id}/blocks/?start_date=&end_date=&expand=
    - POST /api/v1/availability/teachers/{teacher_id}/blocks/

    With expand=true, recurring blocks are returned as one entry per
    occurrence inside the range.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request, teacher_id):
        query = BlockRangeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        blocks = AvailabilityService.get_teacher_blocks(
            teacher_id, params["start_date"], params["end_date"], expand=params["expand"]
        )
        if params["expand"]:
            return Response(BlockEntitySerializer(blocks, many=True).data)
        return Response(AvailabilityBlockSerializer(blocks, many=True).data)

    def post(self, request, teacher_id):
        serializer = AvailabilityBlockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        block = AvailabilityService.block_time_slot(
            {**serializer.validated_data, "teacher_id": teacher_id}
        )
        return Response(
            AvailabilityBlockSerializer(block).data, status=status.HTTP_201_CREATED
        )


class AvailabilityBlockDetailView(APIView):
    """
    Endpoint:
    - DELETE /api/v1/availability/blocks/{block_id}/ - Remove a block
    """

    permission_classes = [IsAuthenticated]

    def delete(self, request, block_id):
        AvailabilityService.unblock_time_slot(block_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AvailableSlotsView(APIView):
    """
    View for listing a teacher's open slots over a date range

    Endpoint:
    - GET /api/v1/availability/teachers/{teacher_id}/slots/

    Query parameters:
        start_date: First date, YYYY-MM-DD
        end_date: Last date, YYYY-MM-DD
        duration: Slot length in minutes (defaults to the session duration setting)
        timezone: Optional display timezone

    Returns:
        Response: List of open slots
            [
                {
                    "date": "YYYY-MM-DD",
                    "start": "HH:MM",
                    "end": "HH:MM",
                    "is_available": true
                },
                ...
            ]

    A teacher without settings has no slots, so the list is empty rather
    than a 404.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request, teacher_id):
        query = SlotQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        duration = params.get("duration") or availability_setting("DEFAULT_SESSION_DURATION")
        slots = AvailabilityService.get_available_slots(
            teacher_id,
            params["start_date"],
            params["end_date"],
            duration,
            display_timezone=params.get("timezone"),
        )

        logger.debug(f"Returning {len(slots)} slots for teacher {teacher_id}")
        return Response(AvailableSlotSerializer([s.to_dict() for s in slots], many=True).data)


class SlotCheckView(APIView):
    """
    View for checking whether one proposed session can be booked

    Endpoint:
    - POST /api/v1/availability/teachers/{teacher_id}/check/

    Request body:
        {
            "date": "YYYY-MM-DD",
            "start_time": "HH:MM",
            "duration": 60,
            "exclude_session_id": "uuid"   (optional, when rescheduling)
        }

    Returns:
        Response: {"available": bool, "reason": str}, reason only when unavailable
    """

    permission_classes = [IsAuthenticated]

    def post(self, request, teacher_id):
        serializer = SlotCheckSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = AvailabilityService.check_slot_availability(
            teacher_id,
            data["date"],
            data["start_time"],
            data.get("duration") or availability_setting("DEFAULT_SESSION_DURATION"),
            exclude_session_id=data.get("exclude_session_id"),
        )
        return Response(result.to_dict())


class TeacherScheduleView(APIView):
    """
    View for a teacher's working hours on one date, shown in another timezone

    Endpoint:
    - GET /api/v1/availability/teachers/{teacher_id}/schedule/{date}/?timezone=
    """

    permission_classes = [IsAuthenticated]

    def get(self, request, teacher_id, date):
        target = request.query_params.get("timezone")
        if target:
            validate_timezone_name(target)

        schedule = AvailabilityService.get_teacher_schedule_with_timezone(
            teacher_id, date, target or availability_setting("DEFAULT_TIMEZONE")
        )
        if schedule is None:
            raise ResourceNotFoundException(_("No working hours for this teacher on this date"))

        return Response(schedule)
