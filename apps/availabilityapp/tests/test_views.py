import uuid
from datetime import date, timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from apps.availabilityapp.models import AvailabilityBlock, TeacherAvailability
from apps.availabilityapp.services.availability_service import AvailabilityService

User = get_user_model()


def weekly_hours(**overrides):
    hours = {
        day: {"enabled": True, "start": "09:00", "end": "17:00", "breaks": []}
        for day in (
            "sunday",
            "monday",
            "tuesday",
            "wednesday",
            "thursday",
            "friday",
            "saturday",
        )
    }
    hours.update(overrides)
    return hours


class AvailabilityViewTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(username="admin", password="testpass")
        self.client.force_authenticate(user=self.user)
        self.teacher_id = uuid.uuid4()

        # Far enough ahead for the default 24 hour notice, inside the 90 day horizon
        self.day = timezone.now().date() + timedelta(days=7)


class TeacherAvailabilityViewTest(AvailabilityViewTestCase):
    """Test the settings endpoint"""

    def setUp(self):
        super().setUp()
        self.url = reverse("teacher-availability", kwargs={"teacher_id": self.teacher_id})

    def test_requires_authentication(self):
        response = APIClient().get(self.url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_get_missing_settings(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "not_found")

    def test_put_creates_settings(self):
        payload = {
            "working_hours": weekly_hours(
                monday={
                    "enabled": True,
                    "start": "08:00",
                    "end": "16:00",
                    "breaks": [{"start": "12:00", "end": "12:30"}],
                }
            ),
            "timezone": "Europe/Berlin",
            "buffer_time": 10,
        }

        response = self.client.put(self.url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["timezone"], "Europe/Berlin")
        self.assertEqual(response.data["working_hours"]["monday"]["start"], "08:00")
        availability = TeacherAvailability.objects.get(teacher_id=self.teacher_id)
        self.assertEqual(availability.buffer_time, 10)
        self.assertEqual(
            availability.working_hours["monday"]["breaks"], [{"start": "12:00", "end": "12:30"}]
        )

        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["buffer_time"], 10)

    def test_put_rejects_unknown_timezone(self):
        response = self.client.put(self.url, {"timezone": "Mars/Olympus"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "validation_error")
        self.assertIn("timezone", response.data["details"])

    def test_put_rejects_break_outside_hours(self):
        payload = {
            "working_hours": weekly_hours(
                monday={
                    "enabled": True,
                    "start": "09:00",
                    "end": "17:00",
                    "breaks": [{"start": "17:00", "end": "18:00"}],
                }
            )
        }

        response = self.client.put(self.url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(TeacherAvailability.objects.exists())

    def test_put_rejects_incomplete_week(self):
        payload = {"working_hours": {"monday": weekly_hours()["monday"]}}

        response = self.client.put(self.url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class TeacherBlocksViewTest(AvailabilityViewTestCase):
    """Test the block endpoints"""

    def setUp(self):
        super().setUp()
        self.url = reverse("teacher-blocks", kwargs={"teacher_id": self.teacher_id})

    def test_create_and_list(self):
        payload = {
            "date": "2025-03-03",
            "start_time": "12:00",
            "end_time": "13:00",
            "reason": "Dentist",
        }

        response = self.client.post(self.url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["block_type"], "blocked")
        self.assertEqual(response.data["start_time"], "12:00")
        self.assertEqual(response.data["teacher_id"], str(self.teacher_id))

        response = self.client.get(
            self.url, {"start_date": "2025-03-01", "end_date": "2025-03-07"}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["reason"], "Dentist")

    def test_create_rejects_reversed_times(self):
        payload = {"date": "2025-03-03", "start_time": "13:00", "end_time": "12:00"}

        response = self.client.post(self.url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_recurring_block_needs_pattern(self):
        payload = {
            "date": "2025-03-03",
            "start_time": "12:00",
            "end_time": "13:00",
            "recurring": True,
        }

        response = self.client.post(self.url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("recurrence_pattern", response.data["details"])

    def test_list_expanded(self):
        AvailabilityBlock.objects.create(
            teacher_id=self.teacher_id,
            date=date(2025, 3, 3),
            start_time="09:00",
            end_time="10:00",
            recurring=True,
            recurrence_pattern="weekly",
        )

        response = self.client.get(
            self.url, {"start_date": "2025-03-01", "end_date": "2025-03-20", "expand": "true"}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [b["date"] for b in response.data], ["2025-03-03", "2025-03-10", "2025-03-17"]
        )

    def test_list_requires_range(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_rejects_overlong_range(self):
        response = self.client.get(
            self.url, {"start_date": "0001-01-01", "end_date": "9999-12-31", "expand": "true"}
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete(self):
        block = AvailabilityBlock.objects.create(
            teacher_id=self.teacher_id,
            date=date(2025, 3, 3),
            start_time="09:00",
            end_time="10:00",
        )
        url = reverse("availability-block-detail", kwargs={"block_id": block.id})

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class SlotViewsTest(AvailabilityViewTestCase):
    """Test slot listing, slot checks and the schedule view"""

    def setUp(self):
        super().setUp()
        AvailabilityService.set_working_hours(
            self.teacher_id, {"working_hours": weekly_hours(), "buffer_time": 0}
        )
        self.slots_url = reverse("teacher-available-slots", kwargs={"teacher_id": self.teacher_id})
        self.check_url = reverse("teacher-slot-check", kwargs={"teacher_id": self.teacher_id})

    def test_list_slots_with_default_duration(self):
        response = self.client.get(
            self.slots_url,
            {"start_date": self.day.isoformat(), "end_date": self.day.isoformat()},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 8)
        self.assertEqual(response.data[0]["start"], "09:00")
        self.assertTrue(all(slot["is_available"] for slot in response.data))

    def test_list_slots_in_display_timezone(self):
        response = self.client.get(
            self.slots_url,
            {
                "start_date": self.day.isoformat(),
                "end_date": self.day.isoformat(),
                "duration": 30,
                "timezone": "Asia/Tokyo",
            },
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 16)
        self.assertEqual(response.data[0]["display_start"], "18:00")
        self.assertEqual(response.data[0]["display_timezone"], "Asia/Tokyo")

    def test_list_slots_for_unknown_teacher_is_empty(self):
        url = reverse("teacher-available-slots", kwargs={"teacher_id": uuid.uuid4()})

        response = self.client.get(
            url, {"start_date": self.day.isoformat(), "end_date": self.day.isoformat()}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, [])

    def test_list_slots_rejects_bad_input(self):
        day = self.day.isoformat()
        earlier = (self.day - timedelta(days=1)).isoformat()

        for params in (
            {"start_date": day, "end_date": earlier},
            {"start_date": day, "end_date": day, "duration": 0},
            {"start_date": day, "end_date": day, "timezone": "Nowhere/City"},
        ):
            response = self.client.get(self.slots_url, params)
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, params)

    def test_list_slots_on_last_calendar_day(self):
        response = self.client.get(
            self.slots_url, {"start_date": "9999-12-31", "end_date": "9999-12-31"}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 8)

    def test_list_slots_rejects_overlong_range(self):
        end = self.day + timedelta(days=366)

        response = self.client.get(
            self.slots_url, {"start_date": self.day.isoformat(), "end_date": end.isoformat()}
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "validation_error")

        response = self.client.get(
            self.slots_url,
            {"start_date": self.day.isoformat(), "end_date": (end - timedelta(days=1)).isoformat()},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_check_slot(self):
        AvailabilityBlock.objects.create(
            teacher_id=self.teacher_id,
            date=self.day,
            start_time="12:00",
            end_time="13:00",
            reason="Parent meeting",
        )

        free = self.client.post(
            self.check_url,
            {"date": self.day.isoformat(), "start_time": "10:00", "duration": 60},
            format="json",
        )
        blocked = self.client.post(
            self.check_url,
            {"date": self.day.isoformat(), "start_time": "12:30"},
            format="json",
        )

        self.assertEqual(free.status_code, status.HTTP_200_OK)
        self.assertEqual(free.data, {"available": True})
        self.assertEqual(blocked.data, {"available": False, "reason": "Parent meeting"})

    def test_check_slot_too_soon(self):
        response = self.client.post(
            self.check_url,
            {"date": timezone.now().date().isoformat(), "start_time": "23:00", "duration": 30},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["available"])

    def test_check_slot_rejects_bad_time(self):
        response = self.client.post(
            self.check_url,
            {"date": self.day.isoformat(), "start_time": "9am"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_schedule_in_timezone(self):
        url = reverse(
            "teacher-schedule",
            kwargs={"teacher_id": self.teacher_id, "date": self.day.isoformat()},
        )

        response = self.client.get(url, {"timezone": "Asia/Tokyo"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["start"], "18:00")
        self.assertEqual(response.data["original_timezone"], "UTC")

    def test_schedule_bad_date(self):
        url = reverse(
            "teacher-schedule", kwargs={"teacher_id": self.teacher_id, "date": "not-a-date"}
        )

        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "invalid_data")
