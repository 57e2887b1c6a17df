import uuid
from datetime import date, time

from django.core.exceptions import ValidationError
from django.test import TestCase

from apps.availabilityapp.models import AvailabilityBlock, TeacherAvailability


class TeacherAvailabilityModelTest(TestCase):
    """Test cases for the TeacherAvailability model"""

    def setUp(self):
        self.teacher_id = uuid.uuid4()

    def test_defaults(self):
        availability = TeacherAvailability.objects.create(teacher_id=self.teacher_id)

        self.assertEqual(availability.timezone, "UTC")
        self.assertEqual(availability.buffer_time, 15)
        self.assertEqual(availability.min_booking_notice, 24)
        self.assertEqual(availability.max_booking_advance, 90)
        self.assertTrue(availability.working_hours["monday"]["enabled"])
        self.assertFalse(availability.working_hours["saturday"]["enabled"])
        self.assertFalse(availability.working_hours["sunday"]["enabled"])
        self.assertEqual(availability.working_hours["friday"]["start"], "09:00")
        self.assertEqual(availability.working_hours["friday"]["end"], "17:00")

    def test_to_template(self):
        availability = TeacherAvailability.objects.create(
            teacher_id=self.teacher_id, timezone="Europe/Berlin", buffer_time=10
        )

        template = availability.to_template()

        self.assertEqual(template.teacher_id, str(self.teacher_id))
        self.assertEqual(template.timezone, "Europe/Berlin")
        self.assertEqual(template.buffer_time, 10)
        schedule = template.day_schedule(date(2025, 3, 3))
        self.assertTrue(schedule.enabled)
        self.assertEqual((schedule.start, schedule.end), ("09:00", "17:00"))

    def test_rejects_unknown_timezone(self):
        availability = TeacherAvailability(teacher_id=self.teacher_id, timezone="Mars/Olympus")

        with self.assertRaises(ValidationError) as cm:
            availability.full_clean()

        self.assertIn("timezone", cm.exception.message_dict)


class AvailabilityBlockModelTest(TestCase):
    """Test cases for the AvailabilityBlock model"""

    def test_to_entity(self):
        block = AvailabilityBlock.objects.create(
            teacher_id=uuid.uuid4(),
            date=date(2025, 3, 3),
            start_time=time(12, 0),
            end_time=time(13, 30),
            recurring=True,
            recurrence_pattern="weekly",
        )

        entity = block.to_entity()

        self.assertEqual(entity.id, str(block.id))
        self.assertEqual((entity.start_time, entity.end_time), ("12:00", "13:30"))
        self.assertTrue(entity.is_blocking)
        self.assertTrue(entity.recurring)
        self.assertEqual(entity.recurrence_pattern, "weekly")
        self.assertIsNone(entity.reason)

    def test_str(self):
        block = AvailabilityBlock(
            teacher_id=uuid.uuid4(),
            date=date(2025, 3, 3),
            start_time=time(9, 0),
            end_time=time(10, 0),
        )

        self.assertEqual(str(block), "Blocked 2025-03-03 09:00-10:00")
