from django.core.exceptions import ObjectDoesNotExist
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from django.test import SimpleTestCase
from rest_framework import exceptions as drf_exceptions
from rest_framework import status

from core.exceptions import InvalidDataException, StoreUnavailableException
from core.exceptions.exception_handler import exception_handler


class ExceptionHandlerTest(SimpleTestCase):
    """Test cases for the API error shape"""

    def handle(self, exc):
        return exception_handler(exc, {"view": None})

    def test_platform_exception(self):
        response = self.handle(StoreUnavailableException())

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data["error"], "store_unavailable")
        self.assertNotIn("details", response.data)

    def test_platform_exception_details(self):
        response = self.handle(
            InvalidDataException("Bad range", errors={"end_date": ["Too early"]})
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Bad range")
        self.assertEqual(response.data["details"], {"end_date": ["Too early"]})

    def test_integrity_error_is_a_conflict(self):
        response = self.handle(IntegrityError("duplicate key"))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"], "integrity_error")

    def test_missing_object(self):
        response = self.handle(ObjectDoesNotExist())

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "not_found")

    def test_django_validation_error(self):
        response = self.handle(DjangoValidationError({"timezone": ["Unknown timezone."]}))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "validation_error")
        self.assertEqual(response.data["details"], {"timezone": ["Unknown timezone."]})

    def test_other_drf_errors_keep_their_code(self):
        response = self.handle(drf_exceptions.MethodNotAllowed("PATCH"))

        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertEqual(response.data["error"], "method_not_allowed")
        self.assertEqual(response.data["message"], 'Method "PATCH" not allowed.')

    def test_unexpected_error(self):
        response = self.handle(RuntimeError("boom"))

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["error"], "server_error")
