"""
Custom exceptions for the Tutor CRM platform.

This module defines a hierarchy of custom exceptions used across the platform
to provide consistent error handling and reporting.
"""

from django.utils.translation import gettext_lazy as _
from rest_framework import status


class TutorCRMBaseException(Exception):
    """Base class for all custom exceptions in the Tutor CRM backend.

    Catch this (or a concrete subclass) in views / services when you want to
    convert internal errors into HTTP responses without leaking implementation
    details.
    """


class APIException(TutorCRMBaseException):
    """Base exception for all API-related exceptions."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = _("An unexpected error occurred.")
    error_code = "server_error"

    def __init__(self, message=None, status_code=None, errors=None):
        self.message = message or self.default_message
        if status_code:
            self.status_code = status_code
        self.errors = errors
        super().__init__(self.message)

    def to_dict(self):
        """Convert exception to dictionary representation."""
        error_dict = {
            "message": str(self.message),
            "status_code": self.status_code,
            "code": self.__class__.__name__,
        }

        if self.errors:
            error_dict["errors"] = self.errors

        return error_dict


class InvalidDataException(APIException):
    """Exception raised when request data or call arguments are invalid."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = _("Invalid data provided.")
    error_code = "invalid_data"


class ResourceNotFoundException(APIException):
    """Exception raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = _("The requested resource was not found.")
    error_code = "not_found"


class ServiceUnavailableException(APIException):
    """Exception raised when a service is unavailable."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = _("The service is currently unavailable.")
    error_code = "service_unavailable"


class StoreUnavailableException(ServiceUnavailableException):
    """Raised when a backing store (templates, blocks, sessions) cannot be read.

    Availability lookups treat this as fatal for the weekly template and
    recoverable for blocks and sessions.
    """

    default_message = _("Availability data is temporarily unavailable.")
    error_code = "store_unavailable"


__all__ = [
    "TutorCRMBaseException",
    "APIException",
    "InvalidDataException",
    "ResourceNotFoundException",
    "ServiceUnavailableException",
    "StoreUnavailableException",
]
