"""
DRF exception handler for the Tutor CRM platform.

Every error leaves the API in one shape:

    {"error": <code>, "message": <text>, "details": <optional>}
"""

import logging
from typing import Any, Dict, Optional, Tuple

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.utils import DatabaseError, IntegrityError
from django.http import Http404
from django.utils.translation import gettext_lazy as _
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from .custom_exceptions import APIException

logger = logging.getLogger(__name__)

# Errors raised outside core.exceptions: code, fallback message, and the
# status used when DRF does not build a response for them
KNOWN_ERRORS = (
    (drf_exceptions.ValidationError, "validation_error", _("Invalid input."), 400),
    (
        (drf_exceptions.NotAuthenticated, drf_exceptions.AuthenticationFailed),
        "authentication_required",
        _("Authentication is required."),
        401,
    ),
    (
        (PermissionDenied, drf_exceptions.PermissionDenied),
        "permission_denied",
        _("You do not have permission to perform this action."),
        403,
    ),
    (
        (Http404, drf_exceptions.NotFound, ObjectDoesNotExist),
        "not_found",
        _("The requested resource was not found."),
        404,
    ),
    (IntegrityError, "integrity_error", _("A conflict occurred with existing data."), 409),
    (
        DatabaseError,
        "database_error",
        _("A database error occurred. Please try again later."),
        500,
    ),
)


def describe_exception(exc: Exception) -> Tuple[str, str, Optional[Any], int]:
    """Return the error code, message, details and status for an exception"""
    if isinstance(exc, APIException):
        return exc.error_code, str(exc.message), exc.errors, exc.status_code

    code = getattr(exc, "default_code", "server_error")
    message = _("An error occurred processing your request.")
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for types, known_code, known_message, known_status in KNOWN_ERRORS:
        if isinstance(exc, types):
            code, message, status_code = known_code, known_message, known_status
            break

    detail = getattr(exc, "detail", None)
    if isinstance(detail, str):
        return code, detail, None, status_code

    details = None
    if isinstance(exc, drf_exceptions.ValidationError) and detail is not None:
        details = {"validation_errors": detail} if isinstance(detail, list) else detail
    return code, message, details, status_code


def exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Render exc in the platform's error shape, logging it by severity"""
    if isinstance(exc, DjangoValidationError):
        detail = exc.message_dict if hasattr(exc, "error_dict") else exc.messages
        exc = drf_exceptions.ValidationError(detail=detail)

    response = drf_exception_handler(exc, context)
    code, message, details, status_code = describe_exception(exc)
    if response is not None and not isinstance(exc, APIException):
        status_code = response.status_code

    view = context.get("view").__class__.__name__
    if status_code < 500:
        logger.warning(f"{view}: {code} - {message} (details: {details})")
    else:
        logger.error(f"{view}: {code} - {message}", exc_info=exc)

    data = {"error": code, "message": message}
    if details is not None:
        data["details"] = details

    if response is None:
        return Response(data, status=status_code)
    response.data = data
    return response
