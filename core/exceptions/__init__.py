"""
Tutor CRM – centralised custom exceptions.

Import these from `core.exceptions` across the project instead of redefining
ad-hoc `Exception` subclasses in each app.
"""

from .custom_exceptions import (
    APIException,
    InvalidDataException,
    ResourceNotFoundException,
    ServiceUnavailableException,
    StoreUnavailableException,
    TutorCRMBaseException,
)

__all__ = [
    "TutorCRMBaseException",
    "APIException",
    "InvalidDataException",
    "ResourceNotFoundException",
    "ServiceUnavailableException",
    "StoreUnavailableException",
]
