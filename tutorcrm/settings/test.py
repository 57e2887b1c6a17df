"""
Test settings for Tutor CRM project.

These settings override the base settings for test environments.
"""

from .base import *

# In-memory SQLite keeps the suite independent of any local database
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Disable caching in tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.dummy.DummyCache",
    }
}

# Password hashers are slow; use fast ones for tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Make tests faster by avoiding real translations
USE_I18N = False

# Fixed defaults regardless of the developer's .env
AVAILABILITY = {
    "DEFAULT_TIMEZONE": "UTC",
    "DEFAULT_BUFFER_TIME": 15,
    "DEFAULT_MIN_BOOKING_NOTICE": 24,
    "DEFAULT_MAX_BOOKING_ADVANCE": 90,
    "DEFAULT_SESSION_DURATION": 60,
    "MAX_QUERY_RANGE_DAYS": 366,
}

# Disable logging during tests to speed them up
LOGGING = {
    "version": 1,
    "disable_existing_loggers": True,
    "handlers": {
        "null": {
            "class": "logging.NullHandler",
        },
    },
    "loggers": {
        "": {
            "handlers": ["null"],
            "level": "CRITICAL",
        },
    },
}
