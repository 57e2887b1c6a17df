"""
Development settings for Tutor CRM project.

These settings override the base settings for local development environments.
"""

from .base import *

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = config("SECRET_KEY", default="django-insecure-development-key-not-for-production")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config("DEBUG", default=True, cast=bool)

ALLOWED_HOSTS = ["*"]

# Verbose output from the availability engine while developing
LOGGING["loggers"]["algorithms"]["level"] = "DEBUG"
LOGGING["loggers"]["apps"]["level"] = "DEBUG"
LOGGING["handlers"]["console"]["level"] = "DEBUG"
