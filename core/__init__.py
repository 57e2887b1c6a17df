"""
Core utilities and shared components for the Tutor CRM platform.

This package provides the exception hierarchy and the DRF exception handler
shared by every app.
"""

__version__ = "1.0.0"
