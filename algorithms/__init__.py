"""
Tutor CRM Algorithms Package.

This package contains the scheduling logic used by the Tutor CRM platform.
It is kept free of ORM access so it can be exercised with in-memory data.

The algorithms are organized into the following subpackages:
- availability: Slot generation, conflict detection and booking checks
"""

__version__ = "1.0.0"
