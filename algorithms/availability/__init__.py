"""
Availability calculation algorithms.

This package computes teacher availability: it generates bookable time slots
from weekly working hours and checks single proposed bookings against breaks,
blocks and already booked sessions.

Key components:
- AvailabilityEngine: Slot listing and single-slot checks over injected stores
- SlotGenerator: Lays out fixed-duration slots within one working day
- ConflictDetector: Detects break, block and session conflicts for a slot
"""

from .conflict_detector import ConflictDetector, TimeRange
from .engine import AvailabilityEngine
from .slot_generator import SlotGenerator

__all__ = ["AvailabilityEngine", "SlotGenerator", "ConflictDetector", "TimeRange"]
