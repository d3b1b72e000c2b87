"""
Service layer helpers that orchestrate domain logic for calling screens.
"""

from .booking import AvailabilitySnapshot, BookingService

__all__ = ["AvailabilitySnapshot", "BookingService"]
