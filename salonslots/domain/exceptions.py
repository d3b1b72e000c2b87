"""
Domain-specific exception hierarchy for the salonslots package.
"""


class SalonSlotsError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeFormat(SalonSlotsError, ValueError):
    """Raised when a time string is not a 24-hour ``HH:MM`` value."""


class InvalidTimeRange(SalonSlotsError, ValueError):
    """Raised when a window does not open before it closes."""


class InvalidDate(SalonSlotsError, ValueError):
    """Raised when a calendar date cannot be parsed or is out of order."""


class InvalidDuration(SalonSlotsError, ValueError):
    """Raised when a slot duration is not a positive whole number of minutes."""


class IllegalTransition(SalonSlotsError):
    """Raised when a lifecycle status change is not permitted."""


class SnapshotError(SalonSlotsError):
    """Raised when a data snapshot cannot be read or parsed."""


class DataIntegrityWarning(SalonSlotsError):
    """
    Describes overlapping schedule entries for one employee and weekday.

    Never raised by the availability index; it is returned so the caller can
    log or display it.
    """

    def __init__(self, employee_id: str, day_of_week, first, second):
        self.employee_id = employee_id
        self.day_of_week = day_of_week
        self.first = first
        self.second = second
        super().__init__(
            f"Overlapping schedule entries for {employee_id} on {day_of_week}: "
            f"{first} and {second}"
        )
