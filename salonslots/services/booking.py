"""
Application service for booking screens.

The service builds an ``AvailabilityIndex`` from a caller-supplied snapshot
and chains the domain pieces: weekly windows, then approved leave, then slot
generation, then removal of slots already held by active appointments.
Nothing here reads or writes the document store; the caller passes in
whatever it fetched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional, Sequence, Union

from ..domain.availability_index import AvailabilityIndex
from ..domain.exceptions import DataIntegrityWarning, InvalidDuration
from ..domain.leave_overlay import LeaveOverlayResolver
from ..domain.models import (
    Appointment,
    AppointmentStatus,
    EffectiveAvailability,
    LeaveRequest,
    ScheduleEntry,
    Slot,
    Weekday,
)
from ..domain.slot_generator import SlotGenerator
from ..domain.timemath import Interval, intervals_overlap, parse_date, to_minutes

logger = logging.getLogger(__name__)

DEFAULT_ACTIVE_STATUSES = (
    AppointmentStatus.PENDING,
    AppointmentStatus.CONFIRMED,
    AppointmentStatus.IN_SERVICE,
)


@dataclass
class AvailabilitySnapshot:
    """In-memory copy of the records a query batch works from."""
    schedules: List[ScheduleEntry] = field(default_factory=list)
    leave_requests: List[LeaveRequest] = field(default_factory=list)
    appointments: List[Appointment] = field(default_factory=list)


class BookingService:
    """
    Orchestrates availability lookups and slot calculation for one snapshot.

    The index is built once in the constructor and reused for every query
    against this service instance.
    """

    def __init__(
        self,
        snapshot: AvailabilitySnapshot,
        slot_generator: Optional[SlotGenerator] = None,
        overlay_resolver: Optional[LeaveOverlayResolver] = None,
        active_statuses: Iterable[AppointmentStatus] = DEFAULT_ACTIVE_STATUSES,
    ) -> None:
        self._snapshot = snapshot
        self._index = AvailabilityIndex(snapshot.schedules)
        self._slot_generator = slot_generator or SlotGenerator()
        self._overlay_resolver = overlay_resolver or LeaveOverlayResolver()
        self._active_statuses = frozenset(active_statuses)

    @property
    def index(self) -> AvailabilityIndex:
        return self._index

    def integrity_warnings(self) -> List[DataIntegrityWarning]:
        """Return overlapping-schedule warnings and log each of them."""
        warnings = self._index.integrity_warnings()
        for warning in warnings:
            logger.warning("Schedule data problem: %s", warning)
        return warnings

    def effective_availability(
        self,
        employee_id: str,
        day: Union[str, date],
    ) -> EffectiveAvailability:
        """Windows for the staff member on ``day`` after approved leave."""
        target = parse_date(day)
        windows = self._index.windows_for(employee_id, Weekday.from_date(target))

        return self._overlay_resolver.effective_availability(
            employee_id=employee_id,
            day=target,
            schedule_windows=windows,
            approved_leaves=self._snapshot.leave_requests,
        )

    def bookable_slots(
        self,
        employee_id: str,
        day: Union[str, date],
        slot_duration_minutes: Optional[int] = None,
        exclude_appointment_id: Optional[str] = None,
    ) -> List[Slot]:
        """
        Slots the staff member can still take on ``day``.

        Args:
            employee_id: Staff member being booked
            day: Calendar date
            slot_duration_minutes: Slot length; the generator default if None
            exclude_appointment_id: Appointment being edited, whose own time
                should not count as taken

        Returns:
            Ordered list of free slots
        """
        availability = self.effective_availability(employee_id, day)
        if not availability.is_available:
            return []

        slots = self._slot_generator.generate_slots(
            availability.windows, slot_duration_minutes
        )
        busy = self.busy_intervals(employee_id, availability.date, exclude_appointment_id)
        free = self._slot_generator.exclude_busy(slots, busy)

        logger.debug(
            "Employee %s on %s: %d slots, %d free",
            employee_id,
            availability.date,
            len(slots),
            len(free),
        )
        return free

    def busy_intervals(
        self,
        employee_id: str,
        day: Union[str, date],
        exclude_appointment_id: Optional[str] = None,
    ) -> List[Interval]:
        """Minute intervals held by the staff member's active appointments on ``day``."""
        intervals: List[Interval] = []

        for appointment in self._active_appointments_on(parse_date(day), exclude_appointment_id):
            interval = appointment.busy_interval_for(employee_id)
            if interval is not None:
                intervals.append(interval)

        return sorted(intervals)

    def find_conflicts(
        self,
        employee_id: str,
        day: Union[str, date],
        time: str,
        duration_minutes: int,
        exclude_appointment_id: Optional[str] = None,
    ) -> List[Appointment]:
        """
        Active appointments that would clash with a proposed booking.

        Raises:
            InvalidTimeFormat: If ``time`` is not HH:MM
            InvalidDuration: If the duration is not positive
        """
        if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int) \
                or duration_minutes <= 0:
            raise InvalidDuration(
                f"Booking duration must be a positive number of minutes, got {duration_minutes!r}"
            )

        start = to_minutes(time)
        proposed = (start, start + duration_minutes)

        conflicts: List[Appointment] = []
        for appointment in self._active_appointments_on(parse_date(day), exclude_appointment_id):
            interval = appointment.busy_interval_for(employee_id)
            if interval is not None and intervals_overlap(proposed, interval):
                conflicts.append(appointment)

        return conflicts

    def available_staff(self, day: Union[str, date]) -> List[str]:
        """Staff scheduled on ``day``'s weekday and not on approved leave."""
        target = parse_date(day)
        candidates = self._index.employees_available_on(Weekday.from_date(target))

        return [
            employee_id for employee_id in candidates
            if self.effective_availability(employee_id, target).is_available
        ]

    def _active_appointments_on(
        self,
        day: date,
        exclude_appointment_id: Optional[str],
    ) -> Sequence[Appointment]:
        return [
            appointment for appointment in self._snapshot.appointments
            if appointment.appointment_date == day
            and appointment.status in self._active_statuses
            and appointment.id != exclude_appointment_id
        ]
