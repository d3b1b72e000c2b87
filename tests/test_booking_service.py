"""
Tests for the BookingService orchestration layer.
"""

import logging

import pytest

from salonslots.domain.exceptions import InvalidDuration
from salonslots.domain.models import (
    Appointment,
    AppointmentStatus,
    LeaveRequest,
    LeaveStatus,
    ScheduleEntry,
    StaffAssignment,
)
from salonslots.domain.slot_generator import SlotGenerator
from salonslots.services.booking import AvailabilitySnapshot, BookingService

MONDAY = "2024-11-25"
NEXT_MONDAY = "2024-12-02"


def _appointment(appointment_id, time, duration, status=AppointmentStatus.CONFIRMED,
                 staff_id="stylist-1", day=MONDAY):
    return Appointment(
        id=appointment_id,
        client_id="client-1",
        branch_id="branch-a",
        appointment_date=day,
        appointment_time=time,
        staff_assignments=(StaffAssignment(staff_id, "cut", duration),),
        status=status,
    )


def _build_service(leaves=(), appointments=(), **kwargs) -> BookingService:
    snapshot = AvailabilitySnapshot(
        schedules=[
            ScheduleEntry("stylist-1", "Mon", "09:00", "12:00"),
            ScheduleEntry("stylist-2", "Mon", "10:00", "14:00"),
            ScheduleEntry("stylist-2", "Tue", "10:00", "14:00"),
        ],
        leave_requests=list(leaves),
        appointments=list(appointments),
    )
    return BookingService(snapshot, **kwargs)


def test_bookable_slots_without_appointments():
    """Monday 09:00-12:00 with no leave yields six 30 minute slots."""
    service = _build_service()

    slots = service.bookable_slots("stylist-1", MONDAY, 30)

    assert len(slots) == 6
    assert slots[0].start == "09:00"
    assert slots[-1].end == "12:00"


def test_bookable_slots_empty_on_approved_leave():
    leave = LeaveRequest("l1", "stylist-1", MONDAY, MONDAY, status=LeaveStatus.APPROVED)
    service = _build_service(leaves=[leave])

    assert service.bookable_slots("stylist-1", MONDAY, 30) == []
    assert service.bookable_slots("stylist-1", NEXT_MONDAY, 30) != []


def test_bookable_slots_skip_active_appointments():
    service = _build_service(appointments=[
        _appointment("a1", "09:30", 60),
        _appointment("a2", "11:00", 30, status=AppointmentStatus.CANCELLED),
        _appointment("a3", "11:30", 30, status=AppointmentStatus.COMPLETED),
        _appointment("a4", "11:00", 30, staff_id="stylist-2"),
        _appointment("a5", "09:00", 30, day=NEXT_MONDAY),
    ])

    slots = service.bookable_slots("stylist-1", MONDAY, 30)

    assert [s.start for s in slots] == ["09:00", "10:30", "11:00", "11:30"]


def test_bookable_slots_exclude_edited_appointment():
    service = _build_service(appointments=[_appointment("a1", "09:00", 180)])

    assert service.bookable_slots("stylist-1", MONDAY, 30) == []
    assert len(service.bookable_slots("stylist-1", MONDAY, 30, exclude_appointment_id="a1")) == 6


def test_bookable_slots_use_generator_default():
    service = _build_service(slot_generator=SlotGenerator(default_duration_minutes=60))

    assert len(service.bookable_slots("stylist-1", MONDAY)) == 3


def test_custom_active_statuses():
    """Only configured statuses hold a slot."""
    service = _build_service(
        appointments=[_appointment("a1", "09:00", 180, status=AppointmentStatus.PENDING)],
        active_statuses=[AppointmentStatus.CONFIRMED, AppointmentStatus.IN_SERVICE],
    )

    assert len(service.bookable_slots("stylist-1", MONDAY, 30)) == 6


def test_find_conflicts():
    service = _build_service(appointments=[_appointment("a1", "10:00", 60)])

    assert [a.id for a in service.find_conflicts("stylist-1", MONDAY, "10:30", 30)] == ["a1"]
    assert service.find_conflicts("stylist-1", MONDAY, "11:00", 30) == []
    assert service.find_conflicts("stylist-1", MONDAY, "09:00", 60) == []
    assert service.find_conflicts("stylist-1", MONDAY, "10:30", 30, exclude_appointment_id="a1") == []


def test_find_conflicts_rejects_bad_duration():
    service = _build_service()

    with pytest.raises(InvalidDuration):
        service.find_conflicts("stylist-1", MONDAY, "10:00", 0)


def test_available_staff_respects_leave():
    leave = LeaveRequest("l1", "stylist-2", MONDAY, MONDAY, status=LeaveStatus.APPROVED)
    service = _build_service(leaves=[leave])

    assert service.available_staff(MONDAY) == ["stylist-1"]
    assert service.available_staff(NEXT_MONDAY) == ["stylist-1", "stylist-2"]
    assert service.available_staff("2024-11-26") == ["stylist-2"]


def test_effective_availability_uses_weekday_of_date():
    service = _build_service()

    assert service.effective_availability("stylist-2", "2024-11-26").is_available
    assert not service.effective_availability("stylist-1", "2024-11-26").is_available


def test_integrity_warnings_logged(caplog):
    snapshot = AvailabilitySnapshot(schedules=[
        ScheduleEntry("stylist-1", "Mon", "09:00", "12:00"),
        ScheduleEntry("stylist-1", "Mon", "11:00", "13:00"),
    ])
    service = BookingService(snapshot)

    with caplog.at_level(logging.WARNING, logger="salonslots.services.booking"):
        warnings = service.integrity_warnings()

    assert len(warnings) == 1
    assert "Overlapping schedule entries" in caplog.text
