"""
Domain layer - Pure availability and lifecycle logic without external I/O.
"""

from .availability_index import AvailabilityIndex
from .exceptions import (
    DataIntegrityWarning,
    IllegalTransition,
    InvalidDate,
    InvalidDuration,
    InvalidTimeFormat,
    InvalidTimeRange,
    SalonSlotsError,
    SnapshotError,
)
from .leave_overlay import (
    LeaveOverlayResolver,
    conflicting_approved_leaves,
    superseded_pending_leaves,
)
from .models import (
    Appointment,
    AppointmentStatus,
    EffectiveAvailability,
    HistoryEntry,
    LeaveRequest,
    LeaveStatus,
    LeaveType,
    ScheduleEntry,
    Slot,
    StaffAssignment,
    TimeWindow,
    Weekday,
)
from .slot_generator import SlotGenerator, generate_slots
from .status_machine import (
    APPOINTMENT_LIFECYCLE,
    LEAVE_LIFECYCLE,
    StateMachine,
    apply_leave_action,
    approve_leave,
    cancel_leave,
    deny_leave,
    transition_appointment,
)

__all__ = [
    "APPOINTMENT_LIFECYCLE",
    "LEAVE_LIFECYCLE",
    "Appointment",
    "AppointmentStatus",
    "AvailabilityIndex",
    "DataIntegrityWarning",
    "EffectiveAvailability",
    "HistoryEntry",
    "IllegalTransition",
    "InvalidDate",
    "InvalidDuration",
    "InvalidTimeFormat",
    "InvalidTimeRange",
    "LeaveOverlayResolver",
    "LeaveRequest",
    "LeaveStatus",
    "LeaveType",
    "SalonSlotsError",
    "ScheduleEntry",
    "Slot",
    "SlotGenerator",
    "SnapshotError",
    "StaffAssignment",
    "StateMachine",
    "TimeWindow",
    "Weekday",
    "apply_leave_action",
    "approve_leave",
    "cancel_leave",
    "conflicting_approved_leaves",
    "deny_leave",
    "generate_slots",
    "superseded_pending_leaves",
    "transition_appointment",
]
