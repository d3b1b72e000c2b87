"""
Domain models for schedules, leave, appointments and bookable slots.

Records mirror the documents the booking and staff-management screens
keep in the document store. They are immutable; lifecycle changes return new
instances.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pendulum
from pendulum import DateTime

from .exceptions import InvalidDate, InvalidTimeRange
from .timemath import (
    MINUTES_PER_DAY,
    Interval,
    intervals_overlap,
    parse_date,
    to_minutes,
)


class Weekday(Enum):
    """Day of the week a recurring schedule entry applies to."""

    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"

    @classmethod
    def parse(cls, value: "Weekday | str") -> "Weekday":
        """Accept ``Mon``, ``Monday`` or ``monday`` style names."""
        if isinstance(value, cls):
            return value

        key = str(value).strip()[:3].capitalize()
        for member in cls:
            if member.value == key:
                return member

        raise ValueError(f"Unknown day of week: {value!r}")

    @classmethod
    def from_date(cls, day: date) -> "Weekday":
        """Weekday a calendar date falls on."""
        return _WEEKDAY_ORDER[day.isoweekday() - 1]

    @property
    def index(self) -> int:
        """0 for Monday through 6 for Sunday."""
        return _WEEKDAY_ORDER.index(self)

    def __str__(self) -> str:
        return self.value


_WEEKDAY_ORDER: List[Weekday] = list(Weekday)


@dataclass(frozen=True)
class TimeWindow:
    """
    A contiguous time range within one day, in ``HH:MM``.

    Invariant: start must be before end.
    """
    start: str
    end: str

    def __post_init__(self):
        if to_minutes(self.start) >= to_minutes(self.end):
            raise InvalidTimeRange(
                f"Start time {self.start} must be before end time {self.end}"
            )

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end)

    def as_interval(self) -> Interval:
        return (self.start_minutes, self.end_minutes)

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end_minutes - self.start_minutes

    def overlaps(self, other: "TimeWindow") -> bool:
        """Check if this window overlaps with another (touching is not overlap)."""
        return intervals_overlap(self.as_interval(), other.as_interval())

    def contains(self, time: str) -> bool:
        """Check if a time falls inside the window, both boundaries included."""
        return self.start_minutes <= to_minutes(time) <= self.end_minutes

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class ScheduleEntry:
    """A weekly recurring availability window for one staff member."""
    employee_id: str
    day_of_week: Weekday
    start_time: str
    end_time: str
    branch_id: Optional[str] = None
    notes: str = ""

    def __post_init__(self):
        object.__setattr__(self, "day_of_week", Weekday.parse(self.day_of_week))
        TimeWindow(start=self.start_time, end=self.end_time)

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(start=self.start_time, end=self.end_time)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ScheduleEntry":
        """Build from a schedule document (``employeeId``, ``dayOfWeek``, ...)."""
        return cls(
            employee_id=str(data["employeeId"]),
            day_of_week=Weekday.parse(data["dayOfWeek"]),
            start_time=data["startTime"],
            end_time=data["endTime"],
            branch_id=data.get("branchId"),
            notes=data.get("notes") or "",
        )


class LeaveStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"
    CANCELLED = "cancelled"

    @classmethod
    def _missing_(cls, value):
        # Accept "Approved" as well as "approved"
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        return None


class LeaveType(Enum):
    PERSONAL = "personal"
    SICK = "sick"
    VACATION = "vacation"
    EMERGENCY = "emergency"
    OTHER = "other"


@dataclass(frozen=True)
class HistoryEntry:
    """One audit line on a leave request."""
    action: str
    by: Optional[str]
    timestamp: str
    notes: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HistoryEntry":
        return cls(
            action=data["action"],
            by=data.get("by"),
            timestamp=str(data.get("timestamp", "")),
            notes=data.get("notes") or "",
        )


def _parse_timestamp(value: Any) -> Optional[DateTime]:
    """Read a stored timestamp: ISO string, datetime, or ``{"seconds": ...}``."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return pendulum.instance(value)
    if isinstance(value, Mapping) and "seconds" in value:
        return pendulum.from_timestamp(value["seconds"])
    if isinstance(value, str):
        parsed = pendulum.parse(value)
        if isinstance(parsed, DateTime):
            return parsed
    raise InvalidDate(f"Invalid timestamp {value!r}")


@dataclass(frozen=True)
class LeaveRequest:
    """
    A staff member's request to be away for an inclusive range of days.

    Leave carries no time-of-day fields, so an approved request always
    covers whole days.
    """
    id: str
    employee_id: str
    start_date: date
    end_date: date
    leave_type: LeaveType = LeaveType.PERSONAL
    status: LeaveStatus = LeaveStatus.PENDING
    reason: str = ""
    notes: str = ""
    branch_id: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[DateTime] = None
    denied_reason: str = ""
    history: Tuple[HistoryEntry, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "start_date", parse_date(self.start_date))
        object.__setattr__(self, "end_date", parse_date(self.end_date))
        object.__setattr__(self, "leave_type", LeaveType(self.leave_type))
        object.__setattr__(self, "status", LeaveStatus(self.status))
        object.__setattr__(self, "history", tuple(self.history))

        if self.start_date > self.end_date:
            raise InvalidDate(
                f"Leave start date {self.start_date} is after end date {self.end_date}"
            )

    def covers(self, day: date) -> bool:
        """Check if a calendar date falls within the leave, both ends included."""
        return self.start_date <= parse_date(day) <= self.end_date

    def overlaps(self, other: "LeaveRequest") -> bool:
        """Check if two leave ranges share at least one day."""
        return self.start_date <= other.end_date and other.start_date <= self.end_date

    def duration_days(self) -> int:
        """Number of calendar days covered, counting both ends."""
        return (self.end_date - self.start_date).days + 1

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LeaveRequest":
        """Build from a leave request document."""
        return cls(
            id=str(data["id"]),
            employee_id=str(data["employeeId"]),
            start_date=data["startDate"],
            end_date=data["endDate"],
            leave_type=LeaveType(data.get("leaveType") or "personal"),
            status=LeaveStatus(str(data.get("status") or "pending")),
            reason=data.get("reason") or "",
            notes=data.get("notes") or "",
            branch_id=data.get("branchId"),
            approved_by=data.get("approvedBy"),
            approved_at=_parse_timestamp(data.get("approvedAt")),
            denied_reason=data.get("deniedReason") or "",
            history=tuple(
                HistoryEntry.from_dict(item) for item in data.get("history") or []
            ),
        )


class AppointmentStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_SERVICE = "in_service"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class StaffAssignment:
    """A service performed by one staff member within an appointment."""
    staff_id: str
    service_id: str
    duration: int  # minutes

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StaffAssignment":
        return cls(
            staff_id=str(data["staffId"]),
            service_id=str(data.get("serviceId", "")),
            duration=int(data.get("duration") or 0),
        )


@dataclass(frozen=True)
class Appointment:
    """A client booking at a branch, possibly spanning several staff members."""
    id: str
    client_id: str
    branch_id: str
    appointment_date: date
    appointment_time: str
    staff_assignments: Tuple[StaffAssignment, ...] = ()
    status: AppointmentStatus = AppointmentStatus.PENDING

    def __post_init__(self):
        object.__setattr__(self, "appointment_date", parse_date(self.appointment_date))
        object.__setattr__(self, "staff_assignments", tuple(self.staff_assignments))
        object.__setattr__(self, "status", AppointmentStatus(self.status))
        to_minutes(self.appointment_time)

    def is_active(self) -> bool:
        """Completed and cancelled appointments no longer hold a slot."""
        return self.status not in (AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED)

    def involves(self, staff_id: str) -> bool:
        return any(a.staff_id == staff_id for a in self.staff_assignments)

    def busy_interval_for(self, staff_id: str) -> Optional[Interval]:
        """
        Minutes the given staff member is occupied by this appointment.

        Returns None if the staff member has no assignment with a positive
        duration. The interval never runs past midnight.
        """
        total = sum(
            a.duration for a in self.staff_assignments if a.staff_id == staff_id
        )
        if total <= 0:
            return None

        start = to_minutes(self.appointment_time)
        return (start, min(start + total, MINUTES_PER_DAY))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Appointment":
        """Build from an appointment document."""
        return cls(
            id=str(data["id"]),
            client_id=str(data.get("clientId", "")),
            branch_id=str(data.get("branchId", "")),
            appointment_date=data["appointmentDate"],
            appointment_time=data["appointmentTime"],
            staff_assignments=tuple(
                StaffAssignment.from_dict(item)
                for item in data.get("staffAssignments") or []
            ),
            status=AppointmentStatus(data.get("status") or "pending"),
        )


@dataclass(frozen=True)
class Slot:
    """A bookable interval inside a staff member's window."""
    start: str
    end: str
    duration: int

    def as_interval(self) -> Interval:
        return (to_minutes(self.start), to_minutes(self.end))

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class EffectiveAvailability:
    """A day's availability for one staff member after approved leave."""
    employee_id: str
    date: date
    windows: Tuple[TimeWindow, ...] = field(default_factory=tuple)

    @property
    def is_available(self) -> bool:
        return bool(self.windows)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "employeeId": self.employee_id,
            "date": self.date.isoformat(),
            "windows": [{"start": w.start, "end": w.end} for w in self.windows],
        }
