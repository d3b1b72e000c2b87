"""
Lifecycle rules for appointments and leave requests.

Both lifecycles share one ``StateMachine`` implementation; each has its own
transition table. The functions here only decide whether a change is legal
and return the updated record. Writing it back is the caller's job.
"""

import logging
from dataclasses import replace
from enum import Enum
from typing import Dict, FrozenSet, Generic, Mapping, Optional, TypeVar

import pendulum
from pendulum import DateTime

from .exceptions import IllegalTransition
from .models import (
    Appointment,
    AppointmentStatus,
    HistoryEntry,
    LeaveRequest,
    LeaveStatus,
)

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=Enum)


class StateMachine(Generic[S]):
    """
    A finite state machine over an enum of statuses.

    States without outgoing transitions are terminal.
    """

    def __init__(self, name: str, transitions: Mapping[S, FrozenSet[S]]):
        self.name = name
        self._transitions: Dict[S, FrozenSet[S]] = {
            state: frozenset(targets) for state, targets in transitions.items()
        }

    def allowed_transitions(self, state: S) -> FrozenSet[S]:
        return self._transitions.get(state, frozenset())

    def can_transition(self, current: S, target: S) -> bool:
        return target in self.allowed_transitions(current)

    def is_terminal(self, state: S) -> bool:
        return not self.allowed_transitions(state)

    def validate(self, current: S, target: S) -> None:
        """
        Raises:
            IllegalTransition: If ``current -> target`` is not in the table
        """
        if self.can_transition(current, target):
            return

        if self.is_terminal(current):
            raise IllegalTransition(
                f"{self.name} is {current.value}; no further changes are allowed"
            )
        allowed = ", ".join(sorted(s.value for s in self.allowed_transitions(current)))
        raise IllegalTransition(
            f"{self.name} cannot move from {current.value} to {target.value} "
            f"(allowed: {allowed})"
        )


APPOINTMENT_LIFECYCLE: StateMachine[AppointmentStatus] = StateMachine(
    "Appointment",
    {
        AppointmentStatus.PENDING: frozenset(
            {AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED}
        ),
        AppointmentStatus.CONFIRMED: frozenset(
            {AppointmentStatus.IN_SERVICE, AppointmentStatus.CANCELLED}
        ),
        # Service already rendered; no cancelling from here
        AppointmentStatus.IN_SERVICE: frozenset({AppointmentStatus.COMPLETED}),
        AppointmentStatus.COMPLETED: frozenset(),
        AppointmentStatus.CANCELLED: frozenset(),
    },
)

LEAVE_LIFECYCLE: StateMachine[LeaveStatus] = StateMachine(
    "Leave request",
    {
        LeaveStatus.PENDING: frozenset(
            {LeaveStatus.APPROVED, LeaveStatus.DENIED, LeaveStatus.CANCELLED}
        ),
        LeaveStatus.APPROVED: frozenset(),
        LeaveStatus.DENIED: frozenset(),
        LeaveStatus.CANCELLED: frozenset(),
    },
)


def transition_appointment(
    appointment: Appointment,
    new_status: "AppointmentStatus | str",
) -> Appointment:
    """Return the appointment moved to ``new_status`` if the move is legal."""
    try:
        target = AppointmentStatus(new_status)
    except ValueError as exc:
        raise IllegalTransition(
            f"Appointment cannot move to unknown status {new_status!r}"
        ) from exc
    APPOINTMENT_LIFECYCLE.validate(appointment.status, target)

    logger.debug(
        "Appointment %s: %s -> %s", appointment.id, appointment.status.value, target.value
    )
    return replace(appointment, status=target)


def _history(action: str, by: Optional[str], at: DateTime, notes: str) -> HistoryEntry:
    return HistoryEntry(action=action, by=by, timestamp=at.to_iso8601_string(), notes=notes)


def approve_leave(
    leave: LeaveRequest,
    approver: str,
    notes: str = "",
    at: Optional[DateTime] = None,
) -> LeaveRequest:
    """Approve a pending leave request, recording who approved it and when."""
    LEAVE_LIFECYCLE.validate(leave.status, LeaveStatus.APPROVED)
    if not approver:
        raise IllegalTransition("Approving a leave request requires an approver")

    at = at or pendulum.now("UTC")
    return replace(
        leave,
        status=LeaveStatus.APPROVED,
        approved_by=approver,
        approved_at=at,
        history=leave.history + (
            _history("approved", approver, at, notes or "Leave request approved"),
        ),
    )


def deny_leave(
    leave: LeaveRequest,
    actor: str,
    reason: str,
    notes: str = "",
    at: Optional[DateTime] = None,
) -> LeaveRequest:
    """Deny a pending leave request. A non-blank reason is mandatory."""
    LEAVE_LIFECYCLE.validate(leave.status, LeaveStatus.DENIED)
    if not reason or not reason.strip():
        raise IllegalTransition("Denying a leave request requires a reason")

    at = at or pendulum.now("UTC")
    return replace(
        leave,
        status=LeaveStatus.DENIED,
        approved_by=actor,
        denied_reason=reason.strip(),
        history=leave.history + (
            _history("denied", actor, at, notes or "Leave request denied"),
        ),
    )


def cancel_leave(
    leave: LeaveRequest,
    actor: str,
    notes: str = "",
    at: Optional[DateTime] = None,
) -> LeaveRequest:
    """Withdraw a leave request before a manager has acted on it."""
    LEAVE_LIFECYCLE.validate(leave.status, LeaveStatus.CANCELLED)

    at = at or pendulum.now("UTC")
    return replace(
        leave,
        status=LeaveStatus.CANCELLED,
        history=leave.history + (
            _history("cancelled", actor, at, notes or "Leave request cancelled"),
        ),
    )


def apply_leave_action(
    leave: LeaveRequest,
    action: str,
    actor: str,
    notes: str = "",
    reason: str = "",
    at: Optional[DateTime] = None,
) -> LeaveRequest:
    """
    Apply an ``approve``, ``deny`` or ``cancel`` action from the approval screen.

    Raises:
        IllegalTransition: If the action is unknown or not allowed
    """
    action_key = action.strip().lower()

    if action_key == "approve":
        return approve_leave(leave, actor, notes=notes, at=at)
    if action_key == "deny":
        return deny_leave(leave, actor, reason, notes=notes, at=at)
    if action_key == "cancel":
        return cancel_leave(leave, actor, notes=notes, at=at)

    raise IllegalTransition(f"Unknown leave action: '{action}'")
