"""
Applies approved leave on top of the weekly schedule for a concrete date.

Leave requests only carry a date range, so the policy works at full-day
granularity: any approved leave covering the date removes the whole day.
"""

import logging
from datetime import date
from typing import Iterable, List, Sequence, Union

from .models import EffectiveAvailability, LeaveRequest, LeaveStatus, TimeWindow
from .timemath import parse_date

logger = logging.getLogger(__name__)


class LeaveOverlayResolver:
    """Turns raw weekly windows into effective availability for one date."""

    def effective_availability(
        self,
        employee_id: str,
        day: Union[str, date],
        schedule_windows: Sequence[TimeWindow],
        approved_leaves: Iterable[LeaveRequest],
    ) -> EffectiveAvailability:
        """
        Compute the staff member's windows for ``day`` after leave.

        Args:
            employee_id: Staff member being queried
            day: Calendar date (``YYYY-MM-DD`` or date object)
            schedule_windows: That staff member's windows for the date's weekday
            approved_leaves: Leave requests to consider; anything not approved
                or belonging to another employee is ignored

        Returns:
            EffectiveAvailability with no windows if leave covers the date,
            otherwise with the schedule windows unchanged
        """
        target = parse_date(day)
        covering = self.covering_leaves(employee_id, target, approved_leaves)

        if covering:
            logger.debug(
                "Employee %s on leave %s on %s; no availability",
                employee_id,
                covering[0].id,
                target,
            )
            return EffectiveAvailability(employee_id=employee_id, date=target, windows=())

        return EffectiveAvailability(
            employee_id=employee_id,
            date=target,
            windows=tuple(schedule_windows),
        )

    @staticmethod
    def covering_leaves(
        employee_id: str,
        day: Union[str, date],
        leaves: Iterable[LeaveRequest],
    ) -> List[LeaveRequest]:
        """Approved leave of the employee whose range includes ``day``."""
        target = parse_date(day)
        return [
            leave for leave in leaves
            if leave.status is LeaveStatus.APPROVED
            and leave.employee_id == employee_id
            and leave.covers(target)
        ]


def conflicting_approved_leaves(
    candidate: LeaveRequest,
    leaves: Iterable[LeaveRequest],
) -> List[LeaveRequest]:
    """
    Approved leave of the same employee that overlaps the candidate's dates.

    A new request that overlaps approved leave should be rejected by the
    caller before it is stored.
    """
    return sorted(
        (
            leave for leave in leaves
            if leave.id != candidate.id
            and leave.employee_id == candidate.employee_id
            and leave.status is LeaveStatus.APPROVED
            and leave.overlaps(candidate)
        ),
        key=lambda leave: leave.start_date,
    )


def superseded_pending_leaves(
    approved: LeaveRequest,
    leaves: Iterable[LeaveRequest],
) -> List[LeaveRequest]:
    """
    Pending requests made redundant by an approved leave for the same days.

    The caller is expected to cancel these when it records the approval.
    """
    return sorted(
        (
            leave for leave in leaves
            if leave.id != approved.id
            and leave.employee_id == approved.employee_id
            and leave.status is LeaveStatus.PENDING
            and leave.overlaps(approved)
        ),
        key=lambda leave: leave.start_date,
    )
