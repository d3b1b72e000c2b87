"""
Splits availability windows into fixed-duration bookable slots.

This is pure domain logic without any external dependencies (no database,
no I/O).
"""

from typing import Iterable, List, Sequence

from .exceptions import InvalidDuration
from .models import Slot, TimeWindow
from .timemath import Interval, intervals_overlap, to_time_string


class SlotGenerator:
    """
    Generates bookable slots from a staff member's windows.

    Algorithm:
    1. Walk each window from its start in steps of the slot duration
    2. Clip the last slot of a window to the window end (short slot kept)
    3. Concatenate windows in the order given, without merging or gap filling
    """

    def __init__(self, default_duration_minutes: int = 30):
        self.default_duration_minutes = self._validate_duration(default_duration_minutes)

    def generate_slots(
        self,
        windows: Sequence[TimeWindow],
        slot_duration_minutes: "int | None" = None
    ) -> List[Slot]:
        """
        Decompose windows into slots.

        Args:
            windows: Ordered windows for one staff member and date
            slot_duration_minutes: Slot length; defaults to the generator's default

        Returns:
            List of Slot objects in window order

        Raises:
            InvalidDuration: If the duration is not a positive integer
        """
        if slot_duration_minutes is None:
            duration = self.default_duration_minutes
        else:
            duration = self._validate_duration(slot_duration_minutes)

        slots: List[Slot] = []

        for window in windows:
            current = window.start_minutes
            window_end = window.end_minutes

            while current < window_end:
                slot_end = min(current + duration, window_end)
                slots.append(
                    Slot(
                        start=to_time_string(current),
                        end=to_time_string(slot_end),
                        duration=slot_end - current,
                    )
                )
                current += duration

        return slots

    @staticmethod
    def exclude_busy(
        slots: Iterable[Slot],
        busy_intervals: Iterable[Interval]
    ) -> List[Slot]:
        """
        Drop slots that overlap any busy interval.

        Example:
        Slots: [09:00-09:30, 09:30-10:00, 10:00-10:30]
        Busy: [09:30-10:00]
        Result: [09:00-09:30, 10:00-10:30]
        """
        busy = list(busy_intervals)
        return [
            slot for slot in slots
            if not any(intervals_overlap(slot.as_interval(), b) for b in busy)
        ]

    @staticmethod
    def _validate_duration(value) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidDuration(
                f"Slot duration must be a positive number of minutes, got {value!r}"
            )
        return value


def generate_slots(windows: Sequence[TimeWindow], slot_duration_minutes: int) -> List[Slot]:
    """Module-level shortcut for ``SlotGenerator().generate_slots``."""
    return SlotGenerator().generate_slots(windows, slot_duration_minutes)
