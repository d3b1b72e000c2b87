"""
Lookup structure over the weekly recurring schedule of every staff member.

The index is built once per query batch from a snapshot of schedule entries
and handed to whoever needs it. It never merges, trims or drops entries: if
the snapshot contains overlapping windows they are returned as given and
reported through ``integrity_warnings``.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Tuple

from .exceptions import DataIntegrityWarning
from .models import ScheduleEntry, TimeWindow, Weekday
from .timemath import to_minutes

_Key = Tuple[str, Weekday]


class AvailabilityIndex:
    """
    Answers per-staff, per-weekday availability queries.

    Example:
        index = AvailabilityIndex(entries)
        index.windows_for("stylist-1", "Mon")  # [09:00-12:00, 13:00-18:00]
    """

    def __init__(self, entries: Iterable[ScheduleEntry] = ()):
        self._entries: Dict[_Key, List[ScheduleEntry]] = defaultdict(list)

        for entry in entries:
            self.add(entry)

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())

    def add(self, entry: ScheduleEntry) -> None:
        """Add a schedule entry, keeping the day's entries ordered by start time."""
        bucket = self._entries[(entry.employee_id, entry.day_of_week)]
        bucket.append(entry)
        bucket.sort(key=lambda e: to_minutes(e.start_time))

    def remove(self, entry: ScheduleEntry) -> bool:
        """
        Remove a schedule entry.

        Returns:
            True if the entry was present
        """
        key = (entry.employee_id, entry.day_of_week)
        bucket = self._entries.get(key)

        if not bucket or entry not in bucket:
            return False

        bucket.remove(entry)
        if not bucket:
            del self._entries[key]
        return True

    def is_available(self, employee_id: str, day_of_week: "Weekday | str") -> bool:
        """True if the staff member has at least one window on that weekday."""
        return bool(self._entries.get((employee_id, Weekday.parse(day_of_week))))

    def windows_for(
        self,
        employee_id: str,
        day_of_week: "Weekday | str"
    ) -> List[TimeWindow]:
        """All windows for the staff member on that weekday, sorted by start."""
        bucket = self._entries.get((employee_id, Weekday.parse(day_of_week)), [])
        return [entry.window for entry in bucket]

    def is_available_at(
        self,
        employee_id: str,
        day_of_week: "Weekday | str",
        time: str
    ) -> bool:
        """
        True if ``time`` falls inside any window, boundaries included.

        A booking that ends exactly at closing time is legal, so the window end
        counts as available.
        """
        # Malformed input fails even when the staff member has no windows
        to_minutes(time)
        return any(
            window.contains(time)
            for window in self.windows_for(employee_id, day_of_week)
        )

    def employees_available_on(self, day_of_week: "Weekday | str") -> List[str]:
        """Staff members with at least one window on that weekday, sorted."""
        day = Weekday.parse(day_of_week)
        return sorted(
            employee_id
            for (employee_id, weekday), bucket in self._entries.items()
            if weekday is day and bucket
        )

    def weekly_windows(self, employee_id: str) -> Dict[Weekday, List[TimeWindow]]:
        """Monday-to-Sunday grid of a staff member's windows; empty days included."""
        return {day: self.windows_for(employee_id, day) for day in Weekday}

    def integrity_warnings(self) -> List[DataIntegrityWarning]:
        """
        Report overlapping entries for the same staff member and weekday.

        Overlapping windows make slot generation emit duplicate slots, so callers
        should surface these to whoever maintains the schedule.
        """
        warnings: List[DataIntegrityWarning] = []

        for (employee_id, day), bucket in sorted(
            self._entries.items(),
            key=lambda item: (item[0][0], item[0][1].index)
        ):
            for i, first in enumerate(bucket):
                for second in bucket[i + 1:]:
                    if first.window.overlaps(second.window):
                        warnings.append(
                            DataIntegrityWarning(
                                employee_id, day, first.window, second.window
                            )
                        )

        return warnings
