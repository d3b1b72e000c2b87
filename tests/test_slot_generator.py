"""
Tests for slot generator.
"""

import pytest

from salonslots.domain.exceptions import InvalidDuration
from salonslots.domain.models import Slot, TimeWindow
from salonslots.domain.slot_generator import SlotGenerator, generate_slots


class TestSlotGenerator:
    """Tests for SlotGenerator."""

    def test_monday_morning_half_hour_slots(self):
        """09:00-12:00 in 30 minute steps gives six back-to-back slots."""
        slots = generate_slots([TimeWindow("09:00", "12:00")], 30)

        assert [str(s) for s in slots] == [
            "09:00-09:30",
            "09:30-10:00",
            "10:00-10:30",
            "10:30-11:00",
            "11:00-11:30",
            "11:30-12:00",
        ]
        assert all(s.duration == 30 for s in slots)

    @pytest.mark.parametrize("duration", [5, 15, 20, 45, 60, 90, 180])
    def test_even_division_has_no_gaps_or_overlaps(self, duration):
        window = TimeWindow("09:00", "12:00")
        slots = generate_slots([window], duration)

        assert len(slots) == window.duration_minutes() // duration
        assert slots[0].start == window.start
        assert slots[-1].end == window.end
        for previous, current in zip(slots, slots[1:]):
            assert previous.end == current.start

    def test_trailing_slot_is_clipped_not_dropped(self):
        slots = generate_slots([TimeWindow("09:00", "10:15")], 30)

        assert slots[-1] == Slot(start="10:00", end="10:15", duration=15)
        assert len(slots) == 3

    def test_window_shorter_than_duration(self):
        slots = generate_slots([TimeWindow("09:00", "09:20")], 30)
        assert slots == [Slot(start="09:00", end="09:20", duration=20)]

    def test_multiple_windows_concatenated_without_gap_filling(self):
        slots = generate_slots(
            [TimeWindow("09:00", "10:00"), TimeWindow("13:00", "14:00")], 30
        )

        assert [s.start for s in slots] == ["09:00", "09:30", "13:00", "13:30"]

    def test_no_windows_no_slots(self):
        assert generate_slots([], 30) == []

    @pytest.mark.parametrize("duration", [0, -15, 1.5, "30", True])
    def test_invalid_duration(self, duration):
        with pytest.raises(InvalidDuration):
            generate_slots([TimeWindow("09:00", "12:00")], duration)

    def test_default_duration_used(self):
        generator = SlotGenerator(default_duration_minutes=60)
        slots = generator.generate_slots([TimeWindow("09:00", "12:00")])

        assert len(slots) == 3

    def test_invalid_default_duration(self):
        with pytest.raises(InvalidDuration):
            SlotGenerator(default_duration_minutes=0)


class TestExcludeBusy:
    """Tests for removing taken slots."""

    def test_removes_overlapping_slots_only(self):
        slots = generate_slots([TimeWindow("09:00", "11:00")], 30)

        free = SlotGenerator.exclude_busy(slots, [(570, 620)])  # 09:30-10:20

        assert [str(s) for s in free] == ["09:00-09:30", "10:30-11:00"]

    def test_touching_busy_interval_keeps_slot(self):
        slots = generate_slots([TimeWindow("09:00", "10:00")], 30)

        free = SlotGenerator.exclude_busy(slots, [(600, 660)])  # 10:00-11:00

        assert len(free) == 2
