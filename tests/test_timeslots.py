# ================================
# TIME SLOT HELPER TESTS (test_timeslots.py)
# ================================

import pytest

from societyhub.utils.timeslots import (
    is_valid_time,
    to_minutes,
    duration_hours,
    intervals_overlap,
    within_hours,
    generate_available_slots,
)


class TestTimeParsing:

    def test_valid_times(self):
        assert is_valid_time("00:00")
        assert is_valid_time("23:59")
        assert not is_valid_time("24:00")
        assert not is_valid_time("9:00")
        assert not is_valid_time("")

    def test_to_minutes(self):
        assert to_minutes("06:30") == 390

    def test_to_minutes_rejects_garbage(self):
        with pytest.raises(ValueError):
            to_minutes("noon")

    def test_duration_uses_whole_hours(self):
        assert duration_hours("10:00", "12:00") == 2
        assert duration_hours("10:30", "12:15") == 2


class TestIntervals:

    def test_touching_intervals_do_not_overlap(self):
        assert not intervals_overlap("10:00", "12:00", "12:00", "13:00")
        assert not intervals_overlap("12:00", "13:00", "10:00", "12:00")

    def test_partial_and_nested_overlap(self):
        assert intervals_overlap("10:00", "12:00", "11:00", "13:00")
        assert intervals_overlap("10:00", "14:00", "11:00", "12:00")

    def test_within_hours(self):
        assert within_hours("06:00", "22:00", "06:00", "22:00")
        assert not within_hours("05:00", "07:00", "06:00", "22:00")
        assert not within_hours("21:00", "23:00", "06:00", "22:00")


class TestAvailableSlots:

    def test_hourly_slots_without_bookings(self):
        slots = generate_available_slots("09:00", "12:00", 1, [])

        assert slots == [
            {"start_time": "09:00", "end_time": "10:00"},
            {"start_time": "10:00", "end_time": "11:00"},
            {"start_time": "11:00", "end_time": "12:00"},
        ]

    def test_booked_interval_removes_overlapping_slots(self):
        slots = generate_available_slots("09:00", "13:00", 1, [("10:00", "12:00")])

        assert [s["start_time"] for s in slots] == ["09:00", "12:00"]

    def test_slot_never_passes_closing_time(self):
        slots = generate_available_slots("09:00", "12:00", 2, [])

        assert slots == [{"start_time": "09:00", "end_time": "11:00"}]

    def test_partial_closing_hour(self):
        slots = generate_available_slots("09:00", "10:30", 1, [])

        assert slots == [{"start_time": "09:00", "end_time": "10:00"}]
