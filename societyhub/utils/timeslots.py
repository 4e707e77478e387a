# ================================
# TIME SLOT HELPERS (utils/timeslots.py)
# ================================

"""
Helpers for "HH:MM" wall-clock strings used by amenity timings and bookings.

Intervals are half-open: [start, end). Two bookings that merely touch
(one ends when the next starts) do not overlap.
"""

from typing import List, Dict, Iterable, Tuple
import re

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

def is_valid_time(value: str) -> bool:
    return bool(value) and _TIME_PATTERN.match(value) is not None

def to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight"""
    match = _TIME_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"Invalid time format: {value!r} (expected HH:MM)")
    return int(match.group(1)) * 60 + int(match.group(2))

def hour_of(value: str) -> int:
    return to_minutes(value) // 60

def format_hour(hour: int) -> str:
    return f"{hour:02d}:00"

def duration_hours(start_time: str, end_time: str) -> int:
    """Whole hours between the start hour and the end hour"""
    return hour_of(end_time) - hour_of(start_time)

def intervals_overlap(start_a: str, end_a: str, start_b: str, end_b: str) -> bool:
    return to_minutes(start_a) < to_minutes(end_b) and to_minutes(start_b) < to_minutes(end_a)

def within_hours(start_time: str, end_time: str, open_time: str, close_time: str) -> bool:
    return (
        to_minutes(start_time) >= to_minutes(open_time)
        and to_minutes(end_time) <= to_minutes(close_time)
    )

def generate_available_slots(
    open_time: str,
    close_time: str,
    slot_interval: int,
    booked: Iterable[Tuple[str, str]]
) -> List[Dict[str, str]]:
    """
    Step from the opening hour in slot_interval-hour increments and emit every
    "HH:00" slot that ends by closing time and does not overlap a booked interval.
    """
    step = max(int(slot_interval or 1), 1)
    close_minutes = to_minutes(close_time)
    booked = list(booked)

    slots = []
    hour = hour_of(open_time)
    while (hour + step) * 60 <= close_minutes:
        end_hour = hour + step
        slot_start = format_hour(hour)
        slot_end = format_hour(end_hour)

        taken = any(
            intervals_overlap(slot_start, slot_end, start, end)
            for start, end in booked
        )
        if not taken:
            slots.append({"start_time": slot_start, "end_time": slot_end})

        hour = end_hour

    return slots
