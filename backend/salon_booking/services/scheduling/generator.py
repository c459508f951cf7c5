# backend/salon_booking/services/scheduling/generator.py
"""
Candidate start times for one day.

Steps by slot_duration from open_time; the last candidate is the latest
start whose service still ends by close_time.
"""

from .time_of_day import TimeOfDay


def generate_slots(
    open_time: TimeOfDay,
    close_time: TimeOfDay,
    slot_duration: int,
    menu_duration: int,
) -> list[TimeOfDay]:
    """
    Ordered candidate start times.

    09:00–18:00, step 30, 60-minute menu → 09:00 … 17:00 (17:30 would end at 18:30).
    A menu longer than the opening window yields [].
    """
    if slot_duration <= 0:
        raise ValueError(f"slot_duration must be positive, got {slot_duration}")

    last_start = close_time.minutes - menu_duration
    return [
        TimeOfDay(t)
        for t in range(open_time.minutes, last_start + 1, slot_duration)
    ]
