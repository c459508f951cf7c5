# backend/salon_booking/services/scheduling/time_of_day.py
"""
Wall-clock time arithmetic.

Times are store-local minutes since midnight. "HH:MM" strings exist only at
the API/storage boundary; everything inside the engine compares TimeOfDay
values, never strings.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

_TIME_RE = re.compile(r"^([01][0-9]|2[0-3]):([0-5][0-9])$")


def is_valid_time(value: str) -> bool:
    """True for zero-padded "HH:MM" in 00:00..23:59."""
    return bool(_TIME_RE.match(value or ""))


def to_minutes(hhmm: str) -> int:
    """Convert "09:30" → 570. Input is assumed well-formed (validated upstream)."""
    hour, minute = hhmm.split(":")
    return int(hour) * 60 + int(minute)


def from_minutes(minutes: int) -> str:
    """Convert 570 → "09:30". Values past midnight are not wrapped."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def overlaps(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open overlap test; [9:00, 10:00) and [10:00, 11:00) do not overlap."""
    return start_a < end_b and end_a > start_b


@dataclass(frozen=True, order=True)
class TimeOfDay:
    minutes: int

    @classmethod
    def parse(cls, hhmm: str) -> "TimeOfDay":
        return cls(to_minutes(hhmm))

    def __add__(self, minutes: int) -> "TimeOfDay":
        return TimeOfDay(self.minutes + minutes)

    def __sub__(self, other: "TimeOfDay") -> int:
        return self.minutes - other.minutes

    def on(self, day: date) -> datetime:
        """Absolute (naive, store-local) datetime of this time on a date."""
        return datetime.combine(day, time.min) + timedelta(minutes=self.minutes)

    def __str__(self) -> str:
        return from_minutes(self.minutes)


@dataclass(frozen=True)
class Interval:
    """Half-open [start, end) on one day."""

    start: TimeOfDay
    end: TimeOfDay

    @classmethod
    def of(cls, start: TimeOfDay, duration_min: int) -> "Interval":
        return cls(start, start + duration_min)

    def overlaps(self, other: "Interval") -> bool:
        return overlaps(
            self.start.minutes, self.end.minutes,
            other.start.minutes, other.end.minutes,
        )

    def within(self, outer: "Interval") -> bool:
        return outer.start <= self.start and self.end <= outer.end
