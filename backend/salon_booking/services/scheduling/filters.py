# backend/salon_booking/services/scheduling/filters.py
"""
Availability filters applied on top of generated slots.

✓ Closed days (store-wide, whole day)
✓ Blocked time slots (store-wide, absolute datetimes)
✓ Staff shift rules (only with shift management enabled)
✓ Staff vacations (only with shift management enabled)

Blocked-time check looks at the slot START instant only: a slot starting
just before a block still passes even if the service runs into it.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Sequence

from .config import WEEKDAY_NAMES
from .time_of_day import Interval, TimeOfDay


@dataclass(frozen=True)
class BlockedWindow:
    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end

    def touches(self, day: date) -> bool:
        return self.start.date() <= day <= self.end.date()


@dataclass(frozen=True)
class ShiftRule:
    day_of_week: int  # date.weekday()
    start: TimeOfDay
    end: TimeOfDay
    is_active: bool = True

    @property
    def window(self) -> Interval:
        return Interval(self.start, self.end)


@dataclass(frozen=True)
class Vacation:
    start_date: date
    end_date: date

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class StaffCalendar:
    """Shift rules and vacations of one active staff member."""

    staff_id: int
    shifts: tuple[ShiftRule, ...] = field(default_factory=tuple)
    vacations: tuple[Vacation, ...] = field(default_factory=tuple)

    def is_eligible(self, day: date) -> bool:
        """Has an active shift on that weekday and is not on vacation."""
        if is_on_vacation(self.vacations, day):
            return False
        return any(
            rule.is_active and rule.day_of_week == day.weekday()
            for rule in self.shifts
        )

    def covers(self, day: date, interval: Interval) -> bool:
        return not is_on_vacation(self.vacations, day) and fits_shift(self.shifts, day, interval)


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[day.weekday()]


def is_closed_day(day: date, closed_days: Iterable[str]) -> bool:
    return weekday_name(day) in set(closed_days)


def blocks_for_day(blocks: Iterable[BlockedWindow], day: date) -> list[BlockedWindow]:
    return [b for b in blocks if b.touches(day)]


def is_blocked(day: date, start: TimeOfDay, blocks: Sequence[BlockedWindow]) -> bool:
    """Slot start instant lies inside [block.start, block.end) of any block."""
    instant = start.on(day)
    return any(b.contains(instant) for b in blocks)


def fits_shift(shifts: Sequence[ShiftRule], day: date, interval: Interval) -> bool:
    """
    Some active rule for the weekday fully contains the interval.

    No rules at all → False (fail-closed).
    """
    weekday = day.weekday()
    return any(
        rule.is_active and rule.day_of_week == weekday and interval.within(rule.window)
        for rule in shifts
    )


def is_on_vacation(vacations: Sequence[Vacation], day: date) -> bool:
    return any(v.covers(day) for v in vacations)
