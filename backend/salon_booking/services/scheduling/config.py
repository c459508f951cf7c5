# backend/salon_booking/services/scheduling/config.py
"""
Store schedule and feature switches as seen by the scheduling engine.
"""

import json
import logging
from dataclasses import dataclass, field

from .time_of_day import TimeOfDay

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)


@dataclass(frozen=True)
class StoreSchedule:
    """
    Operating hours of one tenant.

    Attributes:
        open_time: First possible start (store-local wall clock)
        close_time: Every slot must end by this time
        slot_duration: Grid step in minutes
        closed_days: Weekday names on which nothing is bookable
        cancellation_deadline_hours: Customers may cancel until this many
            hours before the start
    """
    open_time: TimeOfDay
    close_time: TimeOfDay
    slot_duration: int = 30
    closed_days: frozenset[str] = field(default_factory=frozenset)
    cancellation_deadline_hours: int = 24

    def __post_init__(self):
        if self.slot_duration <= 0:
            raise ValueError(f"slot_duration must be positive, got {self.slot_duration}")

    @classmethod
    def from_row(cls, row) -> "StoreSchedule":
        """Build from a store_settings row."""
        try:
            closed = json.loads(row.closed_days) if row.closed_days else []
        except json.JSONDecodeError:
            logger.warning(f"Unreadable closed_days {row.closed_days!r}, treating store as open every day")
            closed = []
        return cls(
            open_time=TimeOfDay.parse(row.open_time),
            close_time=TimeOfDay.parse(row.close_time),
            slot_duration=row.slot_duration,
            closed_days=frozenset(closed),
            cancellation_deadline_hours=(
                24 if row.cancellation_deadline_hours is None else row.cancellation_deadline_hours
            ),
        )


@dataclass(frozen=True)
class SchedulingFlags:
    enable_staff_selection: bool = False
    enable_staff_shift_management: bool = False

    @classmethod
    def from_row(cls, row) -> "SchedulingFlags":
        """Missing row → everything off."""
        if row is None:
            return cls()
        return cls(
            enable_staff_selection=bool(row.enable_staff_selection),
            enable_staff_shift_management=bool(row.enable_staff_shift_management),
        )
