# backend/salon_booking/services/scheduling/overlap.py
"""
Overlap detection against existing active reservations.

The same check serves staff, user and pool scopes; callers decide which
reservations are passed in.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from .time_of_day import Interval, TimeOfDay

ACTIVE_STATUSES = ("PENDING", "CONFIRMED")


@dataclass(frozen=True)
class BookedInterval:
    """An active reservation reduced to its time footprint."""

    start: TimeOfDay
    duration: int
    reservation_id: Optional[int] = None

    @property
    def interval(self) -> Interval:
        return Interval.of(self.start, self.duration)


def find_overlap(
    candidate: Interval,
    booked: Iterable[BookedInterval],
) -> Optional[BookedInterval]:
    """First booked interval overlapping the candidate, or None."""
    for item in booked:
        if candidate.overlaps(item.interval):
            return item
    return None


def is_free(candidate: Interval, booked: Iterable[BookedInterval]) -> bool:
    return find_overlap(candidate, booked) is None
