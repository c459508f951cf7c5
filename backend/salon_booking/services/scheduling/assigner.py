# backend/salon_booking/services/scheduling/assigner.py
"""
Automatic staff assignment.

Runs before the write transaction on a snapshot read, only to pick a
candidate cheaply. The pick is not trusted: the transaction re-checks the
chosen staff member's bookings under lock.
"""

import logging

from ...errors import NoAvailableStaffForTime, NoStaffAvailable
from .availability import SchedulingSnapshot, free_staff_at
from .time_of_day import TimeOfDay

logger = logging.getLogger(__name__)


def assign_staff(snapshot: SchedulingSnapshot, start: TimeOfDay, duration: int) -> int:
    """
    First free active staff member (ascending id) for [start, start + duration).

    Raises:
        NoStaffAvailable: no active staff at all
        NoAvailableStaffForTime: staff exist but none is free / on shift
    """
    if not snapshot.staff:
        raise NoStaffAvailable()

    free = free_staff_at(snapshot, start, duration)
    if not free:
        raise NoAvailableStaffForTime()

    logger.info(
        f"Auto-assigned staff_id={free[0]} for {snapshot.day.isoformat()} {start} "
        f"({duration} min, {len(free)} free)"
    )
    return free[0]
