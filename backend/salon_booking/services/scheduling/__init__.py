# backend/salon_booking/services/scheduling/__init__.py
"""
Scheduling engine.

Read path: available slots for a date/menu (snapshot, no locks)
Write path: reservation create/update/cancel under per-scope locks
"""

from .availability import SchedulingSnapshot, calculate_available_slots, load_snapshot
from .assigner import assign_staff
from .resources import POOL, Assigned, Pool, Resource, resource_for
from .time_of_day import Interval, TimeOfDay, is_valid_time
from .transaction import (
    STATUS_TRANSITIONS,
    ReservationChanges,
    ReservationRequest,
    ReservationTransactionManager,
)

__all__ = [
    "SchedulingSnapshot",
    "calculate_available_slots",
    "load_snapshot",
    "assign_staff",
    "POOL",
    "Assigned",
    "Pool",
    "Resource",
    "resource_for",
    "Interval",
    "TimeOfDay",
    "is_valid_time",
    "STATUS_TRANSITIONS",
    "ReservationChanges",
    "ReservationRequest",
    "ReservationTransactionManager",
]
