# backend/salon_booking/services/scheduling/availability.py
"""
Slot availability for one day (read path).

Works on a SchedulingSnapshot: one read of settings, flags, blocked windows,
active staff calendars and active reservations for the date. Nothing here
writes or locks; a slot shown as available may still be taken by the time
it is booked, the write path re-checks.

Takes into account:
- Store hours and slot grid
- Closed days and blocked time slots
- Staff shifts and vacations (shift management enabled)
- Existing active reservations per staff member / pool
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Optional

from sqlalchemy.orm import Session

from ...errors import MenuNotFound, SettingsNotFound, StaffNotFound
from . import queries
from .config import SchedulingFlags, StoreSchedule
from .filters import (
    BlockedWindow,
    StaffCalendar,
    blocks_for_day,
    is_blocked,
    is_closed_day,
)
from .generator import generate_slots
from .overlap import BookedInterval, is_free
from .resources import POOL, Assigned, Resource, resource_for
from .time_of_day import Interval, TimeOfDay


@dataclass(frozen=True)
class SlotResult:
    time: TimeOfDay
    available: bool
    staff_id: Optional[int] = None

    def to_dict(self) -> dict:
        data = {"time": str(self.time), "available": self.available}
        if self.staff_id is not None:
            data["staffId"] = self.staff_id
        return data


@dataclass(frozen=True)
class SchedulingSnapshot:
    day: date
    schedule: StoreSchedule
    flags: SchedulingFlags = field(default_factory=SchedulingFlags)
    blocks: tuple[BlockedWindow, ...] = ()
    staff: tuple[StaffCalendar, ...] = ()  # active staff, ascending id
    booked: Mapping[Resource, tuple[BookedInterval, ...]] = field(default_factory=dict)

    @property
    def is_closed(self) -> bool:
        return is_closed_day(self.day, self.schedule.closed_days)

    def booked_for(self, resource: Resource) -> tuple[BookedInterval, ...]:
        return self.booked.get(resource, ())

    def calendar(self, staff_id: int) -> Optional[StaffCalendar]:
        for cal in self.staff:
            if cal.staff_id == staff_id:
                return cal
        return None

    def eligible_staff(self) -> list[StaffCalendar]:
        """Active staff who may work on the day (all of them without shift management)."""
        if not self.flags.enable_staff_shift_management:
            return list(self.staff)
        return [cal for cal in self.staff if cal.is_eligible(self.day)]

    def staff_covers(self, cal: StaffCalendar, interval: Interval) -> bool:
        if not self.flags.enable_staff_shift_management:
            return True
        return cal.covers(self.day, interval)

    def candidates(self, menu_duration: int) -> list[TimeOfDay]:
        if self.is_closed:
            return []
        return generate_slots(
            self.schedule.open_time,
            self.schedule.close_time,
            self.schedule.slot_duration,
            menu_duration,
        )

    def is_blocked(self, start: TimeOfDay) -> bool:
        return is_blocked(self.day, start, self.blocks)


# ── Snapshot ─────────────────────────────────────────────────────────────


def load_snapshot(db: Session, tenant_id: str, target_date: date) -> SchedulingSnapshot:
    settings_row = queries.get_store_settings(db, tenant_id)
    if not settings_row:
        raise SettingsNotFound()

    schedule = StoreSchedule.from_row(settings_row)
    flags = SchedulingFlags.from_row(queries.get_feature_flags(db, tenant_id))
    blocks = blocks_for_day(queries.get_blocked_windows(db, tenant_id, target_date), target_date)
    staff = queries.get_staff_calendars(db, tenant_id)

    booked: dict[Resource, list[BookedInterval]] = {}
    for staff_id, item in queries.get_active_reservations(db, tenant_id, target_date):
        booked.setdefault(resource_for(staff_id), []).append(item)

    return SchedulingSnapshot(
        day=target_date,
        schedule=schedule,
        flags=flags,
        blocks=tuple(blocks),
        staff=tuple(staff),
        booked={k: tuple(v) for k, v in booked.items()},
    )


# ── Questions about staff ────────────────────────────────────────────────


def is_staff_free(
    snapshot: SchedulingSnapshot,
    staff_id: int,
    start: TimeOfDay,
    duration: int,
) -> bool:
    """Active, on shift (if managed), not on vacation, no overlapping booking."""
    cal = snapshot.calendar(staff_id)
    if cal is None:
        return False
    interval = Interval.of(start, duration)
    if not snapshot.staff_covers(cal, interval):
        return False
    return is_free(interval, snapshot.booked_for(Assigned(staff_id)))


def free_staff_at(
    snapshot: SchedulingSnapshot,
    start: TimeOfDay,
    duration: int,
) -> list[int]:
    """Ids of staff free at start, in ascending id order."""
    return [
        cal.staff_id
        for cal in snapshot.eligible_staff()
        if is_staff_free(snapshot, cal.staff_id, start, duration)
    ]


# ── Slot lists ───────────────────────────────────────────────────────────


def slots_for_staff(
    snapshot: SchedulingSnapshot,
    staff_id: int,
    menu_duration: int,
) -> list[SlotResult]:
    """Every candidate slot for one staff member, each marked available or not."""
    results = []
    for start in snapshot.candidates(menu_duration):
        available = (
            not snapshot.is_blocked(start)
            and is_staff_free(snapshot, staff_id, start, menu_duration)
        )
        results.append(SlotResult(time=start, available=available, staff_id=staff_id))
    return results


def slots_across_staff(
    snapshot: SchedulingSnapshot,
    menu_duration: int,
) -> list[SlotResult]:
    """
    Every candidate slot with the first free staff member attached.

    No active staff at all → pool scheduling: available unless blocked or
    taken by another pool reservation. Active staff exist but nobody is
    eligible for the day → nothing is available.
    """
    candidates = snapshot.candidates(menu_duration)

    if not snapshot.staff:
        pool_booked = snapshot.booked_for(POOL)
        return [
            SlotResult(
                time=start,
                available=(
                    not snapshot.is_blocked(start)
                    and is_free(Interval.of(start, menu_duration), pool_booked)
                ),
            )
            for start in candidates
        ]

    eligible = snapshot.eligible_staff()
    results = []
    for start in candidates:
        chosen = None
        if not snapshot.is_blocked(start):
            for cal in eligible:
                if is_staff_free(snapshot, cal.staff_id, start, menu_duration):
                    chosen = cal.staff_id
                    break
        results.append(SlotResult(time=start, available=chosen is not None, staff_id=chosen))
    return results


# ── Entry point ──────────────────────────────────────────────────────────


def calculate_available_slots(
    db: Session,
    tenant_id: str,
    target_date: date,
    menu_id: int,
    staff_id: Optional[int] = None,
) -> dict:
    """
    Available slots for a menu on a date.

    Returns:
        {"date": "YYYY-MM-DD", "slots": [{"time", "available", "staffId"?}, ...]}
    """
    snapshot = load_snapshot(db, tenant_id, target_date)

    menu = queries.get_active_menu(db, tenant_id, menu_id)
    if not menu:
        raise MenuNotFound()

    if staff_id is not None:
        if not queries.get_active_staff_member(db, tenant_id, staff_id):
            raise StaffNotFound()
        slots = slots_for_staff(snapshot, staff_id, menu.duration)
    else:
        slots = slots_across_staff(snapshot, menu.duration)

    return {
        "date": target_date.isoformat(),
        "slots": [s.to_dict() for s in slots],
    }
