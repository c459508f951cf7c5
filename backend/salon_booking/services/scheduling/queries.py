# backend/salon_booking/services/scheduling/queries.py
"""
Database reads used by the scheduling engine.

All reads are tenant-scoped. Reservation reads return BookedInterval
values (start + menu duration), restricted to active statuses.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy.orm import Session, selectinload

from ...models import (
    BlockedTimeSlots,
    FeatureFlags,
    Menus,
    Reservations,
    Staff,
    StoreSettings,
)
from .filters import BlockedWindow, ShiftRule, StaffCalendar, Vacation
from .overlap import ACTIVE_STATUSES, BookedInterval
from .resources import Resource
from .time_of_day import TimeOfDay


# ── Settings ─────────────────────────────────────────────────────────────


def get_store_settings(db: Session, tenant_id: str) -> Optional[StoreSettings]:
    return db.query(StoreSettings).filter(StoreSettings.tenant_id == tenant_id).first()


def get_feature_flags(db: Session, tenant_id: str) -> Optional[FeatureFlags]:
    return db.query(FeatureFlags).filter(FeatureFlags.tenant_id == tenant_id).first()


# ── Catalog ──────────────────────────────────────────────────────────────


def get_active_menu(db: Session, tenant_id: str, menu_id: int) -> Optional[Menus]:
    return db.query(Menus).filter(
        Menus.id == menu_id,
        Menus.tenant_id == tenant_id,
        Menus.is_active == 1,
    ).first()


def get_active_staff_member(db: Session, tenant_id: str, staff_id: int) -> Optional[Staff]:
    return db.query(Staff).filter(
        Staff.id == staff_id,
        Staff.tenant_id == tenant_id,
        Staff.is_active == 1,
    ).first()


def get_staff_calendars(db: Session, tenant_id: str) -> list[StaffCalendar]:
    """Active staff with shifts and vacations, ascending by id."""
    rows = (
        db.query(Staff)
        .options(selectinload(Staff.shifts), selectinload(Staff.vacations))
        .filter(Staff.tenant_id == tenant_id, Staff.is_active == 1)
        .order_by(Staff.id)
        .all()
    )
    return [
        StaffCalendar(
            staff_id=row.id,
            shifts=tuple(
                ShiftRule(
                    day_of_week=s.day_of_week,
                    start=TimeOfDay.parse(s.start_time),
                    end=TimeOfDay.parse(s.end_time),
                    is_active=bool(s.is_active),
                )
                for s in row.shifts
            ),
            vacations=tuple(
                Vacation(start_date=v.start_date, end_date=v.end_date)
                for v in row.vacations
            ),
        )
        for row in rows
    ]


# ── Blocked time ─────────────────────────────────────────────────────────


def day_bounds(target_date: date) -> tuple[datetime, datetime]:
    """[00:00, next 00:00) of a calendar day."""
    day_start = datetime.combine(target_date, time.min)
    return day_start, day_start + timedelta(days=1)


def get_blocked_windows(db: Session, tenant_id: str, target_date: date) -> list[BlockedWindow]:
    """Blocks intersecting the calendar day of target_date."""
    day_start, day_end = day_bounds(target_date)

    rows = (
        db.query(BlockedTimeSlots)
        .filter(
            BlockedTimeSlots.tenant_id == tenant_id,
            BlockedTimeSlots.start_date_time < day_end,
            BlockedTimeSlots.end_date_time > day_start,
        )
        .order_by(BlockedTimeSlots.start_date_time)
        .all()
    )
    return [BlockedWindow(start=r.start_date_time, end=r.end_date_time) for r in rows]


# ── Reservations ─────────────────────────────────────────────────────────


def _active_on(db: Session, tenant_id: str, target_date: date):
    return (
        db.query(
            Reservations.id,
            Reservations.staff_id,
            Reservations.reserved_time,
            Menus.duration,
        )
        .join(Menus, Menus.id == Reservations.menu_id)
        .filter(
            Reservations.tenant_id == tenant_id,
            Reservations.reserved_date == target_date,
            Reservations.status.in_(ACTIVE_STATUSES),
        )
    )


def _to_booked(row) -> BookedInterval:
    return BookedInterval(
        start=TimeOfDay.parse(row.reserved_time),
        duration=row.duration,
        reservation_id=row.id,
    )


def get_active_reservations(db: Session, tenant_id: str, target_date: date) -> list[tuple[Optional[int], BookedInterval]]:
    """All active reservations of the day as (staff_id, interval)."""
    rows = _active_on(db, tenant_id, target_date).order_by(Reservations.reserved_time).all()
    return [(row.staff_id, _to_booked(row)) for row in rows]


def get_resource_reservations(
    db: Session,
    tenant_id: str,
    target_date: date,
    resource: Resource,
    exclude_id: Optional[int] = None,
) -> list[BookedInterval]:
    """Active reservations occupying one staff member or the pool."""
    query = _active_on(db, tenant_id, target_date)
    staff_id = resource.column_value
    if staff_id is None:
        query = query.filter(Reservations.staff_id.is_(None))
    else:
        query = query.filter(Reservations.staff_id == staff_id)
    if exclude_id is not None:
        query = query.filter(Reservations.id != exclude_id)
    return [_to_booked(row) for row in query.all()]


def get_user_reservations(
    db: Session,
    tenant_id: str,
    target_date: date,
    user_id: int,
    exclude_id: Optional[int] = None,
) -> list[BookedInterval]:
    """The user's own active reservations, whichever staff they are with."""
    query = _active_on(db, tenant_id, target_date).filter(Reservations.user_id == user_id)
    if exclude_id is not None:
        query = query.filter(Reservations.id != exclude_id)
    return [_to_booked(row) for row in query.all()]
