# backend/salon_booking/services/scheduling/transaction.py
"""
Reservation write path.

Two phases:
  1. Pick (no locks): validate menu/staff and, when no staff was given and
     staff selection is disabled, auto-assign a staff member from a snapshot.
  2. Confirm (one transaction): lock the (resource, date) and (user, date)
     scopes, re-read the bookings that matter from committed state, re-check
     overlap and insert. Any conflict aborts the transaction with no row.

Only storage serialization failures are retried (bounded), and a retry
repeats both phases. A conflict is a correct answer and is raised to the
caller as-is.
"""

import logging
import time
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from ...database import WRITE_TRANSACTION
from ...errors import (
    CancellationDeadlinePassed,
    InvalidStatus,
    InvalidStatusTransition,
    MenuNotFound,
    PastReservation,
    PoolTimeSlotConflict,
    ReservationNotFound,
    StaffNotFound,
    StaffTimeSlotConflict,
    TransientStorageError,
    UserTimeSlotConflict,
    ValidationFailed,
)
from ...models import Reservations
from ..events import EventEmitter, reservation_payload
from . import queries
from .assigner import assign_staff
from .availability import load_snapshot
from .config import SchedulingFlags
from .locks import acquire_scope_locks
from .overlap import ACTIVE_STATUSES, find_overlap
from .resources import POOL, Assigned, Resource, resource_for, user_scope_key
from .time_of_day import Interval, TimeOfDay

logger = logging.getLogger(__name__)

DEFAULT_CANCELLATION_DEADLINE_HOURS = 24

STATUS_TRANSITIONS: dict[str, frozenset[str]] = {
    "PENDING": frozenset({"CONFIRMED", "CANCELLED"}),
    "CONFIRMED": frozenset({"COMPLETED", "CANCELLED", "NO_SHOW"}),
    "CANCELLED": frozenset(),
    "COMPLETED": frozenset(),
    "NO_SHOW": frozenset(),
}

_RETRYABLE_SQLSTATES = ("40001", "40P01", "55P03")
_RETRYABLE_SNIPPETS = (
    "database is locked",
    "deadlock detected",
    "could not serialize",
    "could not obtain lock",
)


def is_serialization_failure(exc: OperationalError) -> bool:
    """Serialization / lock failures that are worth a fresh attempt."""
    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate in _RETRYABLE_SQLSTATES:
        return True
    message = str(exc).lower()
    return any(snippet in message for snippet in _RETRYABLE_SNIPPETS)


@dataclass(frozen=True)
class ReservationRequest:
    user_id: int
    menu_id: int
    reserved_date: date
    reserved_time: TimeOfDay
    staff_id: Optional[int] = None
    notes: Optional[str] = None
    status: str = "PENDING"


@dataclass(frozen=True)
class ReservationChanges:
    """Fields to change; None means "keep"."""

    menu_id: Optional[int] = None
    staff_id: Optional[int] = None
    reserved_date: Optional[date] = None
    reserved_time: Optional[TimeOfDay] = None
    notes: Optional[str] = None

    @property
    def moves_slot(self) -> bool:
        return any(
            value is not None
            for value in (self.menu_id, self.staff_id, self.reserved_date, self.reserved_time)
        )


class ReservationTransactionManager:
    """Creates and mutates reservations without breaking the no-overlap rules."""

    def __init__(
        self,
        session_factory: sessionmaker,
        tenant_id: str,
        events: Optional[EventEmitter] = None,
        max_attempts: int = 3,
        clock: Callable[[], datetime] = datetime.now,
        retry_delay: float = 0.05,
    ):
        self.session_factory = session_factory
        self.tenant_id = tenant_id
        self.events = events or EventEmitter(None)
        self.max_attempts = max(1, max_attempts)
        self.clock = clock
        self.retry_delay = retry_delay

    # ── Create ───────────────────────────────────────────────────────────

    def create(self, request: ReservationRequest) -> Reservations:
        reservation = self._run("create_reservation", plan=lambda: self._plan_create(request))

        logger.info(
            f"Reservation created: id={reservation.id}, user_id={reservation.user_id}, "
            f"staff_id={reservation.staff_id}, menu_id={reservation.menu_id}, "
            f"time={reservation.reserved_date.isoformat()} {reservation.reserved_time}, "
            f"status={reservation.status}"
        )
        self.events.emit("reservation_created", reservation_payload(reservation))
        return reservation

    def _plan_create(self, request: ReservationRequest) -> Callable[[Session], Reservations]:
        """Pick the resource, then return the locked confirm step for it."""
        duration, resource = self._pick_resource(request)
        interval = Interval.of(request.reserved_time, duration)

        def work(db: Session) -> Reservations:
            acquire_scope_locks(
                db,
                self.tenant_id,
                request.reserved_date,
                [resource.scope_key, user_scope_key(request.user_id)],
                now=self.clock,
            )
            self._check_conflicts(db, request.reserved_date, interval, request.user_id, resource)

            now = self.clock()
            reservation = Reservations(
                tenant_id=self.tenant_id,
                user_id=request.user_id,
                staff_id=resource.column_value,
                menu_id=request.menu_id,
                reserved_date=request.reserved_date,
                reserved_time=str(request.reserved_time),
                status=request.status,
                notes=request.notes,
                created_at=now,
                updated_at=now,
            )
            db.add(reservation)
            db.flush()
            return reservation

        return work

    def _pick_resource(self, request: ReservationRequest) -> tuple[int, Resource]:
        """Phase 1: menu duration and the resource the booking will occupy."""
        db = self.session_factory()
        try:
            menu = queries.get_active_menu(db, self.tenant_id, request.menu_id)
            if not menu:
                raise MenuNotFound()

            if request.staff_id is not None:
                if not queries.get_active_staff_member(db, self.tenant_id, request.staff_id):
                    raise StaffNotFound()
                return menu.duration, Assigned(request.staff_id)

            flags = SchedulingFlags.from_row(queries.get_feature_flags(db, self.tenant_id))
            if flags.enable_staff_selection:
                # Customer chose "no preference"
                return menu.duration, POOL

            snapshot = load_snapshot(db, self.tenant_id, request.reserved_date)
            if not snapshot.staff:
                # No staff configured: the store runs as a single pool
                return menu.duration, POOL

            staff_id = assign_staff(snapshot, request.reserved_time, menu.duration)
            return menu.duration, Assigned(staff_id)
        finally:
            db.close()

    # ── Update ───────────────────────────────────────────────────────────

    def update(
        self,
        reservation_id: int,
        changes: ReservationChanges,
        user_id: Optional[int] = None,
    ) -> Reservations:
        """
        Change menu / staff / date / time / notes of an active reservation.

        user_id restricts the change to the owner; None is the admin path.
        """
        previous: dict = {}

        def work(db: Session, duration: int) -> Reservations:
            row = self._get_reservation(db, reservation_id, user_id)
            self._ensure_mutable(row)
            previous.update(
                reserved_date=row.reserved_date.isoformat(),
                reserved_time=row.reserved_time,
                staff_id=row.staff_id,
                menu_id=row.menu_id,
            )

            target_date = changes.reserved_date or row.reserved_date
            target_time = changes.reserved_time or TimeOfDay.parse(row.reserved_time)
            target_staff = changes.staff_id if changes.staff_id is not None else row.staff_id
            resource = resource_for(target_staff)

            if changes.moves_slot:
                acquire_scope_locks(
                    db,
                    self.tenant_id,
                    target_date,
                    [resource.scope_key, user_scope_key(row.user_id)],
                    now=self.clock,
                )
                self._check_conflicts(
                    db,
                    target_date,
                    Interval.of(target_time, duration),
                    row.user_id,
                    resource,
                    exclude_id=row.id,
                )

            if changes.menu_id is not None:
                row.menu_id = changes.menu_id
            row.staff_id = resource.column_value
            row.reserved_date = target_date
            row.reserved_time = str(target_time)
            if changes.notes is not None:
                row.notes = changes.notes
            row.updated_at = self.clock()
            db.flush()
            return row

        def plan() -> Callable[[Session], Reservations]:
            duration = self._validate_changes(reservation_id, changes, user_id)
            return lambda db: work(db, duration)

        reservation = self._run("update_reservation", plan=plan)

        logger.info(
            f"Reservation updated: id={reservation.id}, "
            f"{previous.get('reserved_date')} {previous.get('reserved_time')} → "
            f"{reservation.reserved_date.isoformat()} {reservation.reserved_time}, "
            f"staff_id={reservation.staff_id}"
        )
        self.events.emit("reservation_updated", {
            **reservation_payload(reservation),
            "previous": previous,
        })
        return reservation

    def _validate_changes(
        self,
        reservation_id: int,
        changes: ReservationChanges,
        user_id: Optional[int],
    ) -> int:
        """Phase 1 of update: references exist; returns the resulting menu duration."""
        db = self.session_factory()
        try:
            current = self._get_reservation(db, reservation_id, user_id)
            self._ensure_mutable(current)

            duration = current.menu.duration
            if changes.menu_id is not None and changes.menu_id != current.menu_id:
                menu = queries.get_active_menu(db, self.tenant_id, changes.menu_id)
                if not menu:
                    raise MenuNotFound()
                duration = menu.duration

            if changes.staff_id is not None and changes.staff_id != current.staff_id:
                if not queries.get_active_staff_member(db, self.tenant_id, changes.staff_id):
                    raise StaffNotFound()

            return duration
        finally:
            db.close()

    # ── Cancel ───────────────────────────────────────────────────────────

    def cancel(
        self,
        reservation_id: int,
        user_id: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> Reservations:
        """Soft cancel: status → CANCELLED, row kept for history."""

        def work(db: Session) -> Reservations:
            row = self._get_reservation(db, reservation_id, user_id)
            self._ensure_mutable(row)

            deadline_hours = DEFAULT_CANCELLATION_DEADLINE_HOURS
            settings_row = queries.get_store_settings(db, self.tenant_id)
            if settings_row is not None and settings_row.cancellation_deadline_hours is not None:
                deadline_hours = settings_row.cancellation_deadline_hours

            starts_at = TimeOfDay.parse(row.reserved_time).on(row.reserved_date)
            if self.clock() > starts_at - timedelta(hours=deadline_hours):
                raise CancellationDeadlinePassed(
                    f"Reservations can be cancelled up to {deadline_hours} hours before the start"
                )

            row.status = "CANCELLED"
            if reason:
                note = f"[Cancellation reason] {reason}"
                row.notes = f"{row.notes}\n\n{note}" if row.notes else note
            row.updated_at = self.clock()
            db.flush()
            return row

        reservation = self._run("cancel_reservation", work)

        logger.info(f"Reservation cancelled: id={reservation.id}, user_id={reservation.user_id}")
        self.events.emit("reservation_cancelled", {
            **reservation_payload(reservation),
            "reason": reason,
        })
        return reservation

    # ── Status (admin) ───────────────────────────────────────────────────

    def change_status(self, reservation_id: int, new_status: str) -> Reservations:
        if new_status not in STATUS_TRANSITIONS:
            raise ValidationFailed(f"Unknown status: {new_status}")

        def work(db: Session) -> Reservations:
            row = self._get_reservation(db, reservation_id, None)
            if row.status == new_status:
                return row
            if new_status not in STATUS_TRANSITIONS.get(row.status, frozenset()):
                raise InvalidStatusTransition(f"Cannot change status from {row.status} to {new_status}")
            row.status = new_status
            row.updated_at = self.clock()
            db.flush()
            return row

        reservation = self._run("change_reservation_status", work)

        logger.info(f"Reservation status changed: id={reservation.id}, status={reservation.status}")
        self.events.emit("reservation_status_changed", reservation_payload(reservation))
        return reservation

    # ── Helpers ──────────────────────────────────────────────────────────

    def _check_conflicts(
        self,
        db: Session,
        target_date: date,
        interval: Interval,
        user_id: int,
        resource: Resource,
        exclude_id: Optional[int] = None,
    ) -> None:
        """Re-check user and resource overlap against committed state."""
        user_booked = queries.get_user_reservations(
            db, self.tenant_id, target_date, user_id, exclude_id=exclude_id
        )
        if find_overlap(interval, user_booked):
            raise UserTimeSlotConflict()

        resource_booked = queries.get_resource_reservations(
            db, self.tenant_id, target_date, resource, exclude_id=exclude_id
        )
        if find_overlap(interval, resource_booked):
            if isinstance(resource, Assigned):
                raise StaffTimeSlotConflict()
            raise PoolTimeSlotConflict()

    def _get_reservation(
        self,
        db: Session,
        reservation_id: int,
        user_id: Optional[int],
    ) -> Reservations:
        query = db.query(Reservations).filter(
            Reservations.id == reservation_id,
            Reservations.tenant_id == self.tenant_id,
        )
        if user_id is not None:
            query = query.filter(Reservations.user_id == user_id)
        row = query.first()
        if not row:
            raise ReservationNotFound()
        return row

    def _ensure_mutable(self, row: Reservations) -> None:
        if row.status not in ACTIVE_STATUSES:
            raise InvalidStatus()
        if row.reserved_date < self.clock().date():
            raise PastReservation()

    def _run(
        self,
        op_name: str,
        work: Optional[Callable[[Session], Reservations]] = None,
        plan: Optional[Callable[[], Callable[[Session], Reservations]]] = None,
    ) -> Reservations:
        """
        Run work in a fresh transaction and commit.

        plan, when given, is called at the start of every attempt and returns
        the work for that attempt, so reads done before the write transaction
        are repeated too. Serialization failures roll back and start over, up
        to max_attempts.
        """
        attempt = 1
        while True:
            db = self.session_factory()
            try:
                attempt_work = plan() if plan is not None else work
                db.connection(execution_options=WRITE_TRANSACTION)
                reservation = attempt_work(db)
                db.commit()
                return reservation
            except OperationalError as exc:
                db.rollback()
                if not is_serialization_failure(exc):
                    raise
                if attempt >= self.max_attempts:
                    logger.error(f"{op_name}: giving up after {attempt} attempts: {exc}")
                    raise TransientStorageError() from exc
                logger.warning(
                    f"{op_name}: serialization failure, retrying "
                    f"(attempt {attempt}/{self.max_attempts}): {exc}"
                )
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

            time.sleep(self.retry_delay * attempt)
            attempt += 1
