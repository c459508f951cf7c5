# backend/salon_booking/services/scheduling/locks.py
"""
Per-scope write locks for the reservation write path.

Scope = (tenant, scope_key, date) where scope_key is "staff:<id>", "pool"
or "user:<id>". Each scope is backed by one scheduling_locks row:

- PostgreSQL: SELECT ... FOR UPDATE on the row, held until commit/rollback.
  Bookings for other staff or other dates lock other rows and never wait.
- SQLite: FOR UPDATE is not supported; write transactions begin with
  BEGIN IMMEDIATE (database.py), so concurrent writers are already
  serialized and the row is only bookkeeping.

Keys are locked in sorted order so two transactions needing the same pair
of scopes cannot deadlock.
"""

import logging
from datetime import date, datetime
from typing import Callable, Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import SchedulingLocks

logger = logging.getLogger(__name__)


def _select_for_update(db: Session, tenant_id: str, scope_key: str, lock_date: date):
    return (
        db.query(SchedulingLocks)
        .filter(
            SchedulingLocks.tenant_id == tenant_id,
            SchedulingLocks.scope_key == scope_key,
            SchedulingLocks.lock_date == lock_date,
        )
        .with_for_update()
        .one_or_none()
    )


def acquire_scope_locks(
    db: Session,
    tenant_id: str,
    lock_date: date,
    scope_keys: Iterable[str],
    now: Callable[[], datetime] = datetime.now,
) -> list[str]:
    """
    Lock every scope for lock_date inside the current transaction.

    Returns the keys in the order they were locked.
    """
    keys = sorted(set(scope_keys))
    for key in keys:
        row = _select_for_update(db, tenant_id, key, lock_date)
        if row is None:
            try:
                with db.begin_nested():
                    db.add(SchedulingLocks(
                        tenant_id=tenant_id,
                        scope_key=key,
                        lock_date=lock_date,
                        acquired_at=now(),
                    ))
                    db.flush()
                continue
            except IntegrityError:
                # Created concurrently by another transaction; lock theirs
                row = _select_for_update(db, tenant_id, key, lock_date)
                if row is None:
                    raise
        row.acquired_at = now()

    db.flush()
    logger.debug(f"Scope locks acquired: tenant={tenant_id} date={lock_date} keys={keys}")
    return keys
