# backend/salon_booking/routers/reservations.py
# Customer reservations. Caller identity: X-User-Id.
# - POST = create (PENDING), conflicts → 409
# - PATCH = change menu / staff / date / time / notes
# - DELETE = soft cancel (status CANCELLED)

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_user_id, get_reservation_manager, get_tenant_id
from ..errors import ReservationNotFound
from ..models import Reservations
from ..schemas.reservations import (
    ReservationCancel,
    ReservationCreate,
    ReservationRead,
    ReservationUpdate,
)
from ..services.scheduling import (
    ReservationChanges,
    ReservationRequest,
    ReservationTransactionManager,
    TimeOfDay,
)

router = APIRouter(prefix="/reservations", tags=["reservations"])


def to_changes(data) -> ReservationChanges:
    """Update payload → engine changes (unset fields stay None)."""
    return ReservationChanges(
        menu_id=data.menu_id,
        staff_id=data.staff_id,
        reserved_date=data.reserved_date,
        reserved_time=TimeOfDay.parse(data.reserved_time) if data.reserved_time else None,
        notes=data.notes,
    )


@router.get("", response_model=list[ReservationRead])
def list_my_reservations(
    user_id: int = Depends(get_current_user_id),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    return (
        db.query(Reservations)
        .filter(Reservations.tenant_id == tenant_id, Reservations.user_id == user_id)
        .order_by(Reservations.reserved_date.desc(), Reservations.reserved_time.desc())
        .all()
    )


@router.get("/{id}", response_model=ReservationRead)
def get_reservation(
    id: int,
    user_id: int = Depends(get_current_user_id),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    obj = db.query(Reservations).filter(
        Reservations.id == id,
        Reservations.tenant_id == tenant_id,
        Reservations.user_id == user_id,
    ).first()
    if not obj:
        raise ReservationNotFound()
    return obj


@router.post("", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
def create_reservation(
    data: ReservationCreate,
    user_id: int = Depends(get_current_user_id),
    manager: ReservationTransactionManager = Depends(get_reservation_manager),
):
    return manager.create(ReservationRequest(
        user_id=user_id,
        menu_id=data.menu_id,
        staff_id=data.staff_id,
        reserved_date=data.reserved_date,
        reserved_time=TimeOfDay.parse(data.reserved_time),
        notes=data.notes,
    ))


@router.patch("/{id}", response_model=ReservationRead)
def update_reservation(
    id: int,
    data: ReservationUpdate,
    user_id: int = Depends(get_current_user_id),
    manager: ReservationTransactionManager = Depends(get_reservation_manager),
):
    return manager.update(id, to_changes(data), user_id=user_id)


@router.delete("/{id}", response_model=ReservationRead)
def cancel_reservation(
    id: int,
    data: Optional[ReservationCancel] = None,
    user_id: int = Depends(get_current_user_id),
    manager: ReservationTransactionManager = Depends(get_reservation_manager),
):
    reason = data.cancellation_reason if data else None
    return manager.cancel(id, user_id=user_id, reason=reason)
