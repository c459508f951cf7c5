# backend/salon_booking/routers/admin_reservations.py
# Staff-side reservation management. Admin auth is enforced by the gateway.
# - POST = create on behalf of a customer (CONFIRMED)
# - PATCH = reschedule, same conflict rules as customers
# - PATCH /status = lifecycle transitions only

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_reservation_manager, get_tenant_id
from ..models import Reservations, Users
from ..schemas.common import parse_date_param
from ..schemas.reservations import (
    AdminReservationCreate,
    AdminReservationUpdate,
    ReservationRead,
    ReservationStatus,
    StatusUpdate,
)
from ..services.scheduling import (
    ReservationRequest,
    ReservationTransactionManager,
    TimeOfDay,
)
from .reservations import to_changes

router = APIRouter(prefix="/admin/reservations", tags=["admin: reservations"])


@router.get("", response_model=list[ReservationRead])
def list_reservations(
    date: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
    status_filter: Optional[ReservationStatus] = Query(default=None, alias="status"),
    staff_id: Optional[int] = Query(default=None, alias="staffId"),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    query = db.query(Reservations).filter(Reservations.tenant_id == tenant_id)
    if date is not None:
        query = query.filter(Reservations.reserved_date == parse_date_param(date))
    if status_filter is not None:
        query = query.filter(Reservations.status == status_filter)
    if staff_id is not None:
        query = query.filter(Reservations.staff_id == staff_id)
    return query.order_by(Reservations.reserved_date, Reservations.reserved_time).all()


@router.post("", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
def create_reservation(
    data: AdminReservationCreate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
    manager: ReservationTransactionManager = Depends(get_reservation_manager),
):
    user = db.query(Users).filter(Users.id == data.user_id, Users.tenant_id == tenant_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return manager.create(ReservationRequest(
        user_id=data.user_id,
        menu_id=data.menu_id,
        staff_id=data.staff_id,
        reserved_date=data.reserved_date,
        reserved_time=TimeOfDay.parse(data.reserved_time),
        notes=data.notes,
        status="CONFIRMED",
    ))


@router.patch("/{id}", response_model=ReservationRead)
def update_reservation(
    id: int,
    data: AdminReservationUpdate,
    manager: ReservationTransactionManager = Depends(get_reservation_manager),
):
    return manager.update(id, to_changes(data))


@router.patch("/{id}/status", response_model=ReservationRead)
def change_status(
    id: int,
    data: StatusUpdate,
    manager: ReservationTransactionManager = Depends(get_reservation_manager),
):
    return manager.change_status(id, data.status)
