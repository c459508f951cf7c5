# backend/salon_booking/routers/staff.py
# API:
# - PATCH = ALLOWED (isActive=false takes the staff member out of scheduling)
# - PUT /shifts = replace the weekly schedule
# - Vacations: add / remove date ranges

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_tenant_id
from ..models import Staff, StaffShifts, StaffVacations
from ..schemas.staff import (
    ShiftRead,
    ShiftsReplace,
    StaffCreate,
    StaffRead,
    StaffUpdate,
    VacationCreate,
    VacationRead,
)

router = APIRouter(prefix="/admin/staff", tags=["admin: staff"])


def _get_staff_or_404(db: Session, tenant_id: str, id: int) -> Staff:
    obj = db.query(Staff).filter(Staff.id == id, Staff.tenant_id == tenant_id).first()
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


# ---------------------------------------------------------------------
# Base CRUD
# ---------------------------------------------------------------------

@router.get("", response_model=list[StaffRead])
def list_staff(
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    return db.query(Staff).filter(Staff.tenant_id == tenant_id).order_by(Staff.id).all()


@router.post("", response_model=StaffRead, status_code=status.HTTP_201_CREATED)
def create_staff(
    data: StaffCreate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    obj = Staff(
        tenant_id=tenant_id,
        name=data.name,
        role=data.role,
        is_active=int(data.is_active),
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.patch("/{id}", response_model=StaffRead)
def update_staff(
    id: int,
    data: StaffUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    obj = _get_staff_or_404(db, tenant_id, id)
    for field, value in data.model_dump(exclude_none=True).items():
        if field == "is_active":
            value = int(value)
        setattr(obj, field, value)
    db.commit()
    db.refresh(obj)
    return obj


# ---------------------------------------------------------------------
# Shifts
# ---------------------------------------------------------------------

@router.get("/{id}/shifts", response_model=list[ShiftRead])
def list_shifts(
    id: int,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    _get_staff_or_404(db, tenant_id, id)
    return (
        db.query(StaffShifts)
        .filter(StaffShifts.staff_id == id)
        .order_by(StaffShifts.day_of_week)
        .all()
    )


@router.put("/{id}/shifts", response_model=list[ShiftRead])
def replace_shifts(
    id: int,
    data: ShiftsReplace,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    _get_staff_or_404(db, tenant_id, id)

    # Bulk delete runs immediately, before the inserts below hit
    # the (staff_id, day_of_week) unique constraint
    db.query(StaffShifts).filter(StaffShifts.staff_id == id).delete(synchronize_session=False)

    rows = [
        StaffShifts(
            staff_id=id,
            day_of_week=s.day_of_week,
            start_time=s.start_time,
            end_time=s.end_time,
            is_active=int(s.is_active),
        )
        for s in sorted(data.shifts, key=lambda s: s.day_of_week)
    ]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows


# ---------------------------------------------------------------------
# Vacations
# ---------------------------------------------------------------------

@router.get("/{id}/vacations", response_model=list[VacationRead])
def list_vacations(
    id: int,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    _get_staff_or_404(db, tenant_id, id)
    return (
        db.query(StaffVacations)
        .filter(StaffVacations.staff_id == id)
        .order_by(StaffVacations.start_date)
        .all()
    )


@router.post("/{id}/vacations", response_model=VacationRead, status_code=status.HTTP_201_CREATED)
def create_vacation(
    id: int,
    data: VacationCreate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    _get_staff_or_404(db, tenant_id, id)
    obj = StaffVacations(staff_id=id, **data.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{id}/vacations/{vacation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_vacation(
    id: int,
    vacation_id: int,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    _get_staff_or_404(db, tenant_id, id)
    obj = db.query(StaffVacations).filter(
        StaffVacations.id == vacation_id,
        StaffVacations.staff_id == id,
    ).first()
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    db.delete(obj)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
