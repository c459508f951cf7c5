# backend/salon_booking/routers/catalog.py
# Public lists the booking form is built from: active menus and staff.

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_tenant_id
from ..models import Menus, Staff
from ..schemas.menus import MenuRead
from ..schemas.staff import StaffRead

router = APIRouter(tags=["catalog"])


@router.get("/menus", response_model=list[MenuRead])
def list_active_menus(
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    return (
        db.query(Menus)
        .filter(Menus.tenant_id == tenant_id, Menus.is_active == 1)
        .order_by(Menus.id)
        .all()
    )


@router.get("/staff", response_model=list[StaffRead])
def list_active_staff(
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    return (
        db.query(Staff)
        .filter(Staff.tenant_id == tenant_id, Staff.is_active == 1)
        .order_by(Staff.id)
        .all()
    )
