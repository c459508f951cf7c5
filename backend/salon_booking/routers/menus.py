# backend/salon_booking/routers/menus.py
# API:
# - PATCH = ALLOWED (isActive=false hides the menu from new bookings)
# - DELETE = not exposed, existing reservations keep their menu

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_tenant_id
from ..models import Menus
from ..schemas.menus import MenuCreate, MenuRead, MenuUpdate

router = APIRouter(prefix="/admin/menus", tags=["admin: menus"])


@router.get("", response_model=list[MenuRead])
def list_menus(
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    return db.query(Menus).filter(Menus.tenant_id == tenant_id).order_by(Menus.id).all()


@router.post("", response_model=MenuRead, status_code=status.HTTP_201_CREATED)
def create_menu(
    data: MenuCreate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    payload = data.model_dump()
    payload["is_active"] = int(payload["is_active"])
    obj = Menus(tenant_id=tenant_id, **payload)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.patch("/{id}", response_model=MenuRead)
def update_menu(
    id: int,
    data: MenuUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    obj = db.query(Menus).filter(Menus.id == id, Menus.tenant_id == tenant_id).first()
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    for field, value in data.model_dump(exclude_none=True).items():
        if field == "is_active":
            value = int(value)
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)
    return obj
