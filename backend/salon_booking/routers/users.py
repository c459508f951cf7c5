# backend/salon_booking/routers/users.py
# Customer records. Their ids are what the gateway sends as X-User-Id.

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_tenant_id
from ..models import Users
from ..schemas.users import UserCreate, UserRead

router = APIRouter(prefix="/admin/users", tags=["admin: users"])


@router.get("", response_model=list[UserRead])
def list_users(
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    return db.query(Users).filter(Users.tenant_id == tenant_id).order_by(Users.id).all()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(
    data: UserCreate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    obj = Users(tenant_id=tenant_id, name=data.name, email=data.email, is_active=1)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj
