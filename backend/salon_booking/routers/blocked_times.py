# backend/salon_booking/routers/blocked_times.py
# Store-wide blocked time windows (holidays, maintenance, ...).
# - DELETE = hard delete

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_tenant_id
from ..models import BlockedTimeSlots
from ..schemas.blocked_times import BlockedTimeCreate, BlockedTimeRead
from ..schemas.common import parse_date_param
from ..services.scheduling import queries

router = APIRouter(prefix="/admin/blocked-times", tags=["admin: blocked times"])


@router.get("", response_model=list[BlockedTimeRead])
def list_blocked_times(
    date: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    query = db.query(BlockedTimeSlots).filter(BlockedTimeSlots.tenant_id == tenant_id)
    if date is not None:
        day_start, day_end = queries.day_bounds(parse_date_param(date))
        query = query.filter(
            BlockedTimeSlots.start_date_time < day_end,
            BlockedTimeSlots.end_date_time > day_start,
        )
    return query.order_by(BlockedTimeSlots.start_date_time).all()


@router.post("", response_model=BlockedTimeRead, status_code=status.HTTP_201_CREATED)
def create_blocked_time(
    data: BlockedTimeCreate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    obj = BlockedTimeSlots(tenant_id=tenant_id, **data.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_blocked_time(
    id: int,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    obj = db.query(BlockedTimeSlots).filter(
        BlockedTimeSlots.id == id,
        BlockedTimeSlots.tenant_id == tenant_id,
    ).first()
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    db.delete(obj)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
