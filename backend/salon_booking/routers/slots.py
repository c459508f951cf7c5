# backend/salon_booking/routers/slots.py
"""
Available slots API.

GET /available-slots - every generated start time for a menu on a date,
marked available or not (read path, no locks).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_tenant_id
from ..schemas.common import parse_date_param
from ..schemas.slots import AvailableSlotsResponse
from ..services.scheduling import calculate_available_slots

router = APIRouter(tags=["slots"])


@router.get(
    "/available-slots",
    response_model=AvailableSlotsResponse,
    response_model_exclude_none=True,
)
def get_available_slots(
    date: str = Query(..., description="YYYY-MM-DD"),
    menu_id: int = Query(..., alias="menuId"),
    staff_id: Optional[int] = Query(default=None, alias="staffId"),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    target_date = parse_date_param(date)
    return calculate_available_slots(db, tenant_id, target_date, menu_id, staff_id)
