# backend/salon_booking/routers/settings.py
# Store settings and feature flags (one row each per tenant).
# - PUT = upsert

import json

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_tenant_id
from ..errors import SettingsNotFound
from ..models import FeatureFlags, StoreSettings
from ..schemas.settings import (
    FeatureFlagsRead,
    FeatureFlagsUpdate,
    StoreSettingsRead,
    StoreSettingsUpdate,
)
from ..services.scheduling import queries

router = APIRouter(prefix="/admin", tags=["admin: settings"])


# ---------------------------------------------------------------------
# Store settings
# ---------------------------------------------------------------------

@router.get("/settings", response_model=StoreSettingsRead)
def get_store_settings(
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    obj = queries.get_store_settings(db, tenant_id)
    if not obj:
        raise SettingsNotFound()
    return obj


@router.put("/settings", response_model=StoreSettingsRead)
def put_store_settings(
    data: StoreSettingsUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    obj = queries.get_store_settings(db, tenant_id)
    if not obj:
        obj = StoreSettings(tenant_id=tenant_id)
        db.add(obj)

    obj.open_time = data.open_time
    obj.close_time = data.close_time
    obj.slot_duration = data.slot_duration
    obj.closed_days = json.dumps(data.closed_days)
    obj.cancellation_deadline_hours = data.cancellation_deadline_hours

    db.commit()
    db.refresh(obj)
    return obj


# ---------------------------------------------------------------------
# Feature flags
# ---------------------------------------------------------------------

@router.get("/feature-flags", response_model=FeatureFlagsRead)
def get_feature_flags(
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    obj = queries.get_feature_flags(db, tenant_id)
    if not obj:
        return FeatureFlagsRead()
    return obj


@router.put("/feature-flags", response_model=FeatureFlagsRead)
def put_feature_flags(
    data: FeatureFlagsUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    obj = queries.get_feature_flags(db, tenant_id)
    if not obj:
        obj = FeatureFlags(tenant_id=tenant_id, enable_staff_selection=0, enable_staff_shift_management=0)
        db.add(obj)

    for field, value in data.model_dump(exclude_none=True).items():
        setattr(obj, field, int(value))

    db.commit()
    db.refresh(obj)
    return obj
