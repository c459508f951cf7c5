# backend/salon_booking/dependencies.py
"""
Request-scoped dependencies: tenant, caller identity, write-path manager.

Authentication itself is outside this service; the gateway in front of it
resolves the session and forwards the user id in X-User-Id.
"""

from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from .config import Settings
from .database import get_db
from .errors import Unauthorized
from .models import Users
from .services.scheduling import ReservationTransactionManager


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_tenant_id(settings: Settings = Depends(get_app_settings)) -> str:
    return settings.tenant_id


def get_current_user_id(
    x_user_id: Optional[str] = Header(default=None),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
) -> int:
    """Id of the calling user; 401 when missing, malformed or unknown."""
    if not x_user_id or not x_user_id.isdigit():
        raise Unauthorized()

    user = db.query(Users).filter(
        Users.id == int(x_user_id),
        Users.tenant_id == tenant_id,
        Users.is_active == 1,
    ).first()
    if not user:
        raise Unauthorized()
    return user.id


def get_reservation_manager(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> ReservationTransactionManager:
    return ReservationTransactionManager(
        request.app.state.session_factory,
        settings.tenant_id,
        events=request.app.state.events,
        max_attempts=settings.serialization_retries,
    )
