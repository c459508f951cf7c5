# backend/salon_booking/main.py
"""
Application factory.

Run with: uvicorn salon_booking.main:create_app --factory
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from redis import Redis
from redis.exceptions import RedisError

from .config import Settings, get_settings
from .database import build_engine, build_session_factory
from .errors import BookingError, ValidationFailed
from .models import Base
from .redis_client import build_redis, get_redis
from .routers import (
    admin_reservations,
    blocked_times,
    catalog,
    menus,
    reservations,
    settings as settings_router,
    slots,
    staff,
    users,
)
from .services.events import EventEmitter

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    engine = build_engine(settings)
    Base.metadata.create_all(bind=engine)

    app = FastAPI(title="Salon Booking API")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.redis = build_redis(settings)
    app.state.events = EventEmitter(app.state.redis, settings.events_queue)

    register_exception_handlers(app)

    app.include_router(slots.router)
    app.include_router(catalog.router)
    app.include_router(reservations.router)
    app.include_router(admin_reservations.router)
    app.include_router(settings_router.router)
    app.include_router(blocked_times.router)
    app.include_router(menus.router)
    app.include_router(staff.router)
    app.include_router(users.router)

    @app.get("/health")
    def health(redis: Optional[Redis] = Depends(get_redis)):
        redis_ok = None
        if redis is not None:
            try:
                redis_ok = bool(redis.ping())
            except RedisError as e:
                logger.warning(f"Redis ping failed: {e}")
                redis_ok = False
        return {"status": "ok", "redis": redis_ok}

    logger.info(f"Salon booking API ready (tenant={settings.tenant_id})")
    return app


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, exc: BookingError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.code} {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query")),
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        error = ValidationFailed(details={"errors": errors})
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error.to_payload())
