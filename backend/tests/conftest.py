# backend/tests/conftest.py
"""
Shared fixtures.

Every test gets its own file-backed SQLite database under tmp_path, so the
WAL / BEGIN IMMEDIATE setup is the same one production runs on. Redis is
a MagicMock: emitted events can be inspected via rpush calls.
"""

import json
from datetime import date, timedelta
from typing import Optional
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from salon_booking.config import Settings
from salon_booking.main import create_app
from salon_booking.models import (
    BlockedTimeSlots,
    FeatureFlags,
    Menus,
    Reservations,
    Staff,
    StaffShifts,
    StaffVacations,
    StoreSettings,
    Users,
)
from salon_booking.services.events import EventEmitter

TENANT = "test-salon"


class Seeder:
    """Writes fixture rows through short-lived sessions."""

    def __init__(self, session_factory, tenant_id: str = TENANT):
        self.session_factory = session_factory
        self.tenant_id = tenant_id

    def _add(self, obj):
        with self.session_factory() as db:
            db.add(obj)
            db.commit()
            db.refresh(obj)
            return obj

    def store_settings(
        self,
        open_time: str = "09:00",
        close_time: str = "18:00",
        slot_duration: int = 30,
        closed_days=(),
        cancellation_deadline_hours: int = 24,
    ) -> StoreSettings:
        return self._add(StoreSettings(
            tenant_id=self.tenant_id,
            open_time=open_time,
            close_time=close_time,
            slot_duration=slot_duration,
            closed_days=json.dumps(list(closed_days)),
            cancellation_deadline_hours=cancellation_deadline_hours,
        ))

    def flags(self, staff_selection: bool = False, shift_management: bool = False) -> FeatureFlags:
        return self._add(FeatureFlags(
            tenant_id=self.tenant_id,
            enable_staff_selection=int(staff_selection),
            enable_staff_shift_management=int(shift_management),
        ))

    def user(self, name: str = "Hanako") -> Users:
        return self._add(Users(
            tenant_id=self.tenant_id,
            name=name,
            email=f"{name.lower()}@example.com",
            is_active=1,
        ))

    def menu(self, duration: int = 60, name: str = "Cut", is_active: bool = True) -> Menus:
        return self._add(Menus(
            tenant_id=self.tenant_id,
            name=name,
            price=5000,
            duration=duration,
            is_active=int(is_active),
        ))

    def staff(self, name: str = "Sato", is_active: bool = True) -> Staff:
        return self._add(Staff(tenant_id=self.tenant_id, name=name, is_active=int(is_active)))

    def shift(
        self,
        staff_id: int,
        day_of_week: int,
        start_time: str = "09:00",
        end_time: str = "18:00",
        is_active: bool = True,
    ) -> StaffShifts:
        return self._add(StaffShifts(
            staff_id=staff_id,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            is_active=int(is_active),
        ))

    def vacation(self, staff_id: int, start_date: date, end_date: date) -> StaffVacations:
        return self._add(StaffVacations(staff_id=staff_id, start_date=start_date, end_date=end_date))

    def block(self, start, end, reason: str = "maintenance") -> BlockedTimeSlots:
        return self._add(BlockedTimeSlots(
            tenant_id=self.tenant_id,
            start_date_time=start,
            end_date_time=end,
            reason=reason,
        ))

    def reservation(
        self,
        user_id: int,
        menu_id: int,
        reserved_date: date,
        reserved_time: str,
        staff_id: Optional[int] = None,
        status: str = "PENDING",
    ) -> Reservations:
        return self._add(Reservations(
            tenant_id=self.tenant_id,
            user_id=user_id,
            menu_id=menu_id,
            staff_id=staff_id,
            reserved_date=reserved_date,
            reserved_time=reserved_time,
            status=status,
        ))

    def reservations(self) -> list[Reservations]:
        with self.session_factory() as db:
            return db.query(Reservations).order_by(Reservations.id).all()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'salon.db'}",
        redis_url=None,
        tenant_id=TENANT,
        sqlite_busy_timeout=10.0,
    )


@pytest.fixture
def redis_mock() -> MagicMock:
    return MagicMock()


@pytest.fixture
def app(settings, redis_mock):
    app = create_app(settings)
    app.state.redis = redis_mock
    app.state.events = EventEmitter(redis_mock, settings.events_queue)
    yield app
    app.state.engine.dispose()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def session_factory(app):
    return app.state.session_factory


@pytest.fixture
def seed(session_factory) -> Seeder:
    return Seeder(session_factory)


@pytest.fixture
def day() -> date:
    """A Monday at least two weeks ahead (clear of cancellation deadlines)."""
    d = date.today() + timedelta(days=14)
    return d + timedelta(days=(7 - d.weekday()) % 7)


@pytest.fixture
def store(seed):
    """Store open 09:00–18:00, 30-minute grid, closed on Sundays."""
    return seed.store_settings(closed_days=["Sunday"])


def auth(user_id: int) -> dict:
    return {"X-User-Id": str(user_id)}


def emitted_events(redis_mock: MagicMock) -> list[dict]:
    return [json.loads(c.args[1]) for c in redis_mock.rpush.call_args_list]
