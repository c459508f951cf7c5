import json
from types import SimpleNamespace

import pytest

from salon_booking.config import Settings
from salon_booking.services.scheduling.config import SchedulingFlags, StoreSchedule


def settings_row(**overrides):
    row = dict(
        open_time="09:00",
        close_time="18:00",
        slot_duration=30,
        closed_days=json.dumps(["Sunday"]),
        cancellation_deadline_hours=24,
    )
    row.update(overrides)
    return SimpleNamespace(**row)


def test_store_schedule_from_row():
    schedule = StoreSchedule.from_row(settings_row())
    assert str(schedule.open_time) == "09:00"
    assert schedule.closed_days == frozenset({"Sunday"})


def test_zero_deadline_is_kept():
    assert StoreSchedule.from_row(settings_row(cancellation_deadline_hours=0)).cancellation_deadline_hours == 0


def test_bad_closed_days_json_means_open_every_day():
    assert StoreSchedule.from_row(settings_row(closed_days="not json")).closed_days == frozenset()


def test_non_positive_slot_duration_rejected():
    with pytest.raises(ValueError):
        StoreSchedule.from_row(settings_row(slot_duration=0))


def test_missing_flags_row_defaults_off():
    flags = SchedulingFlags.from_row(None)
    assert not flags.enable_staff_selection
    assert not flags.enable_staff_shift_management


def test_settings_sqlite_detection(tmp_path):
    s = Settings(_env_file=None, database_url=f"sqlite:///{tmp_path / 'x.db'}")
    assert s.is_sqlite
    assert s.resolved_database_url == f"sqlite:///{tmp_path / 'x.db'}"

    pg = Settings(_env_file=None, database_url="postgresql://salon@localhost/salon")
    assert not pg.is_sqlite
