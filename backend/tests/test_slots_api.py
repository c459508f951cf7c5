from datetime import datetime, time, timedelta

from conftest import TENANT, Seeder


def get_slots(client, day, menu_id, staff_id=None):
    params = {"date": day.isoformat(), "menuId": menu_id}
    if staff_id is not None:
        params["staffId"] = staff_id
    return client.get("/available-slots", params=params)


def available(body) -> list[str]:
    return [s["time"] for s in body["slots"] if s["available"]]


def test_missing_store_settings(client, seed, day):
    menu = seed.menu()
    res = get_slots(client, day, menu.id)
    assert res.status_code == 404
    assert res.json()["code"] == "SETTINGS_NOT_FOUND"


def test_bad_date_format(client, store, seed):
    menu = seed.menu()
    res = client.get("/available-slots", params={"date": "2030/01/07", "menuId": menu.id})
    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


def test_unknown_or_inactive_menu(client, store, seed, day):
    inactive = seed.menu(is_active=False)
    assert get_slots(client, day, 999).json()["code"] == "MENU_NOT_FOUND"
    res = get_slots(client, day, inactive.id)
    assert res.status_code == 404
    assert res.json()["code"] == "MENU_NOT_FOUND"


def test_unknown_staff(client, store, seed, day):
    menu = seed.menu()
    res = get_slots(client, day, menu.id, staff_id=42)
    assert res.status_code == 404
    assert res.json()["code"] == "STAFF_NOT_FOUND"


def test_pool_day_lists_every_slot(client, store, seed, day):
    menu = seed.menu(duration=60)
    body = get_slots(client, day, menu.id).json()

    assert body["date"] == day.isoformat()
    assert len(body["slots"]) == 17
    assert body["slots"][-1]["time"] == "17:00"
    assert all(s["available"] for s in body["slots"])
    assert all("staffId" not in s for s in body["slots"])


def test_pool_reservation_hides_overlapping_slots(client, store, seed, day):
    menu = seed.menu(duration=60)
    user = seed.user()
    seed.reservation(user.id, menu.id, day, "10:00")

    times = available(get_slots(client, day, menu.id).json())
    assert "09:30" not in times
    assert "10:00" not in times
    assert "10:30" not in times
    assert "09:00" in times
    assert "11:00" in times


def test_cancelled_reservation_frees_the_slot(client, store, seed, day):
    menu = seed.menu(duration=60)
    user = seed.user()
    seed.reservation(user.id, menu.id, day, "10:00", status="CANCELLED")

    assert "10:00" in available(get_slots(client, day, menu.id).json())


def test_closed_day_has_no_slots(client, store, seed, day):
    menu = seed.menu()
    sunday = day + timedelta(days=6)
    body = get_slots(client, sunday, menu.id).json()
    assert body["slots"] == []


def test_blocked_hour_removes_its_starts(client, store, seed, day):
    menu = seed.menu(duration=60)
    seed.block(datetime.combine(day, time(14, 0)), datetime.combine(day, time(15, 0)))

    times = available(get_slots(client, day, menu.id).json())
    assert "14:00" not in times
    assert "14:30" not in times
    assert "15:00" in times


def test_busy_staff_member_hands_slot_to_next(client, store, seed, day):
    menu = seed.menu(duration=60)
    first, second = seed.staff("Sato"), seed.staff("Suzuki")
    user = seed.user()
    seed.reservation(user.id, menu.id, day, "10:00", staff_id=first.id)

    slots = {s["time"]: s for s in get_slots(client, day, menu.id).json()["slots"]}
    assert slots["09:00"]["staffId"] == first.id
    assert slots["10:00"]["staffId"] == second.id


def test_single_staff_view(client, store, seed, day):
    menu = seed.menu(duration=60)
    staff = seed.staff()
    user = seed.user()
    seed.reservation(user.id, menu.id, day, "10:00", staff_id=staff.id)

    slots = get_slots(client, day, menu.id, staff_id=staff.id).json()["slots"]
    by_time = {s["time"]: s for s in slots}
    assert not by_time["10:00"]["available"]
    assert by_time["11:00"]["available"]
    assert all(s["staffId"] == staff.id for s in slots)


def test_shift_management_without_shifts_is_fail_closed(client, store, seed, day):
    seed.flags(shift_management=True)
    menu = seed.menu()
    seed.staff()

    body = get_slots(client, day, menu.id).json()
    assert body["slots"]
    assert available(body) == []


def test_shift_hours_limit_availability(client, store, seed, day):
    seed.flags(shift_management=True)
    menu = seed.menu(duration=60)
    staff = seed.staff()
    seed.shift(staff.id, day.weekday(), "10:00", "16:00")

    times = available(get_slots(client, day, menu.id).json())
    assert times[0] == "10:00"
    assert times[-1] == "15:00"


def test_other_tenant_data_is_ignored(client, store, seed, day, session_factory):
    menu = seed.menu(duration=60)
    other = Seeder(session_factory, tenant_id="other-" + TENANT)
    other_menu = other.menu(duration=60)
    other_user = other.user("Taro")
    other.reservation(other_user.id, other_menu.id, day, "10:00")

    assert "10:00" in available(get_slots(client, day, menu.id).json())
