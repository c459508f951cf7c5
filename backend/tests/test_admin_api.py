from datetime import datetime, time

import pytest


# ---------------------------------------------------------------------
# Reservations
# ---------------------------------------------------------------------

def test_admin_booking_is_confirmed(client, store, seed, day):
    menu, user = seed.menu(), seed.user()
    staff = seed.staff()

    res = client.post("/admin/reservations", json={
        "userId": user.id,
        "menuId": menu.id,
        "staffId": staff.id,
        "reservedDate": day.isoformat(),
        "reservedTime": "11:00",
    })
    assert res.status_code == 201
    assert res.json()["status"] == "CONFIRMED"
    assert res.json()["staffId"] == staff.id


def test_admin_booking_for_unknown_user(client, store, seed, day):
    menu = seed.menu()
    res = client.post("/admin/reservations", json={
        "userId": 404, "menuId": menu.id, "reservedDate": day.isoformat(), "reservedTime": "11:00",
    })
    assert res.status_code == 404


def test_admin_booking_obeys_conflicts(client, store, seed, day):
    menu = seed.menu(duration=60)
    staff = seed.staff()
    a, b = seed.user("A"), seed.user("B")
    seed.reservation(a.id, menu.id, day, "11:00", staff_id=staff.id)

    res = client.post("/admin/reservations", json={
        "userId": b.id, "menuId": menu.id, "staffId": staff.id,
        "reservedDate": day.isoformat(), "reservedTime": "11:30",
    })
    assert res.status_code == 409
    assert res.json()["code"] == "STAFF_TIME_SLOT_CONFLICT"


def test_admin_reschedule(client, store, seed, day):
    menu, user = seed.menu(), seed.user()
    staff = seed.staff()
    r = seed.reservation(user.id, menu.id, day, "10:00")

    res = client.patch(f"/admin/reservations/{r.id}", json={"staffId": staff.id, "reservedTime": "15:00"})
    assert res.status_code == 200
    assert res.json()["staffId"] == staff.id
    assert res.json()["reservedTime"] == "15:00"


def test_admin_list_filters(client, store, seed, day):
    menu, user = seed.menu(), seed.user()
    seed.reservation(user.id, menu.id, day, "10:00")
    seed.reservation(user.id, menu.id, day, "14:00", status="CONFIRMED")

    listed = client.get("/admin/reservations", params={"date": day.isoformat(), "status": "CONFIRMED"}).json()
    assert [r["reservedTime"] for r in listed] == ["14:00"]


@pytest.mark.parametrize("start,target,expected", [
    ("PENDING", "CONFIRMED", 200),
    ("PENDING", "CANCELLED", 200),
    ("CONFIRMED", "COMPLETED", 200),
    ("CONFIRMED", "NO_SHOW", 200),
    ("CONFIRMED", "CONFIRMED", 200),
    ("PENDING", "COMPLETED", 400),
    ("CONFIRMED", "PENDING", 400),
    ("CANCELLED", "CONFIRMED", 400),
    ("COMPLETED", "CANCELLED", 400),
])
def test_status_transitions(client, store, seed, day, start, target, expected):
    menu, user = seed.menu(), seed.user()
    r = seed.reservation(user.id, menu.id, day, "10:00", status=start)

    res = client.patch(f"/admin/reservations/{r.id}/status", json={"status": target})
    assert res.status_code == expected
    if expected == 200:
        assert res.json()["status"] == target
    else:
        assert res.json()["code"] == "INVALID_STATUS_TRANSITION"


def test_unknown_status_value(client, store, seed, day):
    menu, user = seed.menu(), seed.user()
    r = seed.reservation(user.id, menu.id, day, "10:00")
    res = client.patch(f"/admin/reservations/{r.id}/status", json={"status": "ARCHIVED"})
    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


# ---------------------------------------------------------------------
# Settings / flags
# ---------------------------------------------------------------------

def test_settings_roundtrip(client):
    assert client.get("/admin/settings").json()["code"] == "SETTINGS_NOT_FOUND"

    res = client.put("/admin/settings", json={
        "openTime": "10:00",
        "closeTime": "19:00",
        "slotDuration": 15,
        "closedDays": ["Tuesday"],
    })
    assert res.status_code == 200

    body = client.get("/admin/settings").json()
    assert body["openTime"] == "10:00"
    assert body["slotDuration"] == 15
    assert body["closedDays"] == ["Tuesday"]
    assert body["cancellationDeadlineHours"] == 24


@pytest.mark.parametrize("payload", [
    {"openTime": "18:00", "closeTime": "09:00", "slotDuration": 30},
    {"openTime": "10:00", "closeTime": "10:00", "slotDuration": 30},
    {"openTime": "09:00", "closeTime": "18:00", "slotDuration": 0},
    {"openTime": "09:00", "closeTime": "18:00", "slotDuration": 30, "closedDays": ["Caturday"]},
])
def test_invalid_settings(client, payload):
    res = client.put("/admin/settings", json=payload)
    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


def test_feature_flags_default_and_partial_update(client):
    assert client.get("/admin/feature-flags").json() == {
        "enableStaffSelection": False,
        "enableStaffShiftManagement": False,
    }

    client.put("/admin/feature-flags", json={"enableStaffShiftManagement": True})
    client.put("/admin/feature-flags", json={"enableStaffSelection": True})

    assert client.get("/admin/feature-flags").json() == {
        "enableStaffSelection": True,
        "enableStaffShiftManagement": True,
    }


# ---------------------------------------------------------------------
# Blocked times
# ---------------------------------------------------------------------

def test_blocked_time_lifecycle(client, store, seed, day):
    menu = seed.menu(duration=60)
    start = datetime.combine(day, time(14, 0))
    end = datetime.combine(day, time(15, 0))

    res = client.post("/admin/blocked-times", json={
        "startDateTime": start.isoformat(), "endDateTime": end.isoformat(), "reason": "training",
    })
    assert res.status_code == 201
    block_id = res.json()["id"]

    listed = client.get("/admin/blocked-times", params={"date": day.isoformat()}).json()
    assert [b["id"] for b in listed] == [block_id]

    slots = client.get("/available-slots", params={"date": day.isoformat(), "menuId": menu.id}).json()["slots"]
    assert not {s["time"]: s for s in slots}["14:00"]["available"]

    assert client.delete(f"/admin/blocked-times/{block_id}").status_code == 204
    assert client.get("/admin/blocked-times").json() == []


def test_blocked_time_must_end_after_start(client, day):
    start = datetime.combine(day, time(14, 0))
    res = client.post("/admin/blocked-times", json={
        "startDateTime": start.isoformat(), "endDateTime": start.isoformat(),
    })
    assert res.status_code == 400


# ---------------------------------------------------------------------
# Menus / staff
# ---------------------------------------------------------------------

def test_menu_create_and_deactivate(client):
    res = client.post("/admin/menus", json={"name": "Perm", "price": 8000, "duration": 90})
    assert res.status_code == 201
    menu_id = res.json()["id"]

    assert [m["id"] for m in client.get("/menus").json()] == [menu_id]

    res = client.patch(f"/admin/menus/{menu_id}", json={"isActive": False})
    assert res.json()["isActive"] is False
    assert client.get("/menus").json() == []
    assert len(client.get("/admin/menus").json()) == 1


def test_replace_shifts(client, seed):
    staff = seed.staff()

    res = client.put(f"/admin/staff/{staff.id}/shifts", json={"shifts": [
        {"dayOfWeek": 0, "startTime": "09:00", "endTime": "17:00"},
        {"dayOfWeek": 2, "startTime": "12:00", "endTime": "20:00"},
    ]})
    assert res.status_code == 200

    res = client.put(f"/admin/staff/{staff.id}/shifts", json={"shifts": [
        {"dayOfWeek": 0, "startTime": "10:00", "endTime": "16:00"},
    ]})
    assert res.status_code == 200

    shifts = client.get(f"/admin/staff/{staff.id}/shifts").json()
    assert [(s["dayOfWeek"], s["startTime"]) for s in shifts] == [(0, "10:00")]


def test_duplicate_shift_day_rejected(client, seed):
    staff = seed.staff()
    res = client.put(f"/admin/staff/{staff.id}/shifts", json={"shifts": [
        {"dayOfWeek": 1, "startTime": "09:00", "endTime": "12:00"},
        {"dayOfWeek": 1, "startTime": "13:00", "endTime": "17:00"},
    ]})
    assert res.status_code == 400


@pytest.mark.parametrize("start,end,expected", [
    ("09:59", "10:00", 200),
    ("12:00", "12:00", 400),
    ("20:00", "09:30", 400),
])
def test_shift_must_end_after_start(client, seed, start, end, expected):
    staff = seed.staff()
    res = client.put(f"/admin/staff/{staff.id}/shifts", json={"shifts": [
        {"dayOfWeek": 3, "startTime": start, "endTime": end},
    ]})
    assert res.status_code == expected


def test_vacation_blocks_staff(client, store, seed, day):
    seed.flags(shift_management=True)
    menu = seed.menu()
    staff = seed.staff()
    seed.shift(staff.id, day.weekday())

    res = client.post(f"/admin/staff/{staff.id}/vacations", json={
        "startDate": day.isoformat(), "endDate": day.isoformat(), "reason": "trip",
    })
    assert res.status_code == 201
    vacation_id = res.json()["id"]

    params = {"date": day.isoformat(), "menuId": menu.id}
    slots = client.get("/available-slots", params=params).json()["slots"]
    assert not any(s["available"] for s in slots)

    assert client.delete(f"/admin/staff/{staff.id}/vacations/{vacation_id}").status_code == 204
    slots = client.get("/available-slots", params=params).json()["slots"]
    assert all(s["available"] for s in slots)


def test_deactivated_staff_leaves_public_list(client, seed):
    staff = seed.staff()
    client.patch(f"/admin/staff/{staff.id}", json={"isActive": False})
    assert client.get("/staff").json() == []


def test_users_admin(client):
    res = client.post("/admin/users", json={"name": "Yuki", "email": "yuki@example.com"})
    assert res.status_code == 201
    assert [u["email"] for u in client.get("/admin/users").json()] == ["yuki@example.com"]


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"
