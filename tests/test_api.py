from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.shift_ledger.shift_ledger.core.enums import DayType, ShiftSlot
from src.shift_ledger.shift_ledger.main import create_app


@pytest.fixture
def client(env, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(env.container)
    return app.test_client()


def _as(user_id: str) -> dict:
    return {"X-User-Id": user_id}


def test_unregistered_user_gets_404(client):
    resp = client.post("/api/attendance/stamp", json={"shift": "morning", "action": "checkIn"}, headers=_as("nobody"))

    assert resp.status_code == 404
    body = resp.get_json()
    assert body["success"] is False
    assert body["error"] == "NotRegistered"


def test_stamp_and_read_back(env, client):
    env.schedules.add("E001", date(2026, 2, 10), ShiftSlot.MORNING, time(8, 30), time(17, 30))

    resp = client.post("/api/attendance/stamp", json={"shift": "morning", "action": "checkIn"}, headers=_as("U-alice"))
    assert resp.status_code == 200
    assert resp.get_json()["record"]["morning"]["late_minutes"] == 30

    again = client.post("/api/attendance/stamp", json={"shift": "morning", "action": "checkIn"}, headers=_as("U-alice"))
    assert again.status_code == 409
    assert again.get_json()["error"] == "AlreadyStamped"

    day = client.get("/api/attendance?date=2026-02-10", headers=_as("U-alice")).get_json()
    assert day["record"]["morning"]["check_in"] == "2026-02-10T09:00:00"


def test_bad_input_is_400(client):
    resp = client.post("/api/attendance/stamp", json={"shift": "noon", "action": "checkIn"}, headers=_as("U-alice"))

    assert resp.status_code == 400


def test_staff_cannot_use_admin_endpoints(client):
    resp = client.post(
        "/api/admin/attendance/stamp",
        json={"employee_id": "E004", "date": "2026-02-01", "shift": "morning", "action": "checkIn"},
        headers=_as("U-alice"),
    )
    assert resp.status_code == 403

    assert client.get("/api/attendance?employee_id=E004", headers=_as("U-alice")).status_code == 403
    assert client.get("/api/makeup/pending", headers=_as("U-alice")).status_code == 403


def test_admin_stamp_endpoint(client):
    resp = client.post(
        "/api/admin/attendance/stamp",
        json={
            "employee_id": "E001",
            "date": "2026-02-03",
            "shift": "morning",
            "action": "checkOut",
            "at": "2026-02-03T18:00:00",
        },
        headers=_as("U-bob"),
    )

    slot = resp.get_json()["record"]["morning"]
    assert resp.status_code == 200
    assert slot["check_out_source"] == "admin"
    assert slot["out_of_order"] is True


def test_makeup_round_trip(env, client):
    created = client.post(
        "/api/makeup",
        json={"shift": "morning", "action": "checkIn", "reason": "Forgot my phone"},
        headers=_as("U-alice"),
    )
    assert created.status_code == 201
    request_id = created.get_json()["request"]["request_id"]

    nxt = client.get("/api/makeup/next", headers=_as("U-bob")).get_json()
    assert nxt["request"]["request_id"] == request_id

    own = client.post(f"/api/makeup/{request_id}/decision", json={"decision": "approve"}, headers=_as("U-alice"))
    assert own.status_code == 403
    assert own.get_json()["error"] == "SelfApproval"

    env.clock.now = datetime(2026, 2, 10, 10, 15)
    decided = client.post(f"/api/makeup/{request_id}/decision", json={"decision": "approve"}, headers=_as("U-bob"))
    assert decided.status_code == 200
    assert decided.get_json()["request"]["status"] == "approved"

    twice = client.post(f"/api/makeup/{request_id}/decision", json={"decision": "reject"}, headers=_as("U-carol"))
    assert twice.status_code == 409

    mine = client.get("/api/makeup/mine", headers=_as("U-alice")).get_json()
    assert [r["status"] for r in mine["requests"]] == ["approved"]


def test_dialog_endpoint(client):
    steps = [("start", None), ("shift", "morning"), ("action", "checkOut")]
    for step, value in steps:
        resp = client.post("/api/dialog/makeup", json={"step": step, "value": value}, headers=_as("U-alice"))
        assert resp.status_code == 200

    done = client.post("/api/dialog/makeup", json={"step": "reason", "value": "Left in a hurry"}, headers=_as("U-alice"))
    assert done.status_code == 201
    assert done.get_json()["request"]["action"] == "checkOut"

    unknown = client.post("/api/dialog/makeup", json={"step": "dance"}, headers=_as("U-alice"))
    assert unknown.status_code == 400


def test_summary_and_payroll(client):
    summary = client.get("/api/summary?month=2026-02", headers=_as("U-alice"))
    assert summary.status_code == 200
    assert summary.get_json()["summary"]["late_minutes"] == 0

    payroll = client.get("/api/payroll?month=2026-02", headers=_as("U-alice")).get_json()
    assert payroll["payroll"]["net_pay"] == 32000

    assert client.get("/api/payroll?employee_id=E004", headers=_as("U-alice")).status_code == 403
    assert client.get("/api/summary?employee_id=E001", headers=_as("U-bob")).status_code == 200
    assert client.get("/api/summary?month=2026-13", headers=_as("U-alice")).status_code == 400


def test_admin_stamp_with_utc_offset_is_rejected(env, client):
    env.schedules.add("E001", date(2026, 2, 10), ShiftSlot.MORNING, time(9, 0), time(18, 0))

    resp = client.post(
        "/api/admin/attendance/stamp",
        json={
            "employee_id": "E001",
            "date": "2026-02-10",
            "shift": "morning",
            "action": "checkIn",
            "at": "2026-02-10T09:30:00+08:00",
        },
        headers=_as("U-bob"),
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "ValidationError"
    assert ("E001", date(2026, 2, 10)) not in env.attendance.records


def test_attendance_day_reports_calendar_day_type(env, client):
    env.day_types.days[date(2026, 2, 8)] = DayType.CLOSED

    closed = client.get("/api/attendance?date=2026-02-08", headers=_as("U-alice")).get_json()
    open_day = client.get("/api/attendance?date=2026-02-09", headers=_as("U-alice")).get_json()

    assert closed["day_type"] == "closed"
    assert open_day["day_type"] == "open"
