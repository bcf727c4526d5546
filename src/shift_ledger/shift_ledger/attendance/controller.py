from __future__ import annotations

from datetime import datetime
from typing import Optional

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_identity, json_body, ok, require_admin
from ..common.validators import require_enum
from ..container import Container
from ..core.enums import ShiftSlot, StampAction, StampSource
from ..core.exceptions import ValidationError
from .model import AttendanceRecord, SlotRecord


def _fmt(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat(timespec="seconds") if value else None


def slot_to_dict(slot: SlotRecord) -> dict:
    return {
        "check_in": _fmt(slot.check_in),
        "check_out": _fmt(slot.check_out),
        "check_in_source": slot.check_in_source.value if slot.check_in_source else None,
        "check_out_source": slot.check_out_source.value if slot.check_out_source else None,
        "planned_start": _fmt(slot.planned_start),
        "planned_end": _fmt(slot.planned_end),
        "has_schedule": slot.has_schedule,
        "late_minutes": slot.late_minutes,
        "early_minutes": slot.early_minutes,
        "overtime_minutes": slot.overtime_minutes,
        "out_of_order": slot.out_of_order,
    }


def record_to_dict(record: AttendanceRecord) -> dict:
    return {
        "employee_id": record.employee_id,
        "date": record.work_date.strftime("%Y-%m-%d"),
        "morning": slot_to_dict(record.morning),
        "night": slot_to_dict(record.night),
        "late_minutes": record.late_minutes,
        "early_minutes": record.early_minutes,
        "overtime_minutes": record.overtime_minutes,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/stamp", methods=["POST"], endpoint="attendance_stamp")
    def attendance_stamp():
        identity = current_identity(container.identity_resolver)
        data = json_body()
        shift = require_enum(ShiftSlot, data.get("shift"), "Shift")
        action = require_enum(StampAction, data.get("action"), "Action")
        work_date = parse_iso_date(data["date"]) if data.get("date") else container.clock().date()

        record = container.ledger.stamp(identity.employee_id, work_date, shift, action)
        return ok(f"{shift.value} {action.value} recorded", record=record_to_dict(record))

    @app.route("/api/admin/attendance/stamp", methods=["POST"], endpoint="admin_attendance_stamp")
    def admin_attendance_stamp():
        identity = current_identity(container.identity_resolver)
        require_admin(identity)

        data = json_body()
        employee_id = str(data.get("employee_id") or "").strip()
        if not employee_id:
            raise ValidationError("employee_id is required")
        container.identity_resolver.employee(employee_id)

        at = None
        if data.get("at"):
            try:
                at = datetime.fromisoformat(str(data["at"]))
            except ValueError:
                raise ValidationError("at must be an ISO datetime")
            if at.tzinfo is not None:
                raise ValidationError("at must be local time without a UTC offset")

        record = container.ledger.stamp(
            employee_id,
            parse_iso_date(str(data.get("date") or "")),
            require_enum(ShiftSlot, data.get("shift"), "Shift"),
            require_enum(StampAction, data.get("action"), "Action"),
            source=StampSource.ADMIN,
            at=at,
            overwrite=bool(data.get("overwrite", False)),
        )
        return ok("Administrative stamp recorded", record=record_to_dict(record))

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_day")
    def attendance_day():
        identity = current_identity(container.identity_resolver)
        date_s = request.args.get("date")
        work_date = parse_iso_date(date_s) if date_s else container.clock().date()

        employee_id = identity.employee_id
        if request.args.get("employee_id") and request.args["employee_id"] != identity.employee_id:
            require_admin(identity)
            employee_id = request.args["employee_id"]

        record = container.ledger.get_or_empty(employee_id, work_date)
        day_type = container.schedule_service.day_type(work_date)
        return ok("OK", record=record_to_dict(record), day_type=day_type.value)
