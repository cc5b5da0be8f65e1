from __future__ import annotations

from flask import Flask, request

from ..common.web import current_actor, date_field, int_arg, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="attendance_checkin")
    @login_required
    def checkin():
        record = container.attendance_service.check_in(current_actor())
        return ok(record.to_dict(), 201)

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="attendance_checkout")
    @login_required
    def checkout():
        record = container.attendance_service.check_out(current_actor())
        return ok(record.to_dict())

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def today():
        record = container.attendance_service.get_today(current_actor())
        return ok(record.to_dict() if record else None)

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def list_attendance():
        rows = container.attendance_service.list_attendance(
            current_actor(),
            employee_id=int_arg("employee_id"),
            start=date_field(request.args.get("start"), "start"),
            end=date_field(request.args.get("end"), "end"),
        )
        return ok({"attendance": [r.to_dict() for r in rows], "total": len(rows)})
