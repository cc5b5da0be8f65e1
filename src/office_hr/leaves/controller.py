from __future__ import annotations

from flask import Flask, request

from ..common.web import admin_required, current_actor, date_field, int_arg, json_body, login_required, ok, required_field
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["GET"], endpoint="leaves_list")
    @login_required
    def list_leaves():
        leaves = container.leave_service.list_leaves(current_actor(), status=request.args.get("status"))
        return ok({"leaves": [leave.to_dict() for leave in leaves], "total": len(leaves)})

    @app.route("/api/leaves", methods=["POST"], endpoint="leaves_create")
    @login_required
    def create_leave():
        data = json_body()
        leave = container.leave_service.create(
            current_actor(),
            leave_type=required_field(data, "leave_type"),
            start_date=date_field(required_field(data, "start_date"), "start_date"),
            end_date=date_field(required_field(data, "end_date"), "end_date"),
            reason=str(data.get("reason") or ""),
        )
        return ok(leave.to_dict(), 201)

    @app.route("/api/leaves/<int:leave_id>/approve", methods=["POST"], endpoint="leaves_approve")
    @admin_required
    def approve_leave(leave_id: int):
        leave = container.leave_service.approve(current_actor(), leave_id=leave_id)
        return ok(leave.to_dict())

    @app.route("/api/leaves/<int:leave_id>/reject", methods=["POST"], endpoint="leaves_reject")
    @admin_required
    def reject_leave(leave_id: int):
        data = request.get_json(silent=True) or {}
        leave = container.leave_service.reject(
            current_actor(),
            leave_id=leave_id,
            reason=data.get("rejection_reason"),
        )
        return ok(leave.to_dict())

    @app.route("/api/leaves/balance", methods=["GET"], endpoint="leaves_balance")
    @login_required
    def leave_balance():
        balance = container.leave_service.get_balance(current_actor(), employee_id=int_arg("employee_id"))
        return ok(balance.to_dict())
