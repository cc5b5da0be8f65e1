from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, current_actor, int_arg, int_field, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/salaries", methods=["GET"], endpoint="salaries_list")
    @login_required
    def list_salaries():
        records = container.payroll_service.list_salaries(
            current_actor(),
            month=int_arg("month"),
            year=int_arg("year"),
            employee_id=int_arg("employee_id"),
        )
        return ok({"salaries": [r.to_dict() for r in records], "total": len(records)})

    @app.route("/api/salaries/generate", methods=["POST"], endpoint="salaries_generate")
    @admin_required
    def generate_salary():
        data = json_body()
        record = container.payroll_service.generate(
            current_actor(),
            employee_id=int_field(data, "employee_id"),
            month=int_field(data, "month"),
            year=int_field(data, "year"),
        )
        return ok(record.to_dict(), 201)

    @app.route("/api/salaries/<int:salary_id>/pay", methods=["POST"], endpoint="salaries_mark_paid")
    @admin_required
    def mark_paid(salary_id: int):
        record = container.payroll_service.mark_paid(current_actor(), salary_id=salary_id)
        return ok(record.to_dict())
