from __future__ import annotations

from flask import Flask, request

from ..common.web import admin_required, current_actor, date_field, int_field, json_body, login_required, ok, required_field
from ..container import Container


def _optional_str(data: dict, name: str):
    value = data.get(name)
    return None if value is None else str(value)


def _optional_int(data: dict, name: str):
    return int_field(data, name) if data.get(name) not in (None, "") else None


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @admin_required
    def list_employees():
        users = container.employee_service.list_employees(current_actor(), search=request.args.get("search"))
        return ok({"employees": [u.to_dict() for u in users], "total": len(users)})

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @admin_required
    def create_employee():
        data = json_body()
        user = container.employee_service.create(
            current_actor(),
            full_name=str(required_field(data, "full_name")),
            email=str(required_field(data, "email")),
            department_id=_optional_int(data, "department_id"),
            designation_id=_optional_int(data, "designation_id"),
            date_of_joining=date_field(data.get("date_of_joining"), "date_of_joining"),
            salary=data.get("salary") or 0,
            role=data.get("role") or "employee",
        )
        return ok(user.to_dict(), 201)

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    @login_required
    def get_employee(employee_id: int):
        return ok(container.employee_service.get(current_actor(), employee_id=employee_id).to_dict())

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    @admin_required
    def update_employee(employee_id: int):
        data = json_body()
        user = container.employee_service.update(
            current_actor(),
            employee_id=employee_id,
            full_name=_optional_str(data, "full_name"),
            email=_optional_str(data, "email"),
            department_id=_optional_int(data, "department_id"),
            designation_id=_optional_int(data, "designation_id"),
            salary=data.get("salary"),
            leave_balance=data.get("leave_balance"),
        )
        return ok(user.to_dict())

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_deactivate")
    @admin_required
    def deactivate_employee(employee_id: int):
        container.employee_service.deactivate(current_actor(), employee_id=employee_id)
        return ok({"message": "Employee deactivated successfully"})
