from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, current_actor, json_body, login_required, ok, required_field
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/departments", methods=["GET"], endpoint="departments_list")
    @login_required
    def list_departments():
        return ok([d.to_dict() for d in container.organization_service.list_departments()])

    @app.route("/api/departments", methods=["POST"], endpoint="departments_create")
    @admin_required
    def create_department():
        data = json_body()
        department = container.organization_service.create_department(
            current_actor(),
            name=str(required_field(data, "name")),
            description=data.get("description"),
        )
        return ok(department.to_dict(), 201)

    @app.route("/api/departments/<int:department_id>", methods=["PUT"], endpoint="departments_update")
    @admin_required
    def update_department(department_id: int):
        data = json_body()
        department = container.organization_service.update_department(
            current_actor(),
            department_id=department_id,
            name=str(required_field(data, "name")),
            description=data.get("description"),
        )
        return ok(department.to_dict())

    @app.route("/api/departments/<int:department_id>", methods=["DELETE"], endpoint="departments_delete")
    @admin_required
    def delete_department(department_id: int):
        container.organization_service.delete_department(current_actor(), department_id=department_id)
        return ok({"message": "Department deleted successfully"})

    @app.route("/api/designations", methods=["GET"], endpoint="designations_list")
    @login_required
    def list_designations():
        return ok([d.to_dict() for d in container.organization_service.list_designations()])

    @app.route("/api/designations", methods=["POST"], endpoint="designations_create")
    @admin_required
    def create_designation():
        data = json_body()
        designation = container.organization_service.create_designation(
            current_actor(),
            title=str(required_field(data, "title")),
            description=data.get("description"),
        )
        return ok(designation.to_dict(), 201)

    @app.route("/api/designations/<int:designation_id>", methods=["PUT"], endpoint="designations_update")
    @admin_required
    def update_designation(designation_id: int):
        data = json_body()
        designation = container.organization_service.update_designation(
            current_actor(),
            designation_id=designation_id,
            title=str(required_field(data, "title")),
            description=data.get("description"),
        )
        return ok(designation.to_dict())

    @app.route("/api/designations/<int:designation_id>", methods=["DELETE"], endpoint="designations_delete")
    @admin_required
    def delete_designation(designation_id: int):
        container.organization_service.delete_designation(current_actor(), designation_id=designation_id)
        return ok({"message": "Designation deleted successfully"})
