from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, current_actor, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard/employee", methods=["GET"], endpoint="dashboard_employee")
    @login_required
    def employee_dashboard():
        return ok(container.dashboard_service.employee_stats(current_actor()))

    @app.route("/api/dashboard/admin", methods=["GET"], endpoint="dashboard_admin")
    @admin_required
    def admin_dashboard():
        return ok(container.dashboard_service.admin_stats(current_actor()))
