from types import SimpleNamespace

import pytest

from office_hr.container import build_services
from office_hr.core.enums import Role
from office_hr.main import create_app
from tests.fakes import (
    InMemoryAttendance,
    InMemoryDepartments,
    InMemoryDesignations,
    InMemoryLeaves,
    InMemorySalaries,
    InMemoryTasks,
    InMemoryUsers,
    make_user,
)


@pytest.fixture
def app():
    users = InMemoryUsers(make_user(1, role=Role.ADMIN), make_user(2))
    container = build_services(
        users=users,
        attendance=InMemoryAttendance(),
        leaves=InMemoryLeaves(users),
        salaries=InMemorySalaries(),
        tasks=InMemoryTasks(),
        departments=InMemoryDepartments("Engineering"),
        designations=InMemoryDesignations("Developer"),
        settings=SimpleNamespace(ATTENDANCE_CUTOFF="09:00", PAYROLL_RATES={}, ALLOW_NEGATIVE_LEAVE_BALANCE=False),
    )
    return create_app(container=container, settings_module="office_hr.config.testing")


def _login(client, user_id, role):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


@pytest.fixture
def employee(app):
    client = app.test_client()
    _login(client, 2, "employee")
    return client


@pytest.fixture
def admin(app):
    client = app.test_client()
    _login(client, 1, "admin")
    return client


def test_anonymous_request_is_rejected(app):
    resp = app.test_client().get("/api/attendance/today")
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_second_checkin_is_conflict(employee):
    first = employee.post("/api/attendance/checkin")
    assert first.status_code == 201
    assert first.get_json()["data"]["employee_id"] == 2

    second = employee.post("/api/attendance/checkin")
    assert second.status_code == 409
    assert second.get_json()["error"] == "DuplicateCheckInError"


def test_checkout_without_checkin_is_conflict(employee):
    resp = employee.post("/api/attendance/checkout")
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "MissingCheckInError"


def test_leave_flow(employee, admin):
    created = employee.post(
        "/api/leaves",
        json={"leave_type": "annual", "start_date": "2026-03-09", "end_date": "2026-03-11", "reason": "Trip"},
    )
    assert created.status_code == 201
    leave_id = created.get_json()["data"]["leave_id"]
    assert created.get_json()["data"]["days"] == 3

    assert employee.post(f"/api/leaves/{leave_id}/approve").status_code == 403

    approved = admin.post(f"/api/leaves/{leave_id}/approve")
    assert approved.get_json()["data"]["status"] == "approved"

    again = admin.post(f"/api/leaves/{leave_id}/reject", json={"rejection_reason": "late"})
    assert again.status_code == 409

    balance = employee.get("/api/leaves/balance").get_json()["data"]
    assert balance["annual"] == "17"


def test_inverted_leave_range_is_bad_request(employee):
    resp = employee.post(
        "/api/leaves",
        json={"leave_type": "sick", "start_date": "2026-03-11", "end_date": "2026-03-09"},
    )
    assert resp.status_code == 400


def test_salary_generation_and_payment(admin):
    generated = admin.post("/api/salaries/generate", json={"employee_id": 2, "month": 2, "year": 2026})
    assert generated.status_code == 201
    salary = generated.get_json()["data"]
    assert salary["working_days"] == 0
    assert salary["net_salary"] == "3600.00"

    duplicate = admin.post("/api/salaries/generate", json={"employee_id": 2, "month": 2, "year": 2026})
    assert duplicate.status_code == 409

    assert admin.post(f"/api/salaries/{salary['salary_id']}/pay").status_code == 200
    assert admin.post(f"/api/salaries/{salary['salary_id']}/pay").status_code == 409
    assert admin.post("/api/salaries/999/pay").status_code == 404


def test_bad_integer_is_bad_request(admin):
    resp = admin.post("/api/salaries/generate", json={"employee_id": "two", "month": 2, "year": 2026})
    assert resp.status_code == 400


@pytest.mark.parametrize("role, user_id", [("superuser", 2), ("employee", "abc")])
def test_unrecognised_session_identity_is_unauthorized(app, role, user_id):
    client = app.test_client()
    _login(client, user_id, role)

    assert client.get("/api/attendance/today").status_code == 401
    assert client.get("/api/employees").status_code == 401


def test_employee_management_routes(admin, employee):
    created = admin.post(
        "/api/employees",
        json={"full_name": "Sara Khan", "email": "sara@example.com", "department_id": 1, "salary": "45000"},
    )
    assert created.status_code == 201
    new_id = created.get_json()["data"]["user_id"]

    assert admin.post("/api/employees", json={"full_name": "Dup", "email": "sara@example.com"}).status_code == 409
    assert employee.get("/api/employees").status_code == 403

    updated = admin.put(f"/api/employees/{new_id}", json={"salary": "50000"})
    assert updated.get_json()["data"]["salary"] == "50000"

    assert admin.delete(f"/api/employees/{new_id}").status_code == 200
    listed = admin.get("/api/employees").get_json()["data"]
    assert new_id not in [e["user_id"] for e in listed["employees"]]


def test_department_routes(admin, employee):
    assert employee.post("/api/departments", json={"name": "Sales"}).status_code == 403

    created = admin.post("/api/departments", json={"name": "Sales"})
    assert created.status_code == 201
    assert admin.post("/api/departments", json={"name": "Sales"}).status_code == 409

    names = [d["name"] for d in employee.get("/api/departments").get_json()["data"]]
    assert names == ["Engineering", "Sales"]


def test_task_detail_includes_comments(admin, employee):
    created = admin.post(
        "/api/tasks", json={"title": "Audit", "assigned_to": 2, "due_date": "2026-03-10", "priority": "high"}
    )
    task_id = created.get_json()["data"]["task_id"]
    employee.post(f"/api/tasks/{task_id}/comments", json={"comment": "On it"})

    detail = employee.get(f"/api/tasks/{task_id}").get_json()["data"]
    assert detail["priority"] == "high"
    assert [c["comment"] for c in detail["comments"]] == ["On it"]

    assert admin.delete(f"/api/tasks/{task_id}").status_code == 200
    assert employee.get(f"/api/tasks/{task_id}").status_code == 404
