from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, current_actor, date_field, int_field, json_body, login_required, ok, required_field
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/tasks", methods=["GET"], endpoint="tasks_list")
    @login_required
    def list_tasks():
        tasks = container.task_service.list_tasks(current_actor())
        return ok({"tasks": [t.to_dict() for t in tasks], "total": len(tasks)})

    @app.route("/api/tasks", methods=["POST"], endpoint="tasks_create")
    @admin_required
    def create_task():
        data = json_body()
        task = container.task_service.create(
            current_actor(),
            title=str(required_field(data, "title")),
            description=str(data.get("description") or ""),
            assigned_to=int_field(data, "assigned_to"),
            due_date=date_field(required_field(data, "due_date"), "due_date"),
            priority=data.get("priority") or "medium",
        )
        return ok(task.to_dict(), 201)

    @app.route("/api/tasks/<int:task_id>/status", methods=["POST"], endpoint="tasks_status")
    @login_required
    def update_status(task_id: int):
        data = json_body()
        task = container.task_service.update_status(current_actor(), task_id=task_id, status=required_field(data, "status"))
        return ok(task.to_dict())

    @app.route("/api/tasks/<int:task_id>/progress", methods=["POST"], endpoint="tasks_progress")
    @login_required
    def update_progress(task_id: int):
        data = json_body()
        task = container.task_service.update_progress(
            current_actor(),
            task_id=task_id,
            progress=int_field(data, "progress"),
        )
        return ok(task.to_dict())

    @app.route("/api/tasks/<int:task_id>/comments", methods=["GET"], endpoint="tasks_comments")
    @login_required
    def list_comments(task_id: int):
        comments = container.task_service.list_comments(current_actor(), task_id=task_id)
        return ok([c.to_dict() for c in comments])

    @app.route("/api/tasks/<int:task_id>/comments", methods=["POST"], endpoint="tasks_add_comment")
    @login_required
    def add_comment(task_id: int):
        data = json_body()
        comment = container.task_service.add_comment(current_actor(), task_id=task_id, comment=str(data.get("comment") or ""))
        return ok(comment.to_dict(), 201)

    @app.route("/api/tasks/stats", methods=["GET"], endpoint="tasks_stats")
    @login_required
    def task_stats():
        return ok(container.task_service.stats(current_actor()).to_dict())

    @app.route("/api/tasks/<int:task_id>", methods=["GET"], endpoint="tasks_get")
    @login_required
    def get_task(task_id: int):
        actor = current_actor()
        task = container.task_service.get(actor, task_id=task_id)
        data = task.to_dict()
        data["comments"] = [c.to_dict() for c in container.task_service.list_comments(actor, task_id=task_id)]
        return ok(data)

    @app.route("/api/tasks/<int:task_id>", methods=["PUT"], endpoint="tasks_update")
    @login_required
    def update_task(task_id: int):
        data = json_body()
        title = data.get("title")
        description = data.get("description")
        task = container.task_service.update(
            current_actor(),
            task_id=task_id,
            title=str(title) if title is not None else None,
            description=str(description) if description is not None else None,
            assigned_to=int_field(data, "assigned_to") if data.get("assigned_to") not in (None, "") else None,
            priority=data.get("priority"),
            due_date=date_field(data.get("due_date"), "due_date"),
        )
        return ok(task.to_dict())

    @app.route("/api/tasks/<int:task_id>", methods=["DELETE"], endpoint="tasks_delete")
    @admin_required
    def delete_task(task_id: int):
        container.task_service.delete(current_actor(), task_id=task_id)
        return ok({"message": "Task deleted successfully"})
