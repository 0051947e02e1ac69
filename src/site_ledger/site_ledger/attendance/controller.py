from __future__ import annotations

from flask import Flask, request

from ..common.validators import optional_id
from ..common.web import admin_required, json_body, login_required, ok, query_date, query_project_ids
from ..container import Container


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    @app.route("/api/worker-attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def list_attendance():
        day = query_date("date")
        records = attendance.filter(
            worker_id=optional_id(request.args.get("worker_id"), "worker_id"),
            project_ids=query_project_ids(),
            date_from=day or query_date("date_from"),
            date_to=day or query_date("date_to"),
        )
        return ok(records, count=len(records))

    @app.route("/api/projects/<int:project_id>/attendance", methods=["GET"], endpoint="attendance_for_project")
    @login_required
    def project_attendance(project_id: int):
        return ok(attendance.list_for_project(project_id, work_date=query_date("date")))

    @app.route("/api/worker-attendance", methods=["POST"], endpoint="attendance_create")
    @login_required
    def record_attendance():
        return ok(attendance.record(json_body()), 201)

    @app.route("/api/worker-attendance/<int:attendance_id>", methods=["GET"], endpoint="attendance_get")
    @login_required
    def get_attendance(attendance_id: int):
        return ok(attendance.get(attendance_id))

    @app.route("/api/worker-attendance/<int:attendance_id>", methods=["PUT", "PATCH"], endpoint="attendance_update")
    @login_required
    def update_attendance(attendance_id: int):
        return ok(attendance.update(attendance_id, json_body()))

    @app.route("/api/worker-attendance/<int:attendance_id>", methods=["DELETE"], endpoint="attendance_delete")
    @admin_required
    def delete_attendance(attendance_id: int):
        attendance.delete(attendance_id)
        return ok()
