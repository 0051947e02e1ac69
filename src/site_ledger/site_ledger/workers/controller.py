from __future__ import annotations

from flask import Flask, request

from ..common.validators import parse_bool
from ..common.web import admin_required, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    workers = container.worker_service

    @app.route("/api/workers", methods=["GET"], endpoint="workers_list")
    @login_required
    def list_workers():
        active_only = parse_bool(request.args.get("active_only"), default=False)
        return ok(workers.list_workers(active_only=active_only))

    @app.route("/api/workers", methods=["POST"], endpoint="workers_create")
    @login_required
    def create_worker():
        data = json_body()
        worker = workers.create_worker(
            name=data.get("name"),
            type=data.get("type"),
            daily_wage=data.get("daily_wage"),
            is_active=data.get("is_active", True),
        )
        return ok(worker, 201)

    @app.route("/api/workers/<int:worker_id>", methods=["GET"], endpoint="workers_get")
    @login_required
    def get_worker(worker_id: int):
        return ok(workers.get_worker(worker_id))

    @app.route("/api/workers/<int:worker_id>", methods=["PUT", "PATCH"], endpoint="workers_update")
    @login_required
    def update_worker(worker_id: int):
        return ok(workers.update_worker(worker_id, json_body()))

    @app.route("/api/workers/<int:worker_id>", methods=["DELETE"], endpoint="workers_delete")
    @admin_required
    def delete_worker(worker_id: int):
        workers.delete_worker(worker_id)
        return ok()

    @app.route("/api/workers/<int:worker_id>/projects", methods=["GET"], endpoint="workers_projects")
    @login_required
    def worker_projects(worker_id: int):
        return ok(workers.worker_projects(worker_id))

    @app.route(
        "/api/workers/<int:worker_id>/balance/<int:project_id>", methods=["GET"], endpoint="workers_balance"
    )
    @login_required
    def worker_balance(worker_id: int, project_id: int):
        return ok(container.statement_service.worker_balance(worker_id=worker_id, project_id=project_id))

    @app.route("/api/worker-types", methods=["GET"], endpoint="worker_types_list")
    @login_required
    def list_worker_types():
        return ok(workers.list_worker_types())

    @app.route("/api/worker-types", methods=["POST"], endpoint="worker_types_create")
    @login_required
    def create_worker_type():
        return ok(workers.create_worker_type(json_body().get("name")), 201)
