from __future__ import annotations

from flask import Flask, request

from ..common.validators import optional_id
from ..common.web import admin_required, json_body, login_required, ok, query_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    transfers = container.worker_transfer_service

    @app.route("/api/worker-transfers", methods=["GET"], endpoint="worker_transfers_list")
    @login_required
    def list_transfers():
        return ok(
            transfers.list_transfers(
                worker_id=optional_id(request.args.get("worker_id"), "worker_id"),
                project_id=optional_id(request.args.get("project_id"), "project_id"),
                date_from=query_date("date_from"),
                date_to=query_date("date_to"),
            )
        )

    @app.route("/api/worker-transfers", methods=["POST"], endpoint="worker_transfers_create")
    @login_required
    def create_transfer():
        return ok(transfers.create(json_body()), 201)

    @app.route("/api/worker-transfers/<int:transfer_id>", methods=["GET"], endpoint="worker_transfers_get")
    @login_required
    def get_transfer(transfer_id: int):
        return ok(transfers.get(transfer_id))

    @app.route("/api/worker-transfers/<int:transfer_id>", methods=["PUT", "PATCH"], endpoint="worker_transfers_update")
    @login_required
    def update_transfer(transfer_id: int):
        return ok(transfers.update(transfer_id, json_body()))

    @app.route("/api/worker-transfers/<int:transfer_id>", methods=["DELETE"], endpoint="worker_transfers_delete")
    @admin_required
    def delete_transfer(transfer_id: int):
        transfers.delete(transfer_id)
        return ok()
