from __future__ import annotations

from flask import Flask, request

from ..common.validators import optional_id
from ..common.web import admin_required, json_body, login_required, ok, query_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    funds = container.fund_transfer_service
    moves = container.project_transfer_service

    # Fund transfers (money received by a project)

    @app.route("/api/fund-transfers", methods=["GET"], endpoint="fund_transfers_list")
    @login_required
    def list_fund_transfers():
        return ok(
            funds.list_transfers(
                project_id=optional_id(request.args.get("project_id"), "project_id"),
                date_from=query_date("date_from"),
                date_to=query_date("date_to"),
            )
        )

    @app.route("/api/fund-transfers", methods=["POST"], endpoint="fund_transfers_create")
    @login_required
    def create_fund_transfer():
        return ok(funds.create(json_body()), 201)

    @app.route("/api/fund-transfers/<int:transfer_id>", methods=["GET"], endpoint="fund_transfers_get")
    @login_required
    def get_fund_transfer(transfer_id: int):
        return ok(funds.get(transfer_id))

    @app.route("/api/fund-transfers/<int:transfer_id>", methods=["PUT", "PATCH"], endpoint="fund_transfers_update")
    @login_required
    def update_fund_transfer(transfer_id: int):
        return ok(funds.update(transfer_id, json_body()))

    @app.route("/api/fund-transfers/<int:transfer_id>", methods=["DELETE"], endpoint="fund_transfers_delete")
    @admin_required
    def delete_fund_transfer(transfer_id: int):
        funds.delete(transfer_id)
        return ok()

    # Project to project transfers

    @app.route("/api/project-fund-transfers", methods=["GET"], endpoint="project_transfers_list")
    @login_required
    def list_project_transfers():
        return ok(
            moves.list_transfers(
                project_id=optional_id(request.args.get("project_id"), "project_id"),
                date_from=query_date("date_from"),
                date_to=query_date("date_to"),
            )
        )

    @app.route("/api/project-fund-transfers", methods=["POST"], endpoint="project_transfers_create")
    @login_required
    def create_project_transfer():
        return ok(moves.create(json_body()), 201)

    @app.route("/api/project-fund-transfers/<int:transfer_id>", methods=["GET"], endpoint="project_transfers_get")
    @login_required
    def get_project_transfer(transfer_id: int):
        return ok(moves.get(transfer_id))

    @app.route(
        "/api/project-fund-transfers/<int:transfer_id>", methods=["PUT", "PATCH"], endpoint="project_transfers_update"
    )
    @login_required
    def update_project_transfer(transfer_id: int):
        return ok(moves.update(transfer_id, json_body()))

    @app.route("/api/project-fund-transfers/<int:transfer_id>", methods=["DELETE"], endpoint="project_transfers_delete")
    @admin_required
    def delete_project_transfer(transfer_id: int):
        moves.delete(transfer_id)
        return ok()
