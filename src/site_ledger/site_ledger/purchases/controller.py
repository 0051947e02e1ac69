from __future__ import annotations

from flask import Flask, request

from ..common.validators import optional_id
from ..common.web import admin_required, json_body, login_required, ok, query_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    purchases = container.purchase_service

    @app.route("/api/materials", methods=["GET"], endpoint="materials_list")
    @login_required
    def list_materials():
        return ok(purchases.list_materials())

    @app.route("/api/materials", methods=["POST"], endpoint="materials_create")
    @login_required
    def create_material():
        data = json_body()
        material = purchases.find_or_create_material(
            name=data.get("name"), unit=data.get("unit"), category=data.get("category")
        )
        return ok(material, 201)

    @app.route("/api/material-purchases", methods=["GET"], endpoint="purchases_list")
    @login_required
    def list_purchases():
        return ok(
            purchases.list_purchases(
                project_id=optional_id(request.args.get("project_id"), "project_id"),
                date_from=query_date("date_from"),
                date_to=query_date("date_to"),
                purchase_type=request.args.get("purchase_type"),
                supplier_id=optional_id(request.args.get("supplier_id"), "supplier_id"),
            )
        )

    @app.route("/api/material-purchases", methods=["POST"], endpoint="purchases_create")
    @login_required
    def create_purchase():
        return ok(purchases.create(json_body()), 201)

    @app.route("/api/material-purchases/<int:purchase_id>", methods=["GET"], endpoint="purchases_get")
    @login_required
    def get_purchase(purchase_id: int):
        return ok(purchases.get(purchase_id))

    @app.route("/api/material-purchases/<int:purchase_id>", methods=["PUT", "PATCH"], endpoint="purchases_update")
    @login_required
    def update_purchase(purchase_id: int):
        return ok(purchases.update(purchase_id, json_body()))

    @app.route("/api/material-purchases/<int:purchase_id>", methods=["DELETE"], endpoint="purchases_delete")
    @admin_required
    def delete_purchase(purchase_id: int):
        purchases.delete(purchase_id)
        return ok()
