from __future__ import annotations

from flask import Flask, request

from ..common.validators import optional_id, parse_bool
from ..common.web import admin_required, json_body, login_required, ok, query_date
from ..container import Container
from ..purchases.service import parse_purchase_type
from ..reports.export.response import export_response
from ..reports.export.tables import supplier_statement_document


def register(app: Flask, container: Container) -> None:
    suppliers = container.supplier_service

    @app.route("/api/suppliers", methods=["GET"], endpoint="suppliers_list")
    @login_required
    def list_suppliers():
        active_only = parse_bool(request.args.get("active_only"), default=False)
        return ok(suppliers.list_suppliers(active_only=active_only))

    @app.route("/api/suppliers", methods=["POST"], endpoint="suppliers_create")
    @login_required
    def create_supplier():
        return ok(suppliers.create_supplier(json_body()), 201)

    @app.route("/api/suppliers/statistics", methods=["GET"], endpoint="suppliers_statistics")
    @login_required
    def supplier_statistics():
        raw_type = request.args.get("purchase_type")
        return ok(
            suppliers.statistics(
                supplier_id=optional_id(request.args.get("supplier_id"), "supplier_id"),
                project_id=optional_id(request.args.get("project_id"), "project_id"),
                date_from=query_date("date_from"),
                date_to=query_date("date_to"),
                purchase_type=parse_purchase_type(raw_type) if raw_type else None,
            )
        )

    @app.route("/api/suppliers/<int:supplier_id>", methods=["GET"], endpoint="suppliers_get")
    @login_required
    def get_supplier(supplier_id: int):
        return ok(suppliers.get_supplier(supplier_id))

    @app.route("/api/suppliers/<int:supplier_id>", methods=["PUT", "PATCH"], endpoint="suppliers_update")
    @login_required
    def update_supplier(supplier_id: int):
        return ok(suppliers.update_supplier(supplier_id, json_body()))

    @app.route("/api/suppliers/<int:supplier_id>", methods=["DELETE"], endpoint="suppliers_delete")
    @admin_required
    def delete_supplier(supplier_id: int):
        suppliers.delete_supplier(supplier_id)
        return ok()

    @app.route("/api/suppliers/<int:supplier_id>/statement", methods=["GET"], endpoint="suppliers_statement")
    @login_required
    def supplier_statement(supplier_id: int):
        statement = suppliers.statement(
            supplier_id,
            project_id=optional_id(request.args.get("project_id"), "project_id"),
            date_from=query_date("date_from"),
            date_to=query_date("date_to"),
        )
        return export_response(statement, supplier_statement_document(statement))

    # Payments

    @app.route("/api/supplier-payments", methods=["GET"], endpoint="supplier_payments_list")
    @login_required
    def list_payments():
        return ok(
            suppliers.list_payments(
                supplier_id=optional_id(request.args.get("supplier_id"), "supplier_id"),
                project_id=optional_id(request.args.get("project_id"), "project_id"),
                date_from=query_date("date_from"),
                date_to=query_date("date_to"),
            )
        )

    @app.route("/api/supplier-payments", methods=["POST"], endpoint="supplier_payments_create")
    @login_required
    def create_payment():
        return ok(suppliers.create_payment(json_body()), 201)

    @app.route("/api/supplier-payments/<int:payment_id>", methods=["GET"], endpoint="supplier_payments_get")
    @login_required
    def get_payment(payment_id: int):
        return ok(suppliers.get_payment(payment_id))

    @app.route("/api/supplier-payments/<int:payment_id>", methods=["PUT", "PATCH"], endpoint="supplier_payments_update")
    @login_required
    def update_payment(payment_id: int):
        return ok(suppliers.update_payment(payment_id, json_body()))

    @app.route("/api/supplier-payments/<int:payment_id>", methods=["DELETE"], endpoint="supplier_payments_delete")
    @admin_required
    def delete_payment(payment_id: int):
        suppliers.delete_payment(payment_id)
        return ok()
