from __future__ import annotations

from flask import Flask, request

from ..common.validators import optional_id
from ..common.web import admin_required, json_body, login_required, ok, query_date
from ..container import Container
from .service import ExpenseService


def _register_routes(app: Flask, service: ExpenseService, *, path: str, name: str) -> None:
    """Same CRUD routes for each expense table; ``name`` keeps endpoints unique."""

    @app.route(path, methods=["GET"], endpoint=f"{name}_list")
    @login_required
    def list_expenses():
        return ok(
            service.list_expenses(
                project_id=optional_id(request.args.get("project_id"), "project_id"),
                date_from=query_date("date_from"),
                date_to=query_date("date_to"),
            )
        )

    @app.route(path, methods=["POST"], endpoint=f"{name}_create")
    @login_required
    def create_expense():
        return ok(service.create(json_body()), 201)

    @app.route(f"{path}/<int:expense_id>", methods=["GET"], endpoint=f"{name}_get")
    @login_required
    def get_expense(expense_id: int):
        return ok(service.get(expense_id))

    @app.route(f"{path}/<int:expense_id>", methods=["PUT", "PATCH"], endpoint=f"{name}_update")
    @login_required
    def update_expense(expense_id: int):
        return ok(service.update(expense_id, json_body()))

    @app.route(f"{path}/<int:expense_id>", methods=["DELETE"], endpoint=f"{name}_delete")
    @admin_required
    def delete_expense(expense_id: int):
        service.delete(expense_id)
        return ok()


def register(app: Flask, container: Container) -> None:
    _register_routes(app, container.transportation_service, path="/api/transportation-expenses", name="transportation")
    _register_routes(app, container.misc_expense_service, path="/api/worker-misc-expenses", name="misc_expenses")
