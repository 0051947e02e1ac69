from __future__ import annotations

from flask import Flask, request

from ..common.validators import parse_id_list, require_id
from ..common.web import login_required, query_date, query_project_ids
from ..container import Container
from .export.response import export_response
from .export.tables import (
    ledger_document,
    material_purchases_document,
    multi_project_document,
    project_summary_document,
    settlement_document,
    worker_statement_document,
)


def register(app: Flask, container: Container) -> None:
    reports = container.statement_service

    @app.route("/api/reports/worker-statement", methods=["GET"], endpoint="report_worker_statement")
    @login_required
    def worker_statement():
        statement = reports.worker_statement(
            worker_id=require_id(request.args.get("worker_id"), "worker_id"),
            project_ids=query_project_ids(),
            date_from=query_date("date_from"),
            date_to=query_date("date_to"),
        )
        return export_response(statement, worker_statement_document(statement))

    @app.route("/api/reports/worker-projects", methods=["GET"], endpoint="report_worker_projects")
    @login_required
    def worker_projects():
        statement = reports.worker_multi_project_statement(
            worker_id=require_id(request.args.get("worker_id"), "worker_id"),
            date_from=query_date("date_from"),
            date_to=query_date("date_to"),
        )
        return export_response(statement, multi_project_document(statement))

    @app.route("/api/reports/workers-settlement", methods=["GET"], endpoint="report_workers_settlement")
    @login_required
    def workers_settlement():
        report = reports.workers_settlement(
            project_ids=query_project_ids(),
            date_from=query_date("date_from"),
            date_to=query_date("date_to"),
            worker_ids=parse_id_list(request.args.get("worker_ids"), "worker_ids"),
        )
        return export_response(report, settlement_document(report))

    @app.route("/api/reports/project-summary", methods=["GET"], endpoint="report_project_summary")
    @login_required
    def project_summary():
        report = reports.project_summary(
            project_id=require_id(request.args.get("project_id"), "project_id"),
            date_from=query_date("date_from"),
            date_to=query_date("date_to"),
        )
        return export_response(report, project_summary_document(report))

    @app.route("/api/reports/expenses", methods=["GET"], endpoint="report_expenses")
    @login_required
    def expenses():
        report = reports.expense_ledger(
            project_id=require_id(request.args.get("project_id"), "project_id"),
            date_from=query_date("date_from"),
            date_to=query_date("date_to"),
        )
        return export_response(report, ledger_document(report))

    @app.route("/api/reports/income", methods=["GET"], endpoint="report_income")
    @login_required
    def income():
        report = reports.income_ledger(
            project_id=require_id(request.args.get("project_id"), "project_id"),
            date_from=query_date("date_from"),
            date_to=query_date("date_to"),
        )
        return export_response(report, ledger_document(report))

    @app.route(
        "/api/reports/material-purchases/<int:project_id>", methods=["GET"], endpoint="report_material_purchases"
    )
    @login_required
    def material_purchases(project_id: int):
        report = reports.material_purchases(
            project_id=project_id, date_from=query_date("date_from"), date_to=query_date("date_to")
        )
        return export_response(report, material_purchases_document(report))
