from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_required_date
from ..common.web import admin_required, login_required, ok, query_date
from ..container import Container
from ..reports.export.response import export_response
from ..reports.export.tables import daily_expenses_document


def register(app: Flask, container: Container) -> None:
    summaries = container.summary_service
    projects = container.project_service

    @app.route("/api/projects/<int:project_id>/daily-summaries", methods=["GET"], endpoint="summaries_list")
    @login_required
    def list_summaries(project_id: int):
        return ok(
            summaries.list_summaries(project_id, date_from=query_date("date_from"), date_to=query_date("date_to"))
        )

    @app.route("/api/projects/<int:project_id>/daily-summaries/<day>", methods=["GET"], endpoint="summaries_get")
    @login_required
    def get_summary(project_id: int, day: str):
        summary = summaries.get_summary(project_id, day)
        return ok(
            summary,
            previous_balance=summaries.previous_balance(project_id, parse_required_date(day, "date")),
        )

    @app.route(
        "/api/projects/<int:project_id>/daily-summaries/recalculate", methods=["POST"], endpoint="summaries_recalculate"
    )
    @admin_required
    def recalculate(project_id: int):
        rebuilt = summaries.recalculate_all(project_id)
        return ok(rebuilt, count=len(rebuilt))

    @app.route("/api/projects/<int:project_id>/daily-expenses", methods=["GET"], endpoint="summaries_daily_range")
    @login_required
    def daily_expenses(project_id: int):
        days = summaries.daily_range(project_id, request.args.get("date_from"), request.args.get("date_to"))
        project = projects.get_project(project_id)
        return export_response(days, daily_expenses_document(project.name, days))
