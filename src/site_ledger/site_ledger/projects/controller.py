from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    projects = container.project_service

    @app.route("/api/projects", methods=["GET"], endpoint="projects_list")
    @login_required
    def list_projects():
        return ok(projects.list_projects())

    @app.route("/api/projects", methods=["POST"], endpoint="projects_create")
    @login_required
    def create_project():
        data = json_body()
        return ok(projects.create_project(name=data.get("name"), status=data.get("status")), 201)

    @app.route("/api/projects/<int:project_id>", methods=["GET"], endpoint="projects_get")
    @login_required
    def get_project(project_id: int):
        return ok(projects.get_project(project_id))

    @app.route("/api/projects/<int:project_id>", methods=["PUT", "PATCH"], endpoint="projects_update")
    @login_required
    def update_project(project_id: int):
        data = json_body()
        return ok(projects.update_project(project_id, name=data.get("name"), status=data.get("status")))

    @app.route("/api/projects/<int:project_id>", methods=["DELETE"], endpoint="projects_delete")
    @admin_required
    def delete_project(project_id: int):
        projects.delete_project(project_id)
        return ok()

    @app.route("/api/projects/<int:project_id>/statistics", methods=["GET"], endpoint="projects_statistics")
    @login_required
    def project_statistics(project_id: int):
        return ok(projects.statistics(project_id))

    @app.route("/api/projects/with-stats", methods=["GET"], endpoint="projects_with_stats")
    @login_required
    def projects_with_stats():
        return ok(projects.list_with_statistics())

    @app.route("/api/stats-summary", methods=["GET"], endpoint="stats_summary")
    @login_required
    def stats_summary():
        return ok(projects.stats_summary())
