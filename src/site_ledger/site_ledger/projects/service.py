from __future__ import annotations

import logging
from typing import Any, Optional

from ..common.datetime_utils import now_local
from ..common.validators import parse_enum, require_non_empty
from ..core.enums import ProjectStatus
from ..core.exceptions import ConflictError, NotFoundError
from ..ledger import LedgerSources
from ..purchases.repository import MaterialRepository
from ..summaries.service import DailySummaryService
from ..workers.repository import WorkerRepository
from .model import Project, ProjectOverview, ProjectStatistics, StatsSummary
from .repository import ProjectRepository

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(
        self,
        projects: ProjectRepository,
        sources: LedgerSources,
        summaries: DailySummaryService,
        *,
        workers: WorkerRepository,
        materials: MaterialRepository,
    ):
        self._projects = projects
        self._sources = sources
        self._summaries = summaries
        self._workers = workers
        self._materials = materials

    def list_projects(self) -> list[Project]:
        return list(self._projects.list_all())

    def get_project(self, project_id: int) -> Project:
        project = self._projects.get_by_id(int(project_id))
        if not project:
            raise NotFoundError("Project not found")
        return project

    def create_project(self, *, name: Optional[str], status: Any = None) -> Project:
        name = require_non_empty(name, "Project name")
        status = parse_enum(ProjectStatus, status, "status", default=ProjectStatus.ACTIVE)
        if self._projects.get_by_name(name):
            raise ConflictError("A project with this name already exists")

        project_id = self._projects.create(name=name, status=status)
        logger.info("project created id=%s name=%s", project_id, name)
        return self.get_project(project_id)

    def update_project(self, project_id: int, *, name: Optional[str] = None, status: Any = None) -> Project:
        current = self.get_project(project_id)
        new_name = require_non_empty(name, "Project name") if name is not None else current.name
        new_status = parse_enum(ProjectStatus, status, "status", default=current.status)

        other = self._projects.get_by_name(new_name)
        if other and other.project_id != current.project_id:
            raise ConflictError("A project with this name already exists")

        self._projects.update(current.project_id, name=new_name, status=new_status)
        return self.get_project(current.project_id)

    def delete_project(self, project_id: int) -> None:
        """Delete the project; projects it exchanged funds with get those days refreshed."""
        project = self.get_project(project_id)
        moves = list(self._sources.project_transfers.list_filtered(project_id=project.project_id))
        for move in moves:
            self._sources.project_transfers.delete_by_id(move.project_transfer_id)
        self._summaries.forget_project(project.project_id)
        self._projects.delete_by_id(project.project_id)

        self._summaries.refresh_days(
            (m.to_project_id if m.from_project_id == project.project_id else m.from_project_id, m.transfer_date)
            for m in moves
        )
        logger.info("project deleted id=%s (project transfers=%s)", project.project_id, len(moves))

    def statistics(self, project_id: int) -> ProjectStatistics:
        project = self.get_project(project_id)
        activity = self._sources.activity(project.project_id)
        totals = activity.totals()
        return ProjectStatistics(
            project_id=project.project_id,
            total_workers=len({a.worker_id for a in activity.attendance}),
            completed_days=len({a.work_date for a in activity.attendance}),
            material_purchases=len(activity.purchases),
            total_income=totals.income,
            total_expenses=totals.expenses,
            current_balance=totals.balance,
        )

    def list_with_statistics(self) -> list[ProjectOverview]:
        return [
            ProjectOverview(project=p, statistics=self.statistics(p.project_id)) for p in self._projects.list_all()
        ]

    def stats_summary(self) -> StatsSummary:
        projects = list(self._projects.list_all())
        workers = list(self._workers.list_all())
        return StatsSummary(
            total_projects=len(projects),
            active_projects=sum(1 for p in projects if p.status == ProjectStatus.ACTIVE),
            total_workers=len(workers),
            active_workers=sum(1 for w in workers if w.is_active),
            total_materials=len(self._materials.list_all()),
            last_updated=now_local(),
        )
