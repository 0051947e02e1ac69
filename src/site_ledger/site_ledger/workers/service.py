from __future__ import annotations

import logging
from typing import Any, Optional

from ..attendance.repository import AttendanceRepository
from ..common.validators import parse_bool, reject_unknown_fields, require_non_empty, require_positive_amount
from ..core.exceptions import ConflictError, NotFoundError
from ..projects.model import Project
from ..projects.repository import ProjectRepository
from ..summaries.service import DailySummaryService
from ..transfers.repository import WorkerTransferRepository
from .model import Worker, WorkerType
from .repository import WorkerRepository, WorkerTypeRepository

logger = logging.getLogger(__name__)

_EDITABLE = ("name", "type", "daily_wage", "is_active")


class WorkerService:
    def __init__(
        self,
        workers: WorkerRepository,
        worker_types: WorkerTypeRepository,
        projects: ProjectRepository,
        attendance: AttendanceRepository,
        transfers: WorkerTransferRepository,
        summaries: DailySummaryService,
    ):
        self._workers = workers
        self._worker_types = worker_types
        self._projects = projects
        self._attendance = attendance
        self._transfers = transfers
        self._summaries = summaries

    def list_workers(self, *, active_only: bool = False) -> list[Worker]:
        return list(self._workers.list_all(active_only=active_only))

    def get_worker(self, worker_id: int) -> Worker:
        worker = self._workers.get_by_id(int(worker_id))
        if not worker:
            raise NotFoundError("Worker not found")
        return worker

    def create_worker(
        self,
        *,
        name: Optional[str],
        type: Optional[str],
        daily_wage: Any,
        is_active: Any = True,
    ) -> Worker:
        name = require_non_empty(name, "Worker name")
        worker_type = require_non_empty(type, "Worker type")
        wage = require_positive_amount(daily_wage, "daily_wage")
        if self._workers.get_by_name(name):
            raise ConflictError("A worker with this name already exists")

        worker_id = self._workers.create(
            name=name,
            type=worker_type,
            daily_wage=wage,
            is_active=parse_bool(is_active, default=True),
        )
        logger.info("worker created id=%s name=%s", worker_id, name)
        return self.get_worker(worker_id)

    def update_worker(self, worker_id: int, changes: dict) -> Worker:
        current = self.get_worker(worker_id)
        reject_unknown_fields(changes, _EDITABLE)
        name = require_non_empty(changes["name"], "Worker name") if "name" in changes else current.name
        worker_type = require_non_empty(changes["type"], "Worker type") if "type" in changes else current.type
        wage = (
            require_positive_amount(changes["daily_wage"], "daily_wage")
            if "daily_wage" in changes
            else current.daily_wage
        )
        is_active = parse_bool(changes.get("is_active"), default=current.is_active)

        other = self._workers.get_by_name(name)
        if other and other.worker_id != current.worker_id:
            raise ConflictError("A worker with this name already exists")

        self._workers.update(current.worker_id, name=name, type=worker_type, daily_wage=wage, is_active=is_active)
        return self.get_worker(current.worker_id)

    def delete_worker(self, worker_id: int) -> None:
        """Delete the worker with their attendance and transfers; touched project days are refreshed."""
        worker = self.get_worker(worker_id)
        records = list(self._attendance.list_filtered(worker_id=worker.worker_id))
        transfers = list(self._transfers.list_filtered(worker_id=worker.worker_id))

        for record in records:
            self._attendance.delete_by_id(record.attendance_id)
        for transfer in transfers:
            self._transfers.delete_by_id(transfer.transfer_id)
        self._workers.delete_by_id(worker.worker_id)

        self._summaries.refresh_days(
            [(r.project_id, r.work_date) for r in records] + [(t.project_id, t.transfer_date) for t in transfers]
        )
        logger.info(
            "worker deleted id=%s (attendance=%s transfers=%s)", worker.worker_id, len(records), len(transfers)
        )

    def worker_projects(self, worker_id: int) -> list[Project]:
        """Projects the worker has attendance on, by name."""
        worker = self.get_worker(worker_id)
        project_ids = {a.project_id for a in self._attendance.list_filtered(worker_id=worker.worker_id)}
        projects = [self._projects.get_by_id(pid) for pid in project_ids]
        return sorted((p for p in projects if p), key=lambda p: p.name)

    # Worker types

    def list_worker_types(self) -> list[WorkerType]:
        return list(self._worker_types.list_all())

    def create_worker_type(self, name: Optional[str]) -> WorkerType:
        name = require_non_empty(name, "Worker type name")
        if self._worker_types.get_by_name(name):
            raise ConflictError("This worker type already exists")

        worker_type_id = self._worker_types.create(name=name)
        logger.info("worker type created id=%s name=%s", worker_type_id, name)
        worker_type = self._worker_types.get_by_id(worker_type_id)
        if not worker_type:
            raise NotFoundError("Worker type not found")
        return worker_type
