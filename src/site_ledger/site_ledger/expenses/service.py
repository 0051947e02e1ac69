from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_required_date, require_date_order
from ..common.validators import (
    optional_id,
    optional_text,
    reject_unknown_fields,
    require_id,
    require_non_empty,
    require_positive_amount,
)
from ..core.exceptions import NotFoundError
from ..projects.repository import ProjectRepository
from ..summaries.service import DailySummaryService
from ..workers.repository import WorkerRepository
from .model import ProjectExpense
from .repository import ExpenseRepository

logger = logging.getLogger(__name__)

_EDITABLE = ("project_id", "worker_id", "amount", "description", "date", "notes")


class ExpenseService:
    """Day-to-day cash expenses of a project.

    One instance per expense table (transportation, worker miscellany); ``label``
    only names the kind in messages and logs.
    """

    def __init__(
        self,
        expenses: ExpenseRepository,
        projects: ProjectRepository,
        workers: WorkerRepository,
        summaries: DailySummaryService,
        *,
        label: str,
    ):
        self._expenses = expenses
        self._projects = projects
        self._workers = workers
        self._summaries = summaries
        self._label = label

    def get(self, expense_id: int) -> ProjectExpense:
        expense = self._expenses.get_by_id(int(expense_id))
        if not expense:
            raise NotFoundError(f"{self._label.capitalize()} not found")
        return expense

    def list_expenses(
        self,
        *,
        project_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[ProjectExpense]:
        require_date_order(date_from, date_to)
        return list(
            self._expenses.list_filtered(
                project_ids=[project_id] if project_id is not None else None,
                date_from=date_from,
                date_to=date_to,
            )
        )

    def create(self, data: Mapping[str, Any]) -> ProjectExpense:
        expense = self._parse(0, data)
        expense_id = self._expenses.create(expense)
        self._summaries.refresh_day(expense.project_id, expense.expense_date)
        logger.info("%s created id=%s project=%s amount=%s", self._label, expense_id, expense.project_id, expense.amount)
        return self.get(expense_id)

    def update(self, expense_id: int, changes: Mapping[str, Any]) -> ProjectExpense:
        current = self.get(expense_id)
        reject_unknown_fields(changes, _EDITABLE)
        merged = {**asdict(current), "date": current.expense_date, **changes}
        updated = self._parse(current.expense_id, merged)
        self._expenses.update(updated)
        self._summaries.refresh_day(current.project_id, current.expense_date)
        if (updated.project_id, updated.expense_date) != (current.project_id, current.expense_date):
            self._summaries.refresh_day(updated.project_id, updated.expense_date)
        return self.get(current.expense_id)

    def delete(self, expense_id: int) -> None:
        expense = self.get(expense_id)
        self._expenses.delete_by_id(expense.expense_id)
        self._summaries.refresh_day(expense.project_id, expense.expense_date)

    def _parse(self, expense_id: int, data: Mapping[str, Any]) -> ProjectExpense:
        project_id = require_id(data.get("project_id"), "project_id")
        if not self._projects.get_by_id(project_id):
            raise NotFoundError("Project not found")
        worker_id = optional_id(data.get("worker_id"), "worker_id")
        if worker_id is not None and not self._workers.get_by_id(worker_id):
            raise NotFoundError("Worker not found")

        return ProjectExpense(
            expense_id=expense_id,
            project_id=project_id,
            worker_id=worker_id,
            amount=require_positive_amount(data.get("amount")),
            description=require_non_empty(data.get("description"), "description"),
            expense_date=parse_required_date(data.get("date"), "date"),
            notes=optional_text(data.get("notes")),
        )
