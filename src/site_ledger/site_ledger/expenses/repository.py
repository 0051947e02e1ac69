from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import ProjectExpense


class ExpenseRepository(Protocol):
    """Shared interface of the transportation and worker-misc expense tables."""

    def get_by_id(self, expense_id: int) -> Optional[ProjectExpense]:
        raise NotImplementedError

    def create(self, expense: ProjectExpense) -> int:
        raise NotImplementedError

    def update(self, expense: ProjectExpense) -> bool:
        raise NotImplementedError

    def delete_by_id(self, expense_id: int) -> bool:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        project_ids: Optional[Sequence[int]] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[ProjectExpense]:
        raise NotImplementedError
