from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DailyExpenseSummary


class DailySummaryRepository(Protocol):
    def get(self, *, project_id: int, summary_date: date) -> Optional[DailyExpenseSummary]:
        raise NotImplementedError

    def get_latest_before(self, *, project_id: int, summary_date: date) -> Optional[DailyExpenseSummary]:
        raise NotImplementedError

    def upsert(self, summary: DailyExpenseSummary) -> None:
        raise NotImplementedError

    def list_for_project(
        self,
        *,
        project_id: int,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[DailyExpenseSummary]:
        """Summaries ordered by date."""
        raise NotImplementedError

    def delete_for_project(self, *, project_id: int) -> int:
        raise NotImplementedError
