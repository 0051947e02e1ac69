from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from ..common.datetime_utils import iter_days, parse_required_date, require_date_order
from ..common.money import ZERO
from ..core.exceptions import NotFoundError
from ..ledger import LedgerSources, ProjectActivity
from ..projects.repository import ProjectRepository
from .model import DailyExpenseSummary, DailyReportDay
from .repository import DailySummaryRepository

logger = logging.getLogger(__name__)


def build_summary(
    activity: ProjectActivity, *, project_id: int, summary_date: date, carried_forward: Decimal
) -> DailyExpenseSummary:
    """Roll one day's activity into a summary on top of the carried balance."""

    t = activity.totals()
    total_income = carried_forward + t.fund_transfers + t.incoming_transfers - t.outgoing_transfers
    total_expenses = t.operating_expenses
    return DailyExpenseSummary(
        project_id=project_id,
        summary_date=summary_date,
        carried_forward_amount=carried_forward,
        total_fund_transfers=t.fund_transfers,
        total_incoming_transfers=t.incoming_transfers,
        total_outgoing_transfers=t.outgoing_transfers,
        total_worker_wages=t.worker_wages,
        total_material_costs=t.material_costs,
        total_transportation_costs=t.transportation_costs,
        total_worker_transfers=t.worker_transfers,
        total_misc_expenses=t.misc_expenses,
        total_income=total_income,
        total_expenses=total_expenses,
        remaining_balance=total_income - total_expenses,
    )


class DailySummaryService:
    """Maintains the per-day cash rollups of each project.

    Writers call ``refresh_day`` after every change; the day is recomputed and
    every later summary of the project is re-carried so balances stay chained.
    """

    def __init__(self, summaries: DailySummaryRepository, projects: ProjectRepository, sources: LedgerSources):
        self._summaries = summaries
        self._projects = projects
        self._sources = sources

    def previous_balance(self, project_id: int, day: date) -> Decimal:
        previous = self._summaries.get_latest_before(project_id=project_id, summary_date=day)
        return previous.remaining_balance if previous else ZERO

    def compute_day(self, project_id: int, day: date) -> DailyExpenseSummary:
        activity = self._sources.activity(project_id, date_from=day, date_to=day)
        return build_summary(
            activity,
            project_id=project_id,
            summary_date=day,
            carried_forward=self.previous_balance(project_id, day),
        )

    def refresh_day(self, project_id: int, day: date) -> DailyExpenseSummary:
        summary = self.compute_day(project_id, day)
        self._summaries.upsert(summary)

        later = self._summaries.list_for_project(project_id=project_id, date_from=day + timedelta(days=1))
        for s in later:
            self._summaries.upsert(self.compute_day(project_id, s.summary_date))

        logger.debug(
            "daily summary refreshed project=%s date=%s balance=%s (re-carried %s later days)",
            project_id,
            day,
            summary.remaining_balance,
            len(later),
        )
        return summary

    def refresh_days(self, days: Iterable[tuple[int, date]]) -> None:
        """Refresh each distinct (project, day) pair, earliest day of a project first."""
        for project_id, day in sorted(set(days)):
            self.refresh_day(project_id, day)

    def forget_project(self, project_id: int) -> int:
        removed = self._summaries.delete_for_project(project_id=project_id)
        logger.info("dropped %s daily summaries of project %s", removed, project_id)
        return removed

    def recalculate_all(self, project_id: int) -> list[DailyExpenseSummary]:
        self._require_project(project_id)
        activity = self._sources.activity(project_id)
        days = sorted(activity.dates() | {s.summary_date for s in self._summaries.list_for_project(project_id=project_id)})

        removed = self._summaries.delete_for_project(project_id=project_id)
        out: list[DailyExpenseSummary] = []
        carried = ZERO
        for day in days:
            summary = build_summary(activity.for_day(day), project_id=project_id, summary_date=day, carried_forward=carried)
            self._summaries.upsert(summary)
            out.append(summary)
            carried = summary.remaining_balance

        logger.info("recalculated %s daily summaries for project %s (replaced %s)", len(out), project_id, removed)
        return out

    def get_summary(self, project_id, day) -> Optional[DailyExpenseSummary]:
        self._require_project(int(project_id))
        return self._summaries.get(project_id=int(project_id), summary_date=parse_required_date(day, "date"))

    def list_summaries(self, project_id, *, date_from=None, date_to=None) -> list[DailyExpenseSummary]:
        self._require_project(int(project_id))
        require_date_order(date_from, date_to)
        return list(self._summaries.list_for_project(project_id=int(project_id), date_from=date_from, date_to=date_to))

    def daily_range(self, project_id, date_from, date_to) -> list[DailyReportDay]:
        """One entry per calendar day; missing summaries are computed but not stored."""

        project_id = int(project_id)
        self._require_project(project_id)
        date_from = parse_required_date(date_from, "date_from")
        date_to = parse_required_date(date_to, "date_to")
        require_date_order(date_from, date_to)

        activity = self._sources.activity(project_id, date_from=date_from, date_to=date_to)
        stored = {
            s.summary_date: s
            for s in self._summaries.list_for_project(project_id=project_id, date_from=date_from, date_to=date_to)
        }

        carried = self.previous_balance(project_id, date_from)
        out: list[DailyReportDay] = []
        for day in iter_days(date_from, date_to):
            day_activity = activity.for_day(day)
            summary = stored.get(day)
            persisted = summary is not None
            if summary is None:
                summary = build_summary(day_activity, project_id=project_id, summary_date=day, carried_forward=carried)
            carried = summary.remaining_balance
            out.append(
                DailyReportDay(
                    summary=summary,
                    persisted=persisted,
                    attendance=day_activity.attendance,
                    purchases=day_activity.purchases,
                    fund_transfers=day_activity.fund_transfers,
                    incoming_transfers=day_activity.incoming_transfers,
                    outgoing_transfers=day_activity.outgoing_transfers,
                    worker_transfers=day_activity.worker_transfers,
                    transportation=day_activity.transportation,
                    misc_expenses=day_activity.misc_expenses,
                )
            )
        return out

    def _require_project(self, project_id: int) -> None:
        if not self._projects.get_by_id(project_id):
            raise NotFoundError("Project not found")
