from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.money import money_or_zero
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, date_range_conditions, db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import DailyExpenseSummary
from .repository import DailySummaryRepository

_AMOUNT_COLUMNS = (
    "carried_forward_amount",
    "total_fund_transfers",
    "total_incoming_transfers",
    "total_outgoing_transfers",
    "total_worker_wages",
    "total_material_costs",
    "total_transportation_costs",
    "total_worker_transfers",
    "total_misc_expenses",
    "total_income",
    "total_expenses",
    "remaining_balance",
)

_COLUMNS = "summary_id, project_id, date, " + ", ".join(_AMOUNT_COLUMNS)


def _to_summary(row: dict) -> DailyExpenseSummary:
    amounts = {name: money_or_zero(row[name]) for name in _AMOUNT_COLUMNS}
    return DailyExpenseSummary(
        summary_id=int(row["summary_id"]),
        project_id=int(row["project_id"]),
        summary_date=normalize_mysql_date(row["date"]),
        **amounts,
    )


class MySQLDailySummaryRepository(DailySummaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, project_id: int, summary_date: date) -> Optional[DailyExpenseSummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM daily_expense_summaries WHERE project_id=%s AND date=%s",
                (project_id, summary_date),
            )
            row = fetchone(cur)
            return _to_summary(row) if row else None

    def get_latest_before(self, *, project_id: int, summary_date: date) -> Optional[DailyExpenseSummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM daily_expense_summaries
                WHERE project_id=%s AND date < %s
                ORDER BY date DESC
                LIMIT 1
                """,
                (project_id, summary_date),
            )
            row = fetchone(cur)
            return _to_summary(row) if row else None

    def upsert(self, summary: DailyExpenseSummary) -> None:
        columns = ["project_id", "date", *_AMOUNT_COLUMNS]
        placeholders = ", ".join(["%s"] * len(columns))
        updates = ", ".join(f"{name}=VALUES({name})" for name in _AMOUNT_COLUMNS)
        values = [summary.project_id, summary.summary_date] + [getattr(summary, n) for n in _AMOUNT_COLUMNS]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO daily_expense_summaries({", ".join(columns)})
                VALUES({placeholders})
                ON DUPLICATE KEY UPDATE {updates}
                """,
                tuple(values),
            )

    def list_for_project(
        self,
        *,
        project_id: int,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[DailyExpenseSummary]:
        conditions = [("project_id=%s", [project_id])]
        conditions.extend(date_range_conditions("date", date_from, date_to))
        where, params = build_where(conditions)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM daily_expense_summaries {where} ORDER BY date", tuple(params))
            return [_to_summary(r) for r in fetchall(cur)]

    def delete_for_project(self, *, project_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM daily_expense_summaries WHERE project_id=%s", (project_id,))
            return int(cur.rowcount)
