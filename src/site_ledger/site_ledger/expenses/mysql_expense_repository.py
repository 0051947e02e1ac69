from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.money import money_or_zero
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    build_where,
    date_range_conditions,
    db_cursor,
    fetchall,
    fetchone,
    in_clause,
    normalize_mysql_date,
)
from .model import ProjectExpense
from .repository import ExpenseRepository

TRANSPORTATION_TABLE = "transportation_expenses"
MISC_TABLE = "worker_misc_expenses"

_COLUMNS = "expense_id, project_id, worker_id, amount, description, date, notes, created_at"


def _to_expense(row: dict) -> ProjectExpense:
    return ProjectExpense(
        expense_id=int(row["expense_id"]),
        project_id=int(row["project_id"]),
        worker_id=int(row["worker_id"]) if row.get("worker_id") is not None else None,
        amount=money_or_zero(row["amount"]),
        description=row["description"],
        expense_date=normalize_mysql_date(row["date"]),
        notes=row.get("notes"),
        created_at=row.get("created_at"),
    )


class MySQLExpenseRepository(ExpenseRepository):
    """One class serves both expense tables; they share a column layout."""

    def __init__(self, conn_factory: DatabaseConnection, *, table: str):
        if table not in {TRANSPORTATION_TABLE, MISC_TABLE}:
            raise ValueError(f"Unsupported expense table: {table}")
        self._conn_factory = conn_factory
        self._table = table

    def get_by_id(self, expense_id: int) -> Optional[ProjectExpense]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM {self._table} WHERE expense_id=%s", (expense_id,))
            row = fetchone(cur)
            return _to_expense(row) if row else None

    def create(self, expense: ProjectExpense) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {self._table}(project_id, worker_id, amount, description, date, notes)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    expense.project_id,
                    expense.worker_id,
                    expense.amount,
                    expense.description,
                    expense.expense_date,
                    expense.notes,
                ),
            )
            return int(cur.lastrowid)

    def update(self, expense: ProjectExpense) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE {self._table}
                SET project_id=%s, worker_id=%s, amount=%s, description=%s, date=%s, notes=%s
                WHERE expense_id=%s
                """,
                (
                    expense.project_id,
                    expense.worker_id,
                    expense.amount,
                    expense.description,
                    expense.expense_date,
                    expense.notes,
                    expense.expense_id,
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, expense_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self._table} WHERE expense_id=%s", (expense_id,))
            return cur.rowcount > 0

    def list_filtered(
        self,
        *,
        project_ids: Optional[Sequence[int]] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[ProjectExpense]:
        if project_ids is not None and not project_ids:
            return []
        conditions = []
        if project_ids:
            conditions.append(in_clause("project_id", project_ids))
        conditions.extend(date_range_conditions("date", date_from, date_to))
        where, params = build_where(conditions)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM {self._table} {where} ORDER BY date, expense_id", tuple(params))
            return [_to_expense(r) for r in fetchall(cur)]
