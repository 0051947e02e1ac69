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
from .model import FundTransfer, ProjectFundTransfer
from .repository import FundTransferRepository, ProjectFundTransferRepository

_FUND_COLUMNS = """
    fund_transfer_id, project_id, amount, sender_name, transfer_number, transfer_type,
    transfer_date, notes, created_at
"""

_PROJECT_COLUMNS = """
    project_transfer_id, from_project_id, to_project_id, amount, description,
    transfer_reason, transfer_date, created_at
"""


def _to_fund_transfer(row: dict) -> FundTransfer:
    return FundTransfer(
        fund_transfer_id=int(row["fund_transfer_id"]),
        project_id=int(row["project_id"]),
        amount=money_or_zero(row["amount"]),
        sender_name=row.get("sender_name"),
        transfer_number=row.get("transfer_number"),
        transfer_type=row["transfer_type"],
        transfer_date=normalize_mysql_date(row["transfer_date"]),
        notes=row.get("notes"),
        created_at=row.get("created_at"),
    )


def _to_project_transfer(row: dict) -> ProjectFundTransfer:
    return ProjectFundTransfer(
        project_transfer_id=int(row["project_transfer_id"]),
        from_project_id=int(row["from_project_id"]),
        to_project_id=int(row["to_project_id"]),
        amount=money_or_zero(row["amount"]),
        description=row.get("description"),
        transfer_reason=row.get("transfer_reason"),
        transfer_date=normalize_mysql_date(row["transfer_date"]),
        created_at=row.get("created_at"),
    )


class MySQLFundTransferRepository(FundTransferRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, fund_transfer_id: int) -> Optional[FundTransfer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_FUND_COLUMNS} FROM fund_transfers WHERE fund_transfer_id=%s", (fund_transfer_id,))
            row = fetchone(cur)
            return _to_fund_transfer(row) if row else None

    def get_by_number(self, transfer_number: str) -> Optional[FundTransfer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_FUND_COLUMNS} FROM fund_transfers WHERE transfer_number=%s", (transfer_number,))
            row = fetchone(cur)
            return _to_fund_transfer(row) if row else None

    def create(self, transfer: FundTransfer) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO fund_transfers(
                    project_id, amount, sender_name, transfer_number, transfer_type, transfer_date, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    transfer.project_id,
                    transfer.amount,
                    transfer.sender_name,
                    transfer.transfer_number,
                    transfer.transfer_type,
                    transfer.transfer_date,
                    transfer.notes,
                ),
            )
            return int(cur.lastrowid)

    def update(self, transfer: FundTransfer) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE fund_transfers
                SET project_id=%s, amount=%s, sender_name=%s, transfer_number=%s,
                    transfer_type=%s, transfer_date=%s, notes=%s
                WHERE fund_transfer_id=%s
                """,
                (
                    transfer.project_id,
                    transfer.amount,
                    transfer.sender_name,
                    transfer.transfer_number,
                    transfer.transfer_type,
                    transfer.transfer_date,
                    transfer.notes,
                    transfer.fund_transfer_id,
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, fund_transfer_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM fund_transfers WHERE fund_transfer_id=%s", (fund_transfer_id,))
            return cur.rowcount > 0

    def list_filtered(
        self,
        *,
        project_ids: Optional[Sequence[int]] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[FundTransfer]:
        if project_ids is not None and not project_ids:
            return []
        conditions = []
        if project_ids:
            conditions.append(in_clause("project_id", project_ids))
        conditions.extend(date_range_conditions("transfer_date", date_from, date_to))
        where, params = build_where(conditions)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_FUND_COLUMNS} FROM fund_transfers {where} ORDER BY transfer_date, fund_transfer_id",
                tuple(params),
            )
            return [_to_fund_transfer(r) for r in fetchall(cur)]


class MySQLProjectFundTransferRepository(ProjectFundTransferRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, project_transfer_id: int) -> Optional[ProjectFundTransfer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_PROJECT_COLUMNS} FROM project_fund_transfers WHERE project_transfer_id=%s",
                (project_transfer_id,),
            )
            row = fetchone(cur)
            return _to_project_transfer(row) if row else None

    def create(self, transfer: ProjectFundTransfer) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO project_fund_transfers(
                    from_project_id, to_project_id, amount, description, transfer_reason, transfer_date
                )
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    transfer.from_project_id,
                    transfer.to_project_id,
                    transfer.amount,
                    transfer.description,
                    transfer.transfer_reason,
                    transfer.transfer_date,
                ),
            )
            return int(cur.lastrowid)

    def update(self, transfer: ProjectFundTransfer) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE project_fund_transfers
                SET from_project_id=%s, to_project_id=%s, amount=%s, description=%s,
                    transfer_reason=%s, transfer_date=%s
                WHERE project_transfer_id=%s
                """,
                (
                    transfer.from_project_id,
                    transfer.to_project_id,
                    transfer.amount,
                    transfer.description,
                    transfer.transfer_reason,
                    transfer.transfer_date,
                    transfer.project_transfer_id,
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, project_transfer_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM project_fund_transfers WHERE project_transfer_id=%s", (project_transfer_id,))
            return cur.rowcount > 0

    def list_filtered(
        self,
        *,
        project_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[ProjectFundTransfer]:
        conditions = []
        if project_id is not None:
            conditions.append(("(from_project_id=%s OR to_project_id=%s)", [project_id, project_id]))
        conditions.extend(date_range_conditions("transfer_date", date_from, date_to))
        where, params = build_where(conditions)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_PROJECT_COLUMNS} FROM project_fund_transfers {where}
                ORDER BY transfer_date, project_transfer_id
                """,
                tuple(params),
            )
            return [_to_project_transfer(r) for r in fetchall(cur)]
