from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.money import money_or_zero
from ..core.enums import TransferMethod
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
from .model import WorkerTransfer
from .repository import WorkerTransferRepository

_COLUMNS = """
    transfer_id, worker_id, project_id, amount, recipient_name, recipient_phone,
    transfer_method, transfer_date, notes, created_at
"""


def _to_transfer(row: dict) -> WorkerTransfer:
    return WorkerTransfer(
        transfer_id=int(row["transfer_id"]),
        worker_id=int(row["worker_id"]),
        project_id=int(row["project_id"]),
        amount=money_or_zero(row["amount"]),
        recipient_name=row["recipient_name"],
        recipient_phone=row.get("recipient_phone"),
        transfer_method=TransferMethod(row["transfer_method"]),
        transfer_date=normalize_mysql_date(row["transfer_date"]),
        notes=row.get("notes"),
        created_at=row.get("created_at"),
    )


def _values(t: WorkerTransfer) -> tuple:
    return (
        t.worker_id,
        t.project_id,
        t.amount,
        t.recipient_name,
        t.recipient_phone,
        t.transfer_method.value,
        t.transfer_date,
        t.notes,
    )


class MySQLWorkerTransferRepository(WorkerTransferRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, transfer_id: int) -> Optional[WorkerTransfer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM worker_transfers WHERE transfer_id=%s", (transfer_id,))
            row = fetchone(cur)
            return _to_transfer(row) if row else None

    def create(self, transfer: WorkerTransfer) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO worker_transfers(
                    worker_id, project_id, amount, recipient_name, recipient_phone,
                    transfer_method, transfer_date, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _values(transfer),
            )
            return int(cur.lastrowid)

    def update(self, transfer: WorkerTransfer) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE worker_transfers
                SET worker_id=%s, project_id=%s, amount=%s, recipient_name=%s, recipient_phone=%s,
                    transfer_method=%s, transfer_date=%s, notes=%s
                WHERE transfer_id=%s
                """,
                _values(transfer) + (transfer.transfer_id,),
            )
            return cur.rowcount > 0

    def delete_by_id(self, transfer_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM worker_transfers WHERE transfer_id=%s", (transfer_id,))
            return cur.rowcount > 0

    def list_filtered(
        self,
        *,
        worker_id: Optional[int] = None,
        project_ids: Optional[Sequence[int]] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[WorkerTransfer]:
        if project_ids is not None and not project_ids:
            return []
        conditions = []
        if worker_id is not None:
            conditions.append(("worker_id=%s", [worker_id]))
        if project_ids:
            conditions.append(in_clause("project_id", project_ids))
        conditions.extend(date_range_conditions("transfer_date", date_from, date_to))
        where, params = build_where(conditions)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM worker_transfers {where} ORDER BY transfer_date, transfer_id",
                tuple(params),
            )
            return [_to_transfer(r) for r in fetchall(cur)]
