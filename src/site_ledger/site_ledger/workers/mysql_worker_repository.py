from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..common.money import money_or_zero
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Worker, WorkerType
from .repository import WorkerRepository, WorkerTypeRepository

_COLUMNS = "worker_id, name, type, daily_wage, is_active, created_at"
_TYPE_COLUMNS = "worker_type_id, name, created_at"


def _to_worker(row: dict) -> Worker:
    return Worker(
        worker_id=int(row["worker_id"]),
        name=row["name"],
        type=row["type"],
        daily_wage=money_or_zero(row["daily_wage"]),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
    )


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers WHERE worker_id=%s", (worker_id,))
            row = fetchone(cur)
            return _to_worker(row) if row else None

    def get_by_name(self, name: str) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers WHERE name=%s", (name,))
            row = fetchone(cur)
            return _to_worker(row) if row else None

    def list_all(self, *, active_only: bool = False) -> Sequence[Worker]:
        sql = f"SELECT {_COLUMNS} FROM workers"
        if active_only:
            sql += " WHERE is_active=1"
        sql += " ORDER BY name"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql)
            return [_to_worker(r) for r in fetchall(cur)]

    def create(self, *, name: str, type: str, daily_wage: Decimal, is_active: bool) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO workers(name, type, daily_wage, is_active) VALUES(%s, %s, %s, %s)",
                (name, type, daily_wage, int(is_active)),
            )
            return int(cur.lastrowid)

    def update(self, worker_id: int, *, name: str, type: str, daily_wage: Decimal, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE workers
                SET name=%s, type=%s, daily_wage=%s, is_active=%s
                WHERE worker_id=%s
                """,
                (name, type, daily_wage, int(is_active), worker_id),
            )
            return cur.rowcount > 0

    def delete_by_id(self, worker_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM workers WHERE worker_id=%s", (worker_id,))
            return cur.rowcount > 0


def _to_worker_type(row: dict) -> WorkerType:
    return WorkerType(worker_type_id=int(row["worker_type_id"]), name=row["name"], created_at=row.get("created_at"))


class MySQLWorkerTypeRepository(WorkerTypeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worker_type_id: int) -> Optional[WorkerType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TYPE_COLUMNS} FROM worker_types WHERE worker_type_id=%s", (worker_type_id,))
            row = fetchone(cur)
            return _to_worker_type(row) if row else None

    def get_by_name(self, name: str) -> Optional[WorkerType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TYPE_COLUMNS} FROM worker_types WHERE name=%s", (name,))
            row = fetchone(cur)
            return _to_worker_type(row) if row else None

    def list_all(self) -> Sequence[WorkerType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TYPE_COLUMNS} FROM worker_types ORDER BY name")
            return [_to_worker_type(r) for r in fetchall(cur)]

    def create(self, *, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO worker_types(name) VALUES(%s)", (name,))
            return int(cur.lastrowid)
