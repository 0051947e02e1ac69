from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..common.money import money_or_zero
from ..core.enums import PaymentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    build_where,
    date_range_conditions,
    db_cursor,
    fetchall,
    fetchone,
    in_clause,
    normalize_mysql_date,
    normalize_mysql_time,
)
from .model import WorkerAttendance
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, project_id, worker_id, date, start_time, end_time, work_description,
    is_present, work_days, daily_wage, actual_wage, paid_amount, remaining_amount,
    payment_type, created_at
"""


def _to_attendance(row: dict) -> WorkerAttendance:
    return WorkerAttendance(
        attendance_id=int(row["attendance_id"]),
        project_id=int(row["project_id"]),
        worker_id=int(row["worker_id"]),
        work_date=normalize_mysql_date(row["date"]),
        daily_wage=money_or_zero(row["daily_wage"]),
        work_days=Decimal(str(row["work_days"])),
        actual_wage=money_or_zero(row["actual_wage"]),
        paid_amount=money_or_zero(row["paid_amount"]),
        remaining_amount=money_or_zero(row["remaining_amount"]),
        payment_type=PaymentType(row["payment_type"]),
        is_present=bool(row.get("is_present", True)),
        start_time=normalize_mysql_time(row.get("start_time")),
        end_time=normalize_mysql_time(row.get("end_time")),
        work_description=row.get("work_description"),
        created_at=row.get("created_at"),
    )


def _values(record: WorkerAttendance) -> tuple:
    return (
        record.project_id,
        record.worker_id,
        record.work_date,
        record.start_time,
        record.end_time,
        record.work_description,
        int(record.is_present),
        record.work_days,
        record.daily_wage,
        record.actual_wage,
        record.paid_amount,
        record.remaining_amount,
        record.payment_type.value,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[WorkerAttendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM worker_attendance WHERE attendance_id=%s", (attendance_id,))
            row = fetchone(cur)
            return _to_attendance(row) if row else None

    def find_for_worker_day(self, *, worker_id: int, project_id: int, work_date: date) -> Optional[WorkerAttendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM worker_attendance
                WHERE worker_id=%s AND project_id=%s AND date=%s
                """,
                (worker_id, project_id, work_date),
            )
            row = fetchone(cur)
            return _to_attendance(row) if row else None

    def create(self, record: WorkerAttendance) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO worker_attendance(
                    project_id, worker_id, date, start_time, end_time, work_description,
                    is_present, work_days, daily_wage, actual_wage, paid_amount, remaining_amount,
                    payment_type
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _values(record),
            )
            return int(cur.lastrowid)

    def update(self, record: WorkerAttendance) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE worker_attendance
                SET project_id=%s, worker_id=%s, date=%s, start_time=%s, end_time=%s,
                    work_description=%s, is_present=%s, work_days=%s, daily_wage=%s,
                    actual_wage=%s, paid_amount=%s, remaining_amount=%s, payment_type=%s
                WHERE attendance_id=%s
                """,
                _values(record) + (record.attendance_id,),
            )
            return cur.rowcount > 0

    def delete_by_id(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM worker_attendance WHERE attendance_id=%s", (attendance_id,))
            return cur.rowcount > 0

    def list_filtered(
        self,
        *,
        worker_id: Optional[int] = None,
        project_ids: Optional[Sequence[int]] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[WorkerAttendance]:
        if project_ids is not None and not project_ids:
            return []
        conditions = []
        if worker_id is not None:
            conditions.append(("worker_id=%s", [worker_id]))
        if project_ids:
            conditions.append(in_clause("project_id", project_ids))
        conditions.extend(date_range_conditions("date", date_from, date_to))
        where, params = build_where(conditions)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM worker_attendance {where} ORDER BY date, attendance_id",
                tuple(params),
            )
            return [_to_attendance(r) for r in fetchall(cur)]
