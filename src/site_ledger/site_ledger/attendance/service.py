from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_optional_time, parse_required_date, require_date_order
from ..common.money import ZERO, quantize
from ..common.validators import (
    optional_text,
    parse_bool,
    parse_enum,
    reject_unknown_fields,
    require_id,
    require_non_negative_amount,
    require_positive_amount,
    require_positive_decimal,
)
from ..core.constants import DEFAULT_WORK_DAYS, WORK_DAYS_QUANT
from ..core.enums import PaymentType
from ..core.exceptions import ConflictError, NotFoundError
from ..projects.repository import ProjectRepository
from ..summaries.service import DailySummaryService
from ..workers.repository import WorkerRepository
from .factory import PaymentStrategyFactory
from .model import WorkerAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_EDITABLE = (
    "project_id",
    "worker_id",
    "date",
    "work_days",
    "daily_wage",
    "paid_amount",
    "payment_type",
    "is_present",
    "start_time",
    "end_time",
    "work_description",
)


class AttendanceService:
    """Records worker days and keeps the wage split (earned / paid / remaining) consistent."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        workers: WorkerRepository,
        projects: ProjectRepository,
        summaries: DailySummaryService,
        *,
        strategy_factory: Optional[PaymentStrategyFactory] = None,
    ):
        self._attendance = attendance
        self._workers = workers
        self._projects = projects
        self._summaries = summaries
        self._strategy_factory = strategy_factory or PaymentStrategyFactory()

    def get(self, attendance_id: int) -> WorkerAttendance:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def list_for_project(self, project_id: int, *, work_date: Optional[date] = None) -> list[WorkerAttendance]:
        return list(
            self._attendance.list_filtered(project_ids=[int(project_id)], date_from=work_date, date_to=work_date)
        )

    def filter(
        self,
        *,
        worker_id: Optional[int] = None,
        project_ids: Optional[Sequence[int]] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[WorkerAttendance]:
        require_date_order(date_from, date_to)
        return list(
            self._attendance.list_filtered(
                worker_id=worker_id, project_ids=project_ids, date_from=date_from, date_to=date_to
            )
        )

    def record(self, data: Mapping[str, Any]) -> WorkerAttendance:
        project_id = require_id(data.get("project_id"), "project_id")
        worker_id = require_id(data.get("worker_id"), "worker_id")
        work_date = parse_required_date(data.get("date"), "date")

        self._require_project(project_id)
        worker = self._workers.get_by_id(worker_id)
        if not worker:
            raise NotFoundError("Worker not found")

        if self._attendance.find_for_worker_day(worker_id=worker_id, project_id=project_id, work_date=work_date):
            raise ConflictError("Attendance already recorded for this worker on this day")

        daily_wage = data.get("daily_wage")
        record = self._settle(
            WorkerAttendance(
                attendance_id=0,
                project_id=project_id,
                worker_id=worker_id,
                work_date=work_date,
                daily_wage=(
                    require_positive_amount(daily_wage, "daily_wage")
                    if daily_wage not in (None, "")
                    else worker.daily_wage
                ),
                work_days=self._work_days(data.get("work_days")),
                actual_wage=ZERO,
                paid_amount=require_non_negative_amount(data.get("paid_amount") or 0, "paid_amount"),
                remaining_amount=ZERO,
                payment_type=parse_enum(PaymentType, data.get("payment_type"), "payment_type", default=PaymentType.PARTIAL),
                is_present=parse_bool(data.get("is_present"), default=True),
                start_time=parse_optional_time(data.get("start_time"), "start_time"),
                end_time=parse_optional_time(data.get("end_time"), "end_time"),
                work_description=optional_text(data.get("work_description")),
            )
        )

        attendance_id = self._attendance.create(record)
        self._summaries.refresh_day(project_id, work_date)
        logger.info(
            "attendance recorded id=%s worker=%s project=%s date=%s wage=%s paid=%s",
            attendance_id,
            worker_id,
            project_id,
            work_date,
            record.actual_wage,
            record.paid_amount,
        )
        return self.get(attendance_id)

    def update(self, attendance_id: int, changes: Mapping[str, Any]) -> WorkerAttendance:
        current = self.get(attendance_id)
        reject_unknown_fields(changes, _EDITABLE)

        updated = replace(
            current,
            project_id=require_id(changes["project_id"], "project_id") if "project_id" in changes else current.project_id,
            worker_id=require_id(changes["worker_id"], "worker_id") if "worker_id" in changes else current.worker_id,
            work_date=parse_required_date(changes["date"], "date") if "date" in changes else current.work_date,
            daily_wage=(
                require_positive_amount(changes["daily_wage"], "daily_wage")
                if "daily_wage" in changes
                else current.daily_wage
            ),
            work_days=self._work_days(changes["work_days"]) if "work_days" in changes else current.work_days,
            paid_amount=(
                require_non_negative_amount(changes["paid_amount"] or 0, "paid_amount")
                if "paid_amount" in changes
                else current.paid_amount
            ),
            payment_type=parse_enum(PaymentType, changes.get("payment_type"), "payment_type", default=current.payment_type),
            is_present=parse_bool(changes.get("is_present"), default=current.is_present),
            start_time=parse_optional_time(changes["start_time"], "start_time") if "start_time" in changes else current.start_time,
            end_time=parse_optional_time(changes["end_time"], "end_time") if "end_time" in changes else current.end_time,
            work_description=(
                optional_text(changes["work_description"])
                if "work_description" in changes
                else current.work_description
            ),
        )

        moved = (updated.project_id, updated.worker_id, updated.work_date) != (
            current.project_id,
            current.worker_id,
            current.work_date,
        )
        if moved:
            self._require_project(updated.project_id)
            if not self._workers.get_by_id(updated.worker_id):
                raise NotFoundError("Worker not found")
            clash = self._attendance.find_for_worker_day(
                worker_id=updated.worker_id, project_id=updated.project_id, work_date=updated.work_date
            )
            if clash and clash.attendance_id != current.attendance_id:
                raise ConflictError("Attendance already recorded for this worker on this day")

        updated = self._settle(updated)
        self._attendance.update(updated)

        self._summaries.refresh_day(current.project_id, current.work_date)
        if moved:
            self._summaries.refresh_day(updated.project_id, updated.work_date)
        return self.get(current.attendance_id)

    def delete(self, attendance_id: int) -> None:
        record = self.get(attendance_id)
        self._attendance.delete_by_id(record.attendance_id)
        self._summaries.refresh_day(record.project_id, record.work_date)
        logger.info("attendance deleted id=%s", record.attendance_id)

    def _settle(self, record: WorkerAttendance) -> WorkerAttendance:
        if not record.is_present:
            return replace(record, actual_wage=ZERO, paid_amount=ZERO, remaining_amount=ZERO)

        actual_wage = quantize(record.daily_wage * record.work_days)
        strategy = self._strategy_factory.for_payment(record.payment_type)
        settlement = strategy.settle(actual_wage=actual_wage, paid_amount=record.paid_amount)
        return replace(
            record,
            actual_wage=actual_wage,
            paid_amount=settlement.paid_amount,
            remaining_amount=settlement.remaining_amount,
        )

    @staticmethod
    def _work_days(value: Any) -> Decimal:
        if value in (None, ""):
            return DEFAULT_WORK_DAYS
        return require_positive_decimal(value, "work_days", WORK_DAYS_QUANT)

    def _require_project(self, project_id: int) -> None:
        if not self._projects.get_by_id(project_id):
            raise NotFoundError("Project not found")

