from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import WorkerAttendance


class AttendanceRepository(Protocol):
    """Storage for worker attendance.

    ``create`` ignores ``attendance_id`` on the record and returns the new id.
    """

    def get_by_id(self, attendance_id: int) -> Optional[WorkerAttendance]:
        raise NotImplementedError

    def find_for_worker_day(self, *, worker_id: int, project_id: int, work_date: date) -> Optional[WorkerAttendance]:
        raise NotImplementedError

    def create(self, record: WorkerAttendance) -> int:
        raise NotImplementedError

    def update(self, record: WorkerAttendance) -> bool:
        raise NotImplementedError

    def delete_by_id(self, attendance_id: int) -> bool:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        worker_id: Optional[int] = None,
        project_ids: Optional[Sequence[int]] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[WorkerAttendance]:
        """Records ordered by date then id."""
        raise NotImplementedError
