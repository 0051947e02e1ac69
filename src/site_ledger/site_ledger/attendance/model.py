from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentType


@dataclass(frozen=True)
class WorkerAttendance:
    """One worker's day on one project, with the wage it earned and what was paid.

    ``actual_wage`` is ``daily_wage * work_days``; ``remaining_amount`` is the
    unpaid part at the time of recording.
    """

    attendance_id: int
    project_id: int
    worker_id: int
    work_date: date
    daily_wage: Decimal
    work_days: Decimal
    actual_wage: Decimal
    paid_amount: Decimal
    remaining_amount: Decimal
    payment_type: PaymentType
    is_present: bool = True
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    work_description: Optional[str] = None
    created_at: Optional[datetime] = None
