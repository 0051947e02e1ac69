from __future__ import annotations

from decimal import Decimal

from ...attendance.model import WorkerAttendance
from ...common.money import ZERO, quantize
from .base import StatementCalculator


class StandardStatementCalculator(StatementCalculator):
    """Standard rule: earned = stored actual wage (daily wage x days when it is missing).

    What a worker is still owed is what they earned, less cash paid on the day,
    less transfers sent on their behalf.
    """

    def earned(self, record: WorkerAttendance) -> Decimal:
        if not record.is_present:
            return ZERO
        if record.actual_wage:
            return record.actual_wage
        return quantize(record.daily_wage * record.work_days)

    def remaining(self, *, earned: Decimal, paid: Decimal, transferred: Decimal) -> Decimal:
        return earned - paid - transferred
