from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...attendance.model import WorkerAttendance


class StatementCalculator(ABC):
    """Calculator interface (Strategy Pattern for statement figures)."""

    @abstractmethod
    def earned(self, record: WorkerAttendance) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def remaining(self, *, earned: Decimal, paid: Decimal, transferred: Decimal) -> Decimal:
        raise NotImplementedError
