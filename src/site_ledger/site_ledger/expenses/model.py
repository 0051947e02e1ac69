from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class ProjectExpense:
    """A small cash expense of a project: transportation or worker miscellany."""

    expense_id: int
    project_id: int
    amount: Decimal
    description: str
    expense_date: date
    worker_id: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
