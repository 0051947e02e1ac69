from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import TransferMethod


@dataclass(frozen=True)
class WorkerTransfer:
    """Money sent on a worker's behalf to a recipient, drawn from the worker's balance."""

    transfer_id: int
    worker_id: int
    project_id: int
    amount: Decimal
    recipient_name: str
    transfer_method: TransferMethod
    transfer_date: date
    recipient_phone: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
