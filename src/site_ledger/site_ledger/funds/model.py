from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class FundTransfer:
    """Cash received by a project (owner remittance, bank deposit, ...)."""

    fund_transfer_id: int
    project_id: int
    amount: Decimal
    transfer_type: str
    transfer_date: date
    sender_name: Optional[str] = None
    transfer_number: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ProjectFundTransfer:
    """Money moved from one project's cash to another's."""

    project_transfer_id: int
    from_project_id: int
    to_project_id: int
    amount: Decimal
    transfer_date: date
    description: Optional[str] = None
    transfer_reason: Optional[str] = None
    created_at: Optional[datetime] = None
