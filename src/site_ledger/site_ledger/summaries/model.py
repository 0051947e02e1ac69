from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from ..attendance.model import WorkerAttendance
from ..expenses.model import ProjectExpense
from ..funds.model import FundTransfer, ProjectFundTransfer
from ..purchases.model import MaterialPurchase
from ..transfers.model import WorkerTransfer


@dataclass(frozen=True)
class DailyExpenseSummary:
    """Rollup of one project's cash for one day.

    ``total_income`` includes the balance carried from the previous summarised
    day, so ``remaining_balance`` is the running cash position.
    """

    project_id: int
    summary_date: date
    carried_forward_amount: Decimal
    total_fund_transfers: Decimal
    total_incoming_transfers: Decimal
    total_outgoing_transfers: Decimal
    total_worker_wages: Decimal
    total_material_costs: Decimal
    total_transportation_costs: Decimal
    total_worker_transfers: Decimal
    total_misc_expenses: Decimal
    total_income: Decimal
    total_expenses: Decimal
    remaining_balance: Decimal
    summary_id: Optional[int] = None


@dataclass(frozen=True)
class DailyReportDay:
    """A calendar day of the daily expenses report with its detail lines."""

    summary: DailyExpenseSummary
    persisted: bool
    attendance: list[WorkerAttendance] = field(default_factory=list)
    purchases: list[MaterialPurchase] = field(default_factory=list)
    fund_transfers: list[FundTransfer] = field(default_factory=list)
    incoming_transfers: list[ProjectFundTransfer] = field(default_factory=list)
    outgoing_transfers: list[ProjectFundTransfer] = field(default_factory=list)
    worker_transfers: list[WorkerTransfer] = field(default_factory=list)
    transportation: list[ProjectExpense] = field(default_factory=list)
    misc_expenses: list[ProjectExpense] = field(default_factory=list)
