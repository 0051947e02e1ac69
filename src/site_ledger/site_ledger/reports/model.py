from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from decimal import Decimal
from typing import Optional

from ..core.enums import ExpenseCategory, PaymentType, TransferMethod
from ..projects.model import Project
from ..purchases.model import MaterialPurchase
from ..workers.model import Worker


@dataclass(frozen=True)
class StatementEntry:
    """One attendance line of a worker statement."""

    attendance_id: int
    work_date: date
    project_id: int
    project_name: str
    is_present: bool
    work_days: Decimal
    daily_wage: Decimal
    earned: Decimal
    paid: Decimal
    remaining: Decimal
    payment_type: PaymentType
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    work_description: Optional[str] = None


@dataclass(frozen=True)
class StatementTransfer:
    transfer_id: int
    transfer_date: date
    project_id: int
    project_name: str
    amount: Decimal
    recipient_name: str
    transfer_method: TransferMethod
    recipient_phone: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class StatementTotals:
    total_work_days: Decimal
    total_earned: Decimal
    total_paid: Decimal
    total_transferred: Decimal
    remaining: Decimal
    attendance_count: int = 0
    transfer_count: int = 0


@dataclass(frozen=True)
class WorkerStatement:
    worker: Worker
    projects: list[Project]
    date_from: Optional[date]
    date_to: Optional[date]
    entries: list[StatementEntry]
    transfers: list[StatementTransfer]
    totals: StatementTotals


@dataclass(frozen=True)
class ProjectBreakdown:
    project_id: int
    project_name: str
    totals: StatementTotals


@dataclass(frozen=True)
class MultiProjectStatement:
    worker: Worker
    date_from: Optional[date]
    date_to: Optional[date]
    projects: list[ProjectBreakdown]
    totals: StatementTotals


@dataclass(frozen=True)
class SettlementRow:
    worker_id: int
    worker_name: str
    worker_type: str
    daily_wage: Decimal
    total_work_days: Decimal
    total_earned: Decimal
    total_paid: Decimal
    total_transfers: Decimal
    final_balance: Decimal


@dataclass(frozen=True)
class SettlementTotals:
    total_workers: int
    total_work_days: Decimal
    total_earned: Decimal
    total_paid: Decimal
    total_transfers: Decimal
    final_balance: Decimal


@dataclass(frozen=True)
class SettlementReport:
    projects: list[Project]
    date_from: Optional[date]
    date_to: Optional[date]
    rows: list[SettlementRow]
    totals: SettlementTotals


@dataclass(frozen=True)
class ProjectSummaryReport:
    project: Project
    date_from: Optional[date]
    date_to: Optional[date]
    fund_transfers: Decimal
    incoming_transfers: Decimal
    outgoing_transfers: Decimal
    worker_wages: Decimal
    material_costs: Decimal
    credit_purchases: Decimal
    transportation_costs: Decimal
    worker_transfers: Decimal
    misc_expenses: Decimal
    total_income: Decimal
    total_expenses: Decimal
    net_balance: Decimal
    attendance_count: int = 0
    worker_count: int = 0


@dataclass(frozen=True)
class LedgerLine:
    line_date: date
    category: str
    description: str
    amount: Decimal
    party: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class LedgerReport:
    """Flat, date-ordered list of a project's money in or out."""

    project: Project
    kind: str
    date_from: Optional[date]
    date_to: Optional[date]
    lines: list[LedgerLine] = field(default_factory=list)
    total: Decimal = Decimal("0.00")

    def by_category(self) -> dict[str, Decimal]:
        out: dict[str, Decimal] = {}
        for line in self.lines:
            out[line.category] = out.get(line.category, Decimal("0.00")) + line.amount
        return out


@dataclass(frozen=True)
class WorkerBalance:
    """What a worker has earned on one project and what is still owed."""

    worker_id: int
    project_id: int
    total_earned: Decimal
    total_paid: Decimal
    total_transferred: Decimal
    current_balance: Decimal


@dataclass(frozen=True)
class MaterialPurchaseReport:
    project: Project
    date_from: date
    date_to: date
    purchases: list[MaterialPurchase]
    cash_total: Decimal
    credit_total: Decimal
    total_amount: Decimal
    paid_total: Decimal
    remaining_total: Decimal


EXPENSE_CATEGORY_LABELS = {
    ExpenseCategory.WAGES.value: "Worker wages",
    ExpenseCategory.MATERIALS.value: "Materials (cash)",
    ExpenseCategory.TRANSPORT.value: "Transportation",
    ExpenseCategory.WORKER_TRANSFERS.value: "Worker transfers",
    ExpenseCategory.MISC.value: "Miscellaneous",
}
