"""Read side shared by daily summaries, project statistics and reports.

``LedgerSources`` bundles the repositories that hold money movements of a
project; ``ProjectActivity`` is what they return for a project and period, and
``ActivityTotals`` reduces it with the bookkeeping rules:

- wages count what was actually paid on the day, not what was earned;
- only cash purchases are an expense, credit purchases become supplier debt;
- project-to-project transfers add to the receiver and subtract from the sender.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from .attendance.model import WorkerAttendance
from .attendance.repository import AttendanceRepository
from .common.money import total
from .expenses.model import ProjectExpense
from .expenses.repository import ExpenseRepository
from .funds.model import FundTransfer, ProjectFundTransfer
from .funds.repository import FundTransferRepository, ProjectFundTransferRepository
from .purchases.model import MaterialPurchase
from .purchases.repository import PurchaseRepository
from .transfers.model import WorkerTransfer
from .transfers.repository import WorkerTransferRepository


@dataclass(frozen=True)
class ActivityTotals:
    fund_transfers: Decimal
    incoming_transfers: Decimal
    outgoing_transfers: Decimal
    worker_wages: Decimal
    material_costs: Decimal
    credit_purchases: Decimal
    transportation_costs: Decimal
    worker_transfers: Decimal
    misc_expenses: Decimal

    @property
    def income(self) -> Decimal:
        """Money received: fund transfers plus transfers in from other projects."""
        return self.fund_transfers + self.incoming_transfers

    @property
    def operating_expenses(self) -> Decimal:
        return (
            self.worker_wages
            + self.material_costs
            + self.transportation_costs
            + self.worker_transfers
            + self.misc_expenses
        )

    @property
    def expenses(self) -> Decimal:
        """Money spent, including transfers out to other projects."""
        return self.operating_expenses + self.outgoing_transfers

    @property
    def balance(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class ProjectActivity:
    project_id: int
    attendance: list[WorkerAttendance] = field(default_factory=list)
    worker_transfers: list[WorkerTransfer] = field(default_factory=list)
    fund_transfers: list[FundTransfer] = field(default_factory=list)
    incoming_transfers: list[ProjectFundTransfer] = field(default_factory=list)
    outgoing_transfers: list[ProjectFundTransfer] = field(default_factory=list)
    purchases: list[MaterialPurchase] = field(default_factory=list)
    transportation: list[ProjectExpense] = field(default_factory=list)
    misc_expenses: list[ProjectExpense] = field(default_factory=list)

    def for_day(self, day: date) -> "ProjectActivity":
        return ProjectActivity(
            project_id=self.project_id,
            attendance=[a for a in self.attendance if a.work_date == day],
            worker_transfers=[t for t in self.worker_transfers if t.transfer_date == day],
            fund_transfers=[t for t in self.fund_transfers if t.transfer_date == day],
            incoming_transfers=[t for t in self.incoming_transfers if t.transfer_date == day],
            outgoing_transfers=[t for t in self.outgoing_transfers if t.transfer_date == day],
            purchases=[p for p in self.purchases if p.purchase_date == day],
            transportation=[e for e in self.transportation if e.expense_date == day],
            misc_expenses=[e for e in self.misc_expenses if e.expense_date == day],
        )

    def dates(self) -> set[date]:
        out: set[date] = set()
        out.update(a.work_date for a in self.attendance)
        out.update(t.transfer_date for t in self.worker_transfers)
        out.update(t.transfer_date for t in self.fund_transfers)
        out.update(t.transfer_date for t in self.incoming_transfers)
        out.update(t.transfer_date for t in self.outgoing_transfers)
        out.update(p.purchase_date for p in self.purchases)
        out.update(e.expense_date for e in self.transportation)
        out.update(e.expense_date for e in self.misc_expenses)
        return out

    def totals(self) -> ActivityTotals:
        return ActivityTotals(
            fund_transfers=total(t.amount for t in self.fund_transfers),
            incoming_transfers=total(t.amount for t in self.incoming_transfers),
            outgoing_transfers=total(t.amount for t in self.outgoing_transfers),
            worker_wages=total(a.paid_amount for a in self.attendance),
            material_costs=total(p.total_amount for p in self.purchases if p.is_cash),
            credit_purchases=total(p.total_amount for p in self.purchases if not p.is_cash),
            transportation_costs=total(e.amount for e in self.transportation),
            worker_transfers=total(t.amount for t in self.worker_transfers),
            misc_expenses=total(e.amount for e in self.misc_expenses),
        )


@dataclass(frozen=True)
class LedgerSources:
    attendance: AttendanceRepository
    worker_transfers: WorkerTransferRepository
    fund_transfers: FundTransferRepository
    project_transfers: ProjectFundTransferRepository
    purchases: PurchaseRepository
    transportation: ExpenseRepository
    misc_expenses: ExpenseRepository

    def activity(
        self,
        project_id: int,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> ProjectActivity:
        scope = dict(project_ids=[project_id], date_from=date_from, date_to=date_to)
        moves = self.project_transfers.list_filtered(project_id=project_id, date_from=date_from, date_to=date_to)
        return ProjectActivity(
            project_id=project_id,
            attendance=list(self.attendance.list_filtered(**scope)),
            worker_transfers=list(self.worker_transfers.list_filtered(**scope)),
            fund_transfers=list(self.fund_transfers.list_filtered(**scope)),
            incoming_transfers=[t for t in moves if t.to_project_id == project_id],
            outgoing_transfers=[t for t in moves if t.from_project_id == project_id],
            purchases=list(self.purchases.list_filtered(**scope)),
            transportation=list(self.transportation.list_filtered(**scope)),
            misc_expenses=list(self.misc_expenses.list_filtered(**scope)),
        )
