from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.model import WorkerAttendance
from ..common.datetime_utils import require_date_order
from ..common.money import ZERO, total
from ..core.enums import ExpenseCategory, PurchaseType
from ..core.exceptions import NotFoundError, ValidationError
from ..ledger import LedgerSources
from ..projects.model import Project
from ..projects.repository import ProjectRepository
from ..transfers.model import WorkerTransfer
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .calculator.base import StatementCalculator
from .calculator.standard_calculator import StandardStatementCalculator
from .model import (
    LedgerLine,
    LedgerReport,
    MaterialPurchaseReport,
    MultiProjectStatement,
    ProjectBreakdown,
    ProjectSummaryReport,
    SettlementReport,
    SettlementRow,
    SettlementTotals,
    StatementEntry,
    StatementTotals,
    StatementTransfer,
    WorkerBalance,
    WorkerStatement,
)

logger = logging.getLogger(__name__)


def work_days_label(work_days: Decimal) -> str:
    """``1`` -> "1 day", ``1.50`` -> "1.5 days"."""
    text = format(work_days.normalize(), "f")
    return f"{text} day" if work_days == 1 else f"{text} days"


class StatementService:
    """Statement aggregator.

    Fetches attendance, worker transfers and purchases for a worker or project
    over a period and reduces them to totals. Rendering (Excel, CSV, print)
    lives in ``reports.export`` and works off these results.
    """

    def __init__(
        self,
        workers: WorkerRepository,
        projects: ProjectRepository,
        sources: LedgerSources,
        *,
        calculator: Optional[StatementCalculator] = None,
    ):
        self._workers = workers
        self._projects = projects
        self._sources = sources
        self._calculator = calculator or StandardStatementCalculator()

    # Worker statements

    def worker_statement(
        self,
        *,
        worker_id: int,
        project_ids: Optional[Sequence[int]] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> WorkerStatement:
        require_date_order(date_from, date_to)
        worker = self._require_worker(worker_id)
        project_filter = list(project_ids) if project_ids else None
        names = self._project_names(project_filter)

        attendance = self._sources.attendance.list_filtered(
            worker_id=worker.worker_id, project_ids=project_filter, date_from=date_from, date_to=date_to
        )
        transfers = self._sources.worker_transfers.list_filtered(
            worker_id=worker.worker_id, project_ids=project_filter, date_from=date_from, date_to=date_to
        )

        entries = [self._entry(a, names) for a in sorted(attendance, key=lambda a: (a.work_date, a.attendance_id))]
        transfer_lines = [
            self._transfer_line(t, names) for t in sorted(transfers, key=lambda t: (t.transfer_date, t.transfer_id))
        ]

        seen_projects = {e.project_id for e in entries} | {t.project_id for t in transfer_lines}
        projects = [
            p for pid in sorted(project_filter or seen_projects) if (p := self._projects.get_by_id(pid)) is not None
        ]

        logger.info(
            "worker statement worker=%s projects=%s %s..%s rows=%s transfers=%s",
            worker.worker_id,
            project_filter or "all",
            date_from,
            date_to,
            len(entries),
            len(transfer_lines),
        )
        return WorkerStatement(
            worker=worker,
            projects=projects,
            date_from=date_from,
            date_to=date_to,
            entries=entries,
            transfers=transfer_lines,
            totals=self._totals(entries, transfer_lines),
        )

    def worker_multi_project_statement(
        self,
        *,
        worker_id: int,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> MultiProjectStatement:
        statement = self.worker_statement(worker_id=worker_id, date_from=date_from, date_to=date_to)

        breakdown: list[ProjectBreakdown] = []
        for project in sorted(statement.projects, key=lambda p: p.name):
            entries = [e for e in statement.entries if e.project_id == project.project_id]
            transfers = [t for t in statement.transfers if t.project_id == project.project_id]
            breakdown.append(
                ProjectBreakdown(
                    project_id=project.project_id,
                    project_name=project.name,
                    totals=self._totals(entries, transfers),
                )
            )

        return MultiProjectStatement(
            worker=statement.worker,
            date_from=date_from,
            date_to=date_to,
            projects=breakdown,
            totals=statement.totals,
        )

    def worker_balance(self, *, worker_id: int, project_id: int) -> WorkerBalance:
        worker = self._require_worker(worker_id)
        project = self._require_project(project_id)
        scope = dict(worker_id=worker.worker_id, project_ids=[project.project_id])
        attendance = self._sources.attendance.list_filtered(**scope)
        transfers = self._sources.worker_transfers.list_filtered(**scope)

        earned = total(self._calculator.earned(a) for a in attendance)
        paid = total(a.paid_amount for a in attendance)
        transferred = total(t.amount for t in transfers)
        return WorkerBalance(
            worker_id=worker.worker_id,
            project_id=project.project_id,
            total_earned=earned,
            total_paid=paid,
            total_transferred=transferred,
            current_balance=self._calculator.remaining(earned=earned, paid=paid, transferred=transferred),
        )

    # Settlement

    def workers_settlement(
        self,
        *,
        project_ids: Optional[Sequence[int]] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        worker_ids: Optional[Sequence[int]] = None,
    ) -> SettlementReport:
        """Balance owed to each active worker; ``project_ids=None`` means every project."""

        require_date_order(date_from, date_to)
        if project_ids:
            projects = [self._require_project(pid) for pid in project_ids]
        else:
            projects = list(self._projects.list_all())
        scope = [p.project_id for p in projects]

        workers = [w for w in self._workers.list_all(active_only=True) if not worker_ids or w.worker_id in worker_ids]
        attendance = self._sources.attendance.list_filtered(project_ids=scope, date_from=date_from, date_to=date_to)
        transfers = self._sources.worker_transfers.list_filtered(project_ids=scope, date_from=date_from, date_to=date_to)

        by_worker: dict[int, dict] = {}
        for a in attendance:
            s = by_worker.setdefault(a.worker_id, {"days": ZERO, "earned": [], "paid": [], "transfers": []})
            s["days"] += a.work_days if a.is_present else ZERO
            s["earned"].append(self._calculator.earned(a))
            s["paid"].append(a.paid_amount)
        for t in transfers:
            s = by_worker.setdefault(t.worker_id, {"days": ZERO, "earned": [], "paid": [], "transfers": []})
            s["transfers"].append(t.amount)

        rows: list[SettlementRow] = []
        for w in workers:
            s = by_worker.get(w.worker_id)
            if not s:
                continue
            earned, paid, transferred = total(s["earned"]), total(s["paid"]), total(s["transfers"])
            rows.append(
                SettlementRow(
                    worker_id=w.worker_id,
                    worker_name=w.name,
                    worker_type=w.type,
                    daily_wage=w.daily_wage,
                    total_work_days=s["days"],
                    total_earned=earned,
                    total_paid=paid,
                    total_transfers=transferred,
                    final_balance=self._calculator.remaining(earned=earned, paid=paid, transferred=transferred),
                )
            )
        rows.sort(key=lambda r: r.worker_name)

        return SettlementReport(
            projects=projects,
            date_from=date_from,
            date_to=date_to,
            rows=rows,
            totals=SettlementTotals(
                total_workers=len(rows),
                total_work_days=sum((r.total_work_days for r in rows), ZERO),
                total_earned=total(r.total_earned for r in rows),
                total_paid=total(r.total_paid for r in rows),
                total_transfers=total(r.total_transfers for r in rows),
                final_balance=total(r.final_balance for r in rows),
            ),
        )

    # Project reports

    def project_summary(
        self,
        *,
        project_id: int,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> ProjectSummaryReport:
        require_date_order(date_from, date_to)
        project = self._require_project(project_id)
        activity = self._sources.activity(project.project_id, date_from=date_from, date_to=date_to)
        t = activity.totals()
        return ProjectSummaryReport(
            project=project,
            date_from=date_from,
            date_to=date_to,
            fund_transfers=t.fund_transfers,
            incoming_transfers=t.incoming_transfers,
            outgoing_transfers=t.outgoing_transfers,
            worker_wages=t.worker_wages,
            material_costs=t.material_costs,
            credit_purchases=t.credit_purchases,
            transportation_costs=t.transportation_costs,
            worker_transfers=t.worker_transfers,
            misc_expenses=t.misc_expenses,
            total_income=t.income,
            total_expenses=t.expenses,
            net_balance=t.balance,
            attendance_count=len(activity.attendance),
            worker_count=len({a.worker_id for a in activity.attendance}),
        )

    def expense_ledger(self, *, project_id: int, date_from: date, date_to: date) -> LedgerReport:
        self._require_range(date_from, date_to)
        project = self._require_project(project_id)
        activity = self._sources.activity(project.project_id, date_from=date_from, date_to=date_to)
        workers = {w.worker_id: w.name for w in self._workers.list_all()}

        lines: list[LedgerLine] = []
        for a in activity.attendance:
            if a.paid_amount > 0:
                lines.append(
                    LedgerLine(
                        line_date=a.work_date,
                        category=ExpenseCategory.WAGES.value,
                        description=f"Wage paid ({work_days_label(a.work_days)})",
                        amount=a.paid_amount,
                        party=workers.get(a.worker_id),
                        notes=a.work_description,
                    )
                )
        for p in activity.purchases:
            if p.is_cash:
                lines.append(
                    LedgerLine(
                        line_date=p.purchase_date,
                        category=ExpenseCategory.MATERIALS.value,
                        description=f"{p.material_name or 'Material'} x {p.quantity} {p.material_unit or ''}".strip(),
                        amount=p.total_amount,
                        party=p.supplier_name,
                        notes=p.notes,
                    )
                )
        for e in activity.transportation:
            lines.append(
                LedgerLine(
                    line_date=e.expense_date,
                    category=ExpenseCategory.TRANSPORT.value,
                    description=e.description,
                    amount=e.amount,
                    party=workers.get(e.worker_id) if e.worker_id else None,
                    notes=e.notes,
                )
            )
        for t in activity.worker_transfers:
            lines.append(
                LedgerLine(
                    line_date=t.transfer_date,
                    category=ExpenseCategory.WORKER_TRANSFERS.value,
                    description=f"Transfer for {workers.get(t.worker_id, 'worker')} ({t.transfer_method.value})",
                    amount=t.amount,
                    party=t.recipient_name,
                    notes=t.notes,
                )
            )
        for e in activity.misc_expenses:
            lines.append(
                LedgerLine(
                    line_date=e.expense_date,
                    category=ExpenseCategory.MISC.value,
                    description=e.description,
                    amount=e.amount,
                    party=workers.get(e.worker_id) if e.worker_id else None,
                    notes=e.notes,
                )
            )

        lines.sort(key=lambda line: line.line_date)
        return LedgerReport(
            project=project,
            kind="expenses",
            date_from=date_from,
            date_to=date_to,
            lines=lines,
            total=total(line.amount for line in lines),
        )

    def income_ledger(self, *, project_id: int, date_from: date, date_to: date) -> LedgerReport:
        self._require_range(date_from, date_to)
        project = self._require_project(project_id)
        activity = self._sources.activity(project.project_id, date_from=date_from, date_to=date_to)
        names = self._project_names(None)

        lines = [
            LedgerLine(
                line_date=f.transfer_date,
                category=f.transfer_type,
                description=f"Fund transfer {f.transfer_number or ''}".strip(),
                amount=f.amount,
                party=f.sender_name,
                notes=f.notes,
            )
            for f in activity.fund_transfers
        ]
        lines.extend(
            LedgerLine(
                line_date=t.transfer_date,
                category="project_transfer",
                description=t.description or "Transfer from another project",
                amount=t.amount,
                party=names.get(t.from_project_id),
                notes=t.transfer_reason,
            )
            for t in activity.incoming_transfers
        )
        lines.sort(key=lambda line: line.line_date)
        return LedgerReport(
            project=project,
            kind="income",
            date_from=date_from,
            date_to=date_to,
            lines=lines,
            total=total(line.amount for line in lines),
        )

    def material_purchases(self, *, project_id: int, date_from: date, date_to: date) -> MaterialPurchaseReport:
        self._require_range(date_from, date_to)
        project = self._require_project(project_id)
        purchases = sorted(
            self._sources.purchases.list_filtered(
                project_ids=[project.project_id], date_from=date_from, date_to=date_to
            ),
            key=lambda p: (p.purchase_date, p.purchase_id),
        )
        cash_total = total(p.total_amount for p in purchases if p.purchase_type == PurchaseType.CASH)
        credit_total = total(p.total_amount for p in purchases if p.purchase_type == PurchaseType.CREDIT)
        return MaterialPurchaseReport(
            project=project,
            date_from=date_from,
            date_to=date_to,
            purchases=purchases,
            cash_total=cash_total,
            credit_total=credit_total,
            total_amount=cash_total + credit_total,
            paid_total=total(p.paid_amount for p in purchases),
            remaining_total=total(p.remaining_amount for p in purchases),
        )

    # Helpers

    def _entry(self, a: WorkerAttendance, names: dict[int, str]) -> StatementEntry:
        earned = self._calculator.earned(a)
        return StatementEntry(
            attendance_id=a.attendance_id,
            work_date=a.work_date,
            project_id=a.project_id,
            project_name=names.get(a.project_id, f"#{a.project_id}"),
            is_present=a.is_present,
            work_days=a.work_days if a.is_present else ZERO,
            daily_wage=a.daily_wage,
            earned=earned,
            paid=a.paid_amount,
            remaining=earned - a.paid_amount,
            payment_type=a.payment_type,
            start_time=a.start_time,
            end_time=a.end_time,
            work_description=a.work_description,
        )

    @staticmethod
    def _transfer_line(t: WorkerTransfer, names: dict[int, str]) -> StatementTransfer:
        return StatementTransfer(
            transfer_id=t.transfer_id,
            transfer_date=t.transfer_date,
            project_id=t.project_id,
            project_name=names.get(t.project_id, f"#{t.project_id}"),
            amount=t.amount,
            recipient_name=t.recipient_name,
            recipient_phone=t.recipient_phone,
            transfer_method=t.transfer_method,
            notes=t.notes,
        )

    def _totals(self, entries: list[StatementEntry], transfers: list[StatementTransfer]) -> StatementTotals:
        earned = total(e.earned for e in entries)
        paid = total(e.paid for e in entries)
        transferred = total(t.amount for t in transfers)
        return StatementTotals(
            total_work_days=sum((e.work_days for e in entries), Decimal("0")),
            total_earned=earned,
            total_paid=paid,
            total_transferred=transferred,
            remaining=self._calculator.remaining(earned=earned, paid=paid, transferred=transferred),
            attendance_count=len(entries),
            transfer_count=len(transfers),
        )

    def _project_names(self, project_ids: Optional[list[int]]) -> dict[int, str]:
        if project_ids:
            return {p.project_id: p.name for p in (self._require_project(pid) for pid in project_ids)}
        return {p.project_id: p.name for p in self._projects.list_all()}

    def _require_worker(self, worker_id: int) -> Worker:
        worker = self._workers.get_by_id(int(worker_id))
        if not worker:
            raise NotFoundError("Worker not found")
        return worker

    def _require_project(self, project_id: int) -> Project:
        project = self._projects.get_by_id(int(project_id))
        if not project:
            raise NotFoundError("Project not found")
        return project

    @staticmethod
    def _require_range(date_from: Optional[date], date_to: Optional[date]) -> None:
        if not date_from or not date_to:
            raise ValidationError("date_from and date_to are required")
        require_date_order(date_from, date_to)
