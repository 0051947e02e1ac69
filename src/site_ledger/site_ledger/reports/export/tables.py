"""Tabular views of report results.

Every exporter (Excel, CSV, print) renders a ``ReportDocument``; the builders
below decide which columns a report shows and in which order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from ...suppliers.model import SupplierStatement
from ...summaries.model import DailyReportDay
from ..model import (
    EXPENSE_CATEGORY_LABELS,
    LedgerReport,
    MaterialPurchaseReport,
    MultiProjectStatement,
    ProjectSummaryReport,
    SettlementReport,
    WorkerStatement,
)

Column = tuple[str, str]


@dataclass(frozen=True)
class ReportTable:
    name: str
    columns: list[Column]
    rows: list[dict[str, Any]] = field(default_factory=list)
    totals: Optional[dict[str, Any]] = None
    # summary tables are shown in Excel and print but left out of CSV
    detail: bool = True


@dataclass(frozen=True)
class ReportDocument:
    title: str
    filename: str
    info: list[tuple[str, Any]] = field(default_factory=list)
    tables: list[ReportTable] = field(default_factory=list)


def _period(date_from: Optional[date], date_to: Optional[date]) -> str:
    if date_from and date_to:
        return f"{date_from.isoformat()} - {date_to.isoformat()}"
    if date_from:
        return f"from {date_from.isoformat()}"
    if date_to:
        return f"until {date_to.isoformat()}"
    return "all dates"


def _slug(text: str) -> str:
    keep = [c if c.isalnum() else "_" for c in text.strip().lower()]
    return "".join(keep).strip("_") or "report"


def _hhmm(value) -> str:
    return value.strftime("%H:%M") if value else ""


_STATEMENT_TOTAL_COLUMNS: list[Column] = [
    ("total_work_days", "Work days"),
    ("total_earned", "Earned"),
    ("total_paid", "Paid"),
    ("total_transferred", "Transferred"),
    ("remaining", "Remaining"),
]


def worker_statement_document(statement: WorkerStatement) -> ReportDocument:
    worker = statement.worker
    t = statement.totals
    attendance = ReportTable(
        name="Attendance",
        columns=[
            ("work_date", "Date"),
            ("project_name", "Project"),
            ("start_time", "From"),
            ("end_time", "To"),
            ("work_days", "Days"),
            ("daily_wage", "Daily wage"),
            ("earned", "Earned"),
            ("paid", "Paid"),
            ("remaining", "Remaining"),
            ("work_description", "Description"),
        ],
        rows=[
            {
                "work_date": e.work_date,
                "project_name": e.project_name,
                "start_time": _hhmm(e.start_time),
                "end_time": _hhmm(e.end_time),
                "work_days": e.work_days,
                "daily_wage": e.daily_wage,
                "earned": e.earned,
                "paid": e.paid,
                "remaining": e.remaining,
                "work_description": e.work_description or ("absent" if not e.is_present else ""),
            }
            for e in statement.entries
        ],
        totals={
            "work_date": "Total",
            "work_days": t.total_work_days,
            "earned": t.total_earned,
            "paid": t.total_paid,
            "remaining": t.total_earned - t.total_paid,
        },
    )
    transfers = ReportTable(
        name="Transfers",
        columns=[
            ("transfer_date", "Date"),
            ("project_name", "Project"),
            ("recipient_name", "Recipient"),
            ("recipient_phone", "Phone"),
            ("transfer_method", "Method"),
            ("amount", "Amount"),
            ("notes", "Notes"),
        ],
        rows=[
            {
                "transfer_date": tr.transfer_date,
                "project_name": tr.project_name,
                "recipient_name": tr.recipient_name,
                "recipient_phone": tr.recipient_phone or "",
                "transfer_method": tr.transfer_method.value,
                "amount": tr.amount,
                "notes": tr.notes or "",
            }
            for tr in statement.transfers
        ],
        totals={"transfer_date": "Total", "amount": t.total_transferred},
    )
    summary = ReportTable(
        name="Summary",
        columns=_STATEMENT_TOTAL_COLUMNS,
        detail=False,
        rows=[
            {
                "total_work_days": t.total_work_days,
                "total_earned": t.total_earned,
                "total_paid": t.total_paid,
                "total_transferred": t.total_transferred,
                "remaining": t.remaining,
            }
        ],
    )
    return ReportDocument(
        title=f"Worker statement - {worker.name}",
        filename=f"worker_statement_{_slug(worker.name)}",
        info=[
            ("Worker", worker.name),
            ("Type", worker.type),
            ("Daily wage", worker.daily_wage),
            ("Projects", ", ".join(p.name for p in statement.projects) or "-"),
            ("Period", _period(statement.date_from, statement.date_to)),
        ],
        tables=[attendance, transfers, summary],
    )


def multi_project_document(statement: MultiProjectStatement) -> ReportDocument:
    t = statement.totals
    columns: list[Column] = [("project_name", "Project"), *_STATEMENT_TOTAL_COLUMNS]
    rows = [
        {
            "project_name": b.project_name,
            "total_work_days": b.totals.total_work_days,
            "total_earned": b.totals.total_earned,
            "total_paid": b.totals.total_paid,
            "total_transferred": b.totals.total_transferred,
            "remaining": b.totals.remaining,
        }
        for b in statement.projects
    ]
    return ReportDocument(
        title=f"Worker statement by project - {statement.worker.name}",
        filename=f"worker_projects_{_slug(statement.worker.name)}",
        info=[("Worker", statement.worker.name), ("Period", _period(statement.date_from, statement.date_to))],
        tables=[
            ReportTable(
                name="Projects",
                columns=columns,
                rows=rows,
                totals={
                    "project_name": "Total",
                    "total_work_days": t.total_work_days,
                    "total_earned": t.total_earned,
                    "total_paid": t.total_paid,
                    "total_transferred": t.total_transferred,
                    "remaining": t.remaining,
                },
            )
        ],
    )


def settlement_document(report: SettlementReport) -> ReportDocument:
    t = report.totals
    return ReportDocument(
        title="Workers settlement",
        filename="workers_settlement",
        info=[
            ("Projects", ", ".join(p.name for p in report.projects) or "-"),
            ("Period", _period(report.date_from, report.date_to)),
            ("Workers", t.total_workers),
        ],
        tables=[
            ReportTable(
                name="Settlement",
                columns=[
                    ("worker_name", "Worker"),
                    ("worker_type", "Type"),
                    ("daily_wage", "Daily wage"),
                    ("total_work_days", "Work days"),
                    ("total_earned", "Earned"),
                    ("total_paid", "Paid"),
                    ("total_transfers", "Transfers"),
                    ("final_balance", "Balance"),
                ],
                rows=[
                    {
                        "worker_name": r.worker_name,
                        "worker_type": r.worker_type,
                        "daily_wage": r.daily_wage,
                        "total_work_days": r.total_work_days,
                        "total_earned": r.total_earned,
                        "total_paid": r.total_paid,
                        "total_transfers": r.total_transfers,
                        "final_balance": r.final_balance,
                    }
                    for r in report.rows
                ],
                totals={
                    "worker_name": "Total",
                    "total_work_days": t.total_work_days,
                    "total_earned": t.total_earned,
                    "total_paid": t.total_paid,
                    "total_transfers": t.total_transfers,
                    "final_balance": t.final_balance,
                },
            )
        ],
    )


def project_summary_document(report: ProjectSummaryReport) -> ReportDocument:
    figures = [
        ("Fund transfers", report.fund_transfers),
        ("Transfers from other projects", report.incoming_transfers),
        ("Total income", report.total_income),
        ("Worker wages paid", report.worker_wages),
        ("Materials (cash)", report.material_costs),
        ("Transportation", report.transportation_costs),
        ("Worker transfers", report.worker_transfers),
        ("Miscellaneous", report.misc_expenses),
        ("Transfers to other projects", report.outgoing_transfers),
        ("Total expenses", report.total_expenses),
        ("Net balance", report.net_balance),
        ("Credit purchases (supplier debt)", report.credit_purchases),
    ]
    return ReportDocument(
        title=f"Project summary - {report.project.name}",
        filename=f"project_summary_{_slug(report.project.name)}",
        info=[
            ("Project", report.project.name),
            ("Status", report.project.status.value),
            ("Period", _period(report.date_from, report.date_to)),
            ("Workers", report.worker_count),
            ("Attendance records", report.attendance_count),
        ],
        tables=[
            ReportTable(
                name="Summary",
                columns=[("item", "Item"), ("amount", "Amount")],
                rows=[{"item": label, "amount": amount} for label, amount in figures],
            )
        ],
    )


def ledger_document(report: LedgerReport) -> ReportDocument:
    expense = report.kind == "expenses"
    label = "Expenses" if expense else "Income"
    categories = ReportTable(
        name="By category",
        detail=False,
        columns=[("category", "Category"), ("amount", "Amount")],
        rows=[
            {"category": EXPENSE_CATEGORY_LABELS.get(k, k) if expense else k, "amount": v}
            for k, v in sorted(report.by_category().items())
        ],
        totals={"category": "Total", "amount": report.total},
    )
    return ReportDocument(
        title=f"{label} - {report.project.name}",
        filename=f"{report.kind}_{_slug(report.project.name)}",
        info=[("Project", report.project.name), ("Period", _period(report.date_from, report.date_to))],
        tables=[
            ReportTable(
                name=label,
                columns=[
                    ("line_date", "Date"),
                    ("category", "Category"),
                    ("description", "Description"),
                    ("party", "Party"),
                    ("amount", "Amount"),
                    ("notes", "Notes"),
                ],
                rows=[
                    {
                        "line_date": line.line_date,
                        "category": EXPENSE_CATEGORY_LABELS.get(line.category, line.category)
                        if expense
                        else line.category,
                        "description": line.description,
                        "party": line.party or "",
                        "amount": line.amount,
                        "notes": line.notes or "",
                    }
                    for line in report.lines
                ],
                totals={"line_date": "Total", "amount": report.total},
            ),
            categories,
        ],
    )


def material_purchases_document(report: MaterialPurchaseReport) -> ReportDocument:
    project = report.project
    return ReportDocument(
        title=f"Material purchases - {project.name}",
        filename=f"material_purchases_{_slug(project.name)}",
        info=[
            ("Project", project.name),
            ("Period", _period(report.date_from, report.date_to)),
            ("Cash purchases", report.cash_total),
            ("Credit purchases", report.credit_total),
            ("Total", report.total_amount),
        ],
        tables=[
            ReportTable(
                name="Purchases",
                columns=[
                    ("purchase_date", "Date"),
                    ("material", "Material"),
                    ("quantity", "Quantity"),
                    ("unit_price", "Unit price"),
                    ("total_amount", "Total"),
                    ("purchase_type", "Type"),
                    ("supplier_name", "Supplier"),
                    ("paid_amount", "Paid"),
                    ("remaining_amount", "Remaining"),
                    ("invoice_number", "Invoice"),
                ],
                rows=[
                    {
                        "purchase_date": p.purchase_date,
                        "material": f"{p.material_name or ''} ({p.material_unit or ''})".strip(),
                        "quantity": p.quantity,
                        "unit_price": p.unit_price,
                        "total_amount": p.total_amount,
                        "purchase_type": p.purchase_type.value,
                        "supplier_name": p.supplier_name or "",
                        "paid_amount": p.paid_amount,
                        "remaining_amount": p.remaining_amount,
                        "invoice_number": p.invoice_number or "",
                    }
                    for p in report.purchases
                ],
                totals={
                    "purchase_date": "Total",
                    "total_amount": report.total_amount,
                    "paid_amount": report.paid_total,
                    "remaining_amount": report.remaining_total,
                },
            ),
        ],
    )

def supplier_statement_document(statement: SupplierStatement) -> ReportDocument:
    purchase_columns: list[Column] = [
        ("purchase_date", "Date"),
        ("material", "Material"),
        ("quantity", "Quantity"),
        ("unit_price", "Unit price"),
        ("total_amount", "Total"),
        ("paid_amount", "Paid"),
        ("remaining_amount", "Remaining"),
        ("invoice_number", "Invoice"),
    ]

    def purchase_rows(group):
        return [
            {
                "purchase_date": p.purchase_date,
                "material": f"{p.material_name or ''} ({p.material_unit or ''})".strip(),
                "quantity": p.quantity,
                "unit_price": p.unit_price,
                "total_amount": p.total_amount,
                "paid_amount": p.paid_amount,
                "remaining_amount": p.remaining_amount,
                "invoice_number": p.invoice_number or "",
            }
            for p in group.purchases
        ]

    s = statement.supplier
    return ReportDocument(
        title=f"Supplier statement - {s.name}",
        filename=f"supplier_statement_{_slug(s.name)}",
        info=[
            ("Supplier", s.name),
            ("Phone", s.phone or "-"),
            ("Period", _period(statement.date_from, statement.date_to)),
            ("Total purchases", statement.total_purchases),
            ("Total debt", statement.total_debt),
            ("Total paid", statement.total_paid),
            ("Remaining debt", statement.remaining_debt),
        ],
        tables=[
            ReportTable(
                name="Cash purchases",
                columns=purchase_columns,
                rows=purchase_rows(statement.cash_purchases),
                totals={"purchase_date": "Total", "total_amount": statement.cash_purchases.total},
            ),
            ReportTable(
                name="Credit purchases",
                columns=purchase_columns,
                rows=purchase_rows(statement.credit_purchases),
                totals={"purchase_date": "Total", "total_amount": statement.credit_purchases.total},
            ),
            ReportTable(
                name="Payments",
                columns=[
                    ("payment_date", "Date"),
                    ("amount", "Amount"),
                    ("payment_method", "Method"),
                    ("reference_number", "Reference"),
                    ("notes", "Notes"),
                ],
                rows=[
                    {
                        "payment_date": p.payment_date,
                        "amount": p.amount,
                        "payment_method": p.payment_method,
                        "reference_number": p.reference_number or "",
                        "notes": p.notes or "",
                    }
                    for p in statement.payments
                ],
            ),
        ],
    )


def daily_expenses_document(project_name: str, days: list[DailyReportDay]) -> ReportDocument:
    rows = []
    for day in days:
        s = day.summary
        rows.append(
            {
                "summary_date": s.summary_date,
                "carried_forward_amount": s.carried_forward_amount,
                "total_fund_transfers": s.total_fund_transfers,
                "total_incoming_transfers": s.total_incoming_transfers,
                "total_outgoing_transfers": s.total_outgoing_transfers,
                "total_worker_wages": s.total_worker_wages,
                "total_material_costs": s.total_material_costs,
                "total_transportation_costs": s.total_transportation_costs,
                "total_worker_transfers": s.total_worker_transfers,
                "total_misc_expenses": s.total_misc_expenses,
                "total_expenses": s.total_expenses,
                "remaining_balance": s.remaining_balance,
            }
        )
    first = days[0].summary.summary_date if days else None
    last = days[-1].summary.summary_date if days else None
    return ReportDocument(
        title=f"Daily expenses - {project_name}",
        filename=f"daily_expenses_{_slug(project_name)}",
        info=[("Project", project_name), ("Period", _period(first, last))],
        tables=[
            ReportTable(
                name="Days",
                columns=[
                    ("summary_date", "Date"),
                    ("carried_forward_amount", "Carried"),
                    ("total_fund_transfers", "Funds in"),
                    ("total_incoming_transfers", "Project in"),
                    ("total_outgoing_transfers", "Project out"),
                    ("total_worker_wages", "Wages"),
                    ("total_material_costs", "Materials"),
                    ("total_transportation_costs", "Transport"),
                    ("total_worker_transfers", "Worker transfers"),
                    ("total_misc_expenses", "Misc"),
                    ("total_expenses", "Expenses"),
                    ("remaining_balance", "Balance"),
                ],
                rows=rows,
            )
        ],
    )
