import csv
import io

import pytest
from openpyxl import load_workbook

from src.site_ledger.site_ledger.reports.export.csv_export import render_csv
from src.site_ledger.site_ledger.reports.export.excel import render_xlsx
from src.site_ledger.site_ledger.reports.export.print_html import format_money, render_print
from src.site_ledger.site_ledger.reports.export.tables import (
    daily_expenses_document,
    worker_statement_document,
)


@pytest.fixture
def statement(container, site):
    tower = site["tower"].project_id
    ahmad = site["ahmad"].worker_id
    for n in (3, 4):
        container.attendance_service.record(
            {"project_id": tower, "worker_id": ahmad, "date": f"2025-03-0{n}", "paid_amount": "100", "start_time": "07:00"}
        )
    container.worker_transfer_service.create(
        {
            "worker_id": ahmad,
            "project_id": tower,
            "amount": "80",
            "recipient_name": "Family",
            "transfer_method": "cash",
            "transfer_date": "2025-03-05",
        }
    )
    return container.statement_service.worker_statement(worker_id=ahmad)


def test_csv_has_one_row_per_attendance_and_transfer(statement):
    raw = render_csv(worker_statement_document(statement))

    assert raw.startswith(b"\xef\xbb\xbf")
    rows = list(csv.DictReader(io.StringIO(raw.decode("utf-8-sig"))))
    assert len(rows) == len(statement.entries) + len(statement.transfers) == 3
    assert [r["section"] for r in rows] == ["Attendance", "Attendance", "Transfers"]
    assert rows[0]["earned"] == "150.00"
    assert rows[0]["start_time"] == "07:00"
    assert rows[2]["transfer_method"] == "cash"


def test_xlsx_sheets_header_style_and_totals(statement):
    document = worker_statement_document(statement)

    wb = load_workbook(render_xlsx(document, company_name="Test Contractor"))

    assert wb.sheetnames == ["Attendance", "Transfers", "Summary"]
    ws = wb["Attendance"]
    assert ws["A1"].value == "Test Contractor"
    header_row = len(document.info) + 4
    assert ws.cell(row=header_row, column=1).value == "Date"
    assert ws.cell(row=header_row, column=1).fill.start_color.rgb == "FF334155"

    totals_row = header_row + len(statement.entries) + 1
    assert ws.cell(row=totals_row, column=1).value == "Total"
    assert ws.cell(row=totals_row, column=1).font.bold
    assert ws.cell(row=totals_row, column=7).value == pytest.approx(300.0)


def test_print_page_shows_tables_and_autoprint(app, statement):
    with app.test_request_context():
        html = render_print(
            worker_statement_document(statement), company_name="Test Contractor", currency="ILS", autoprint=True
        )

    assert "Test Contractor" in html
    assert "Attendance" in html and "Transfers" in html
    assert "window.print()" in html


def test_print_page_does_not_autoprint_by_default(app, statement):
    with app.test_request_context():
        html = render_print(worker_statement_document(statement))

    assert "window.print()" not in html


def test_format_money_groups_thousands():
    from decimal import Decimal

    assert format_money(Decimal("12345.5")) == "12,345.50"
    assert format_money("n/a") == "n/a"


def test_daily_expenses_document_has_a_row_per_day(container, site):
    tower = site["tower"].project_id
    container.fund_transfer_service.create(
        {"project_id": tower, "amount": "500", "transfer_type": "owner", "transfer_date": "2025-03-02"}
    )
    days = container.summary_service.daily_range(tower, "2025-03-01", "2025-03-03")

    document = daily_expenses_document("Tower A", days)

    assert len(document.tables[0].rows) == 3
