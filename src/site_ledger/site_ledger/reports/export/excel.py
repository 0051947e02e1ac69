from __future__ import annotations

import io
from datetime import date
from decimal import Decimal
from typing import Any

import pandas as pd
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from .tables import ReportDocument, ReportTable

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_HEADER_FILL = PatternFill(start_color="FF334155", end_color="FF334155", fill_type="solid")
_HEADER_FONT = Font(bold=True, color="FFFFFFFF")
_TITLE_FONT = Font(bold=True, size=14)
_BOLD = Font(bold=True)


def _cell(value: Any) -> Any:
    # openpyxl has no Decimal number format of its own
    if isinstance(value, Decimal):
        return float(value)
    if value is None:
        return ""
    return value


def _frame(table: ReportTable) -> pd.DataFrame:
    keys = [key for key, _ in table.columns]
    rows = [[_cell(row.get(k)) for k in keys] for row in table.rows]
    if table.totals:
        rows.append([_cell(table.totals.get(k, "")) for k in keys])
    return pd.DataFrame(rows, columns=[label for _, label in table.columns])


def _sheet_name(name: str, used: set[str]) -> str:
    base = "".join(c for c in name if c not in "[]:*?/\\")[:31] or "Sheet"
    candidate, n = base, 2
    while candidate in used:
        suffix = f" {n}"
        candidate = base[: 31 - len(suffix)] + suffix
        n += 1
    used.add(candidate)
    return candidate


def _style(ws, table: ReportTable, *, header_row: int, width: int) -> None:
    for col in range(1, width + 1):
        cell = ws.cell(row=header_row, column=col)
        cell.fill = _HEADER_FILL
        cell.font = _HEADER_FONT
        cell.alignment = Alignment(horizontal="center", vertical="center")

    if table.totals:
        totals_row = header_row + len(table.rows) + 1
        for col in range(1, width + 1):
            ws.cell(row=totals_row, column=col).font = _BOLD

    for col in range(1, width + 1):
        letter = get_column_letter(col)
        longest = max(
            (len(str(c.value)) for c in ws[letter][header_row - 1 :] if c.value is not None),
            default=8,
        )
        ws.column_dimensions[letter].width = min(max(longest + 2, 10), 50)
        for c in ws[letter][header_row:]:
            if isinstance(c.value, float):
                c.number_format = "#,##0.00"
            elif isinstance(c.value, date):
                c.number_format = "yyyy-mm-dd"


def render_xlsx(document: ReportDocument, *, company_name: str = "", currency: str = "") -> io.BytesIO:
    """Write every table of the document to its own sheet, with a title block on top."""

    output = io.BytesIO()
    used: set[str] = set()
    info_rows = list(document.info)
    if currency:
        info_rows.append(("Currency", currency))

    tables = document.tables or [ReportTable(name="Report", columns=[("empty", "")])]
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        for table in tables:
            sheet = _sheet_name(table.name, used)
            df = _frame(table)
            title_rows = 2 + len(info_rows) + 1
            df.to_excel(writer, index=False, sheet_name=sheet, startrow=title_rows)

            ws = writer.sheets[sheet]
            width = max(len(table.columns), 2)
            ws.cell(row=1, column=1, value=company_name or document.title).font = _TITLE_FONT
            ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=width)
            ws.cell(row=2, column=1, value=f"{document.title} - {table.name}").font = _BOLD
            ws.merge_cells(start_row=2, start_column=1, end_row=2, end_column=width)
            for i, (label, value) in enumerate(info_rows, start=3):
                ws.cell(row=i, column=1, value=label).font = _BOLD
                ws.cell(row=i, column=2, value=_cell(value))

            _style(ws, table, header_row=title_rows + 1, width=len(table.columns))

    output.seek(0)
    return output
