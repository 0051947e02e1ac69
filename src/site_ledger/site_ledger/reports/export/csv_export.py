from __future__ import annotations

import csv
import io
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Any

from .tables import ReportDocument


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Decimal):
        return f"{value:.2f}" if value == value.quantize(Decimal("0.01")) else str(value)
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def render_csv(document: ReportDocument) -> bytes:
    """Flatten every table into one CSV.

    A ``section`` column names the table each row came from; the remaining
    columns are the union of all table columns in first-seen order. Totals rows
    and summary tables are left out so the file holds detail lines only.
    """

    tables = [t for t in document.tables if t.detail]
    fieldnames = ["section"]
    for table in tables:
        for key, _ in table.columns:
            if key not in fieldnames:
                fieldnames.append(key)

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=fieldnames, extrasaction="ignore")
    writer.writeheader()
    for table in tables:
        for row in table.rows:
            line = {k: _text(v) for k, v in row.items()}
            line["section"] = table.name
            writer.writerow(line)

    return out.getvalue().encode("utf-8-sig")
