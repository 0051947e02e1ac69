from __future__ import annotations

from decimal import Decimal
from typing import Any

from flask import render_template

from .tables import ReportDocument


def format_money(value: Any) -> Any:
    """Jinja filter: thousands separators and two decimals for amounts."""
    if isinstance(value, Decimal):
        return f"{value:,.2f}"
    return value


def render_print(
    document: ReportDocument,
    *,
    company_name: str = "",
    currency: str = "",
    autoprint: bool = False,
    generated_at=None,
) -> str:
    """Printable A4 page; the browser's print dialog is the PDF path."""

    return render_template(
        "reports/print.html",
        document=document,
        company_name=company_name,
        currency=currency,
        autoprint=autoprint,
        generated_at=generated_at,
    )
