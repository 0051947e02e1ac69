from __future__ import annotations

import logging
from typing import Any

from flask import current_app, request, send_file

from ...common.datetime_utils import now_local
from ...common.validators import parse_bool, parse_enum
from ...common.web import ok
from ...core.enums import ReportFormat
from .csv_export import render_csv
from .excel import XLSX_MIMETYPE, render_xlsx
from .print_html import render_print
from .tables import ReportDocument

logger = logging.getLogger(__name__)


def requested_format() -> ReportFormat:
    return parse_enum(ReportFormat, request.args.get("format"), "format", default=ReportFormat.JSON)


def export_response(result: Any, document: ReportDocument):
    """Answer a report request in the format asked for by ``?format=``.

    ``result`` is the report object sent as JSON; ``document`` its tabular view
    used by the file formats.
    """

    fmt = requested_format()
    company = current_app.config.get("COMPANY_NAME", "")
    currency = current_app.config.get("CURRENCY", "")
    stamp = now_local()
    filename = f"{document.filename}_{stamp.strftime('%Y%m%d')}"
    logger.info("report %s rendered as %s", document.filename, fmt.value)

    if fmt == ReportFormat.XLSX:
        output = render_xlsx(document, company_name=company, currency=currency)
        return send_file(output, download_name=f"{filename}.xlsx", as_attachment=True, mimetype=XLSX_MIMETYPE)

    if fmt == ReportFormat.CSV:
        return current_app.response_class(
            render_csv(document),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}.csv"},
        )

    if fmt == ReportFormat.PRINT:
        return render_print(
            document,
            company_name=company,
            currency=currency,
            autoprint=parse_bool(request.args.get("autoprint"), default=False),
            generated_at=stamp,
        )

    return ok(result)
