"""Site Ledger package.

Construction-project bookkeeping organized by feature modules (projects,
workers, attendance, purchases, suppliers, funds, reports, ...) with a thin
Flask controller layer over service/repository layers.
"""
