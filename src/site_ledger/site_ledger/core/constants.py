"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

MONEY_QUANT = Decimal("0.01")
QUANTITY_QUANT = Decimal("0.001")
WORK_DAYS_QUANT = Decimal("0.01")

DEFAULT_WORK_DAYS = Decimal("1")
DEFAULT_MATERIAL_CATEGORY = "general"
DEFAULT_REPORT_DAYS = 30
DEFAULT_SESSION_DAYS = 7

ALL_PROJECTS = "all"
