from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access control."""

    ADMIN = "admin"
    STAFF = "staff"


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"


class PaymentType(str, Enum):
    """How a day's wage was settled when the attendance was recorded."""

    FULL = "full"
    PARTIAL = "partial"
    CREDIT = "credit"


class PurchaseType(str, Enum):
    """Cash purchases are paid on the spot; credit purchases become supplier debt."""

    CASH = "cash"
    CREDIT = "credit"

    @classmethod
    def parse(cls, value: str) -> "PurchaseType":
        raw = (value or "").strip().lower()
        alias = _PURCHASE_TYPE_ALIASES.get(raw)
        if alias is not None:
            return alias
        return cls(raw)


# Spellings used by existing Arabic data entry.
_PURCHASE_TYPE_ALIASES = {
    "نقد": PurchaseType.CASH,
    "نقدي": PurchaseType.CASH,
    "أجل": PurchaseType.CREDIT,
    "آجل": PurchaseType.CREDIT,
}


class TransferMethod(str, Enum):
    HAWALEH = "hawaleh"
    BANK = "bank"
    CASH = "cash"


class ExpenseCategory(str, Enum):
    """Categories used by the unified expense ledger."""

    WAGES = "wages"
    MATERIALS = "materials"
    TRANSPORT = "transport"
    WORKER_TRANSFERS = "worker_transfers"
    MISC = "misc"


class ReportFormat(str, Enum):
    JSON = "json"
    XLSX = "xlsx"
    CSV = "csv"
    PRINT = "print"
