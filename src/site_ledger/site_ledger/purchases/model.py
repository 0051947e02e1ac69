from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PurchaseType


@dataclass(frozen=True)
class Material:
    material_id: int
    name: str
    unit: str
    category: str = "general"


@dataclass(frozen=True)
class MaterialPurchase:
    """A purchase line; credit purchases carry an unpaid ``remaining_amount``."""

    purchase_id: int
    project_id: int
    material_id: int
    quantity: Decimal
    unit_price: Decimal
    total_amount: Decimal
    purchase_type: PurchaseType
    paid_amount: Decimal
    remaining_amount: Decimal
    purchase_date: date
    supplier_id: Optional[int] = None
    supplier_name: Optional[str] = None
    invoice_number: Optional[str] = None
    invoice_date: Optional[date] = None
    notes: Optional[str] = None
    material_name: Optional[str] = None
    material_unit: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_cash(self) -> bool:
        return self.purchase_type == PurchaseType.CASH
