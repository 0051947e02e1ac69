from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..purchases.model import MaterialPurchase


@dataclass(frozen=True)
class Supplier:
    supplier_id: int
    name: str
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    payment_terms: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class SupplierPayment:
    payment_id: int
    supplier_id: int
    amount: Decimal
    payment_date: date
    payment_method: str = "cash"
    project_id: Optional[int] = None
    reference_number: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class PurchaseGroup:
    total: Decimal
    count: int
    purchases: list[MaterialPurchase] = field(default_factory=list)


@dataclass(frozen=True)
class SupplierStatement:
    """Account of one supplier: purchases split by payment type, and payments made.

    Only credit purchases create debt; cash purchases were settled at the till.
    """

    supplier: Supplier
    project_id: Optional[int]
    date_from: Optional[date]
    date_to: Optional[date]
    cash_purchases: PurchaseGroup
    credit_purchases: PurchaseGroup
    payments: list[SupplierPayment]
    total_purchases: Decimal
    total_debt: Decimal
    total_paid: Decimal
    remaining_debt: Decimal


@dataclass(frozen=True)
class SupplierStatistics:
    total_suppliers: int
    active_suppliers: int
    total_cash_purchases: Decimal
    total_credit_purchases: Decimal
    total_debt: Decimal
    total_paid: Decimal
    remaining_debt: Decimal
