from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_required_date, require_date_order
from ..common.money import total
from ..common.validators import (
    optional_id,
    optional_text,
    parse_bool,
    reject_unknown_fields,
    require_id,
    require_non_empty,
    require_positive_amount,
)
from ..core.enums import PurchaseType
from ..core.exceptions import ConflictError, NotFoundError
from ..projects.repository import ProjectRepository
from ..purchases.model import MaterialPurchase
from ..purchases.repository import PurchaseRepository
from .model import PurchaseGroup, Supplier, SupplierPayment, SupplierStatement, SupplierStatistics
from .repository import SupplierPaymentRepository, SupplierRepository

logger = logging.getLogger(__name__)

_SUPPLIER_EDITABLE = ("name", "contact_person", "phone", "address", "payment_terms", "notes", "is_active")
_PAYMENT_EDITABLE = (
    "supplier_id",
    "project_id",
    "amount",
    "payment_method",
    "reference_number",
    "payment_date",
    "notes",
)


def _group(purchases: list[MaterialPurchase]) -> PurchaseGroup:
    return PurchaseGroup(total=total(p.total_amount for p in purchases), count=len(purchases), purchases=purchases)


class SupplierService:
    def __init__(
        self,
        suppliers: SupplierRepository,
        payments: SupplierPaymentRepository,
        purchases: PurchaseRepository,
        projects: ProjectRepository,
    ):
        self._suppliers = suppliers
        self._payments = payments
        self._purchases = purchases
        self._projects = projects

    def list_suppliers(self, *, active_only: bool = False) -> list[Supplier]:
        return list(self._suppliers.list_all(active_only=active_only))

    def get_supplier(self, supplier_id: int) -> Supplier:
        supplier = self._suppliers.get_by_id(int(supplier_id))
        if not supplier:
            raise NotFoundError("Supplier not found")
        return supplier

    def create_supplier(self, data: Mapping[str, Any]) -> Supplier:
        supplier = self._parse_supplier(0, data)
        supplier_id = self._suppliers.create(supplier)
        logger.info("supplier created id=%s name=%s", supplier_id, supplier.name)
        return self.get_supplier(supplier_id)

    def update_supplier(self, supplier_id: int, changes: Mapping[str, Any]) -> Supplier:
        current = self.get_supplier(supplier_id)
        reject_unknown_fields(changes, _SUPPLIER_EDITABLE)
        updated = self._parse_supplier(current.supplier_id, {**asdict(current), **changes})
        self._suppliers.update(updated)
        return self.get_supplier(current.supplier_id)

    def delete_supplier(self, supplier_id: int) -> None:
        supplier = self.get_supplier(supplier_id)
        self._suppliers.delete_by_id(supplier.supplier_id)
        logger.info("supplier deleted id=%s", supplier.supplier_id)

    def _parse_supplier(self, supplier_id: int, data: Mapping[str, Any]) -> Supplier:
        name = require_non_empty(data.get("name"), "Supplier name")
        other = self._suppliers.get_by_name(name)
        if other and other.supplier_id != supplier_id:
            raise ConflictError("A supplier with this name already exists")
        return Supplier(
            supplier_id=supplier_id,
            name=name,
            contact_person=optional_text(data.get("contact_person")),
            phone=optional_text(data.get("phone")),
            address=optional_text(data.get("address")),
            payment_terms=optional_text(data.get("payment_terms")),
            notes=optional_text(data.get("notes")),
            is_active=parse_bool(data.get("is_active"), default=True),
        )

    # Payments

    def get_payment(self, payment_id: int) -> SupplierPayment:
        payment = self._payments.get_by_id(int(payment_id))
        if not payment:
            raise NotFoundError("Supplier payment not found")
        return payment

    def list_payments(
        self,
        *,
        supplier_id: Optional[int] = None,
        project_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[SupplierPayment]:
        require_date_order(date_from, date_to)
        return list(
            self._payments.list_filtered(
                supplier_id=supplier_id, project_id=project_id, date_from=date_from, date_to=date_to
            )
        )

    def create_payment(self, data: Mapping[str, Any]) -> SupplierPayment:
        payment = self._parse_payment(0, data)
        payment_id = self._payments.create(payment)
        logger.info("supplier payment created id=%s supplier=%s amount=%s", payment_id, payment.supplier_id, payment.amount)
        return self.get_payment(payment_id)

    def update_payment(self, payment_id: int, changes: Mapping[str, Any]) -> SupplierPayment:
        current = self.get_payment(payment_id)
        reject_unknown_fields(changes, _PAYMENT_EDITABLE)
        updated = self._parse_payment(current.payment_id, {**asdict(current), **changes})
        self._payments.update(updated)
        return self.get_payment(current.payment_id)

    def delete_payment(self, payment_id: int) -> None:
        payment = self.get_payment(payment_id)
        self._payments.delete_by_id(payment.payment_id)

    def _parse_payment(self, payment_id: int, data: Mapping[str, Any]) -> SupplierPayment:
        supplier_id = require_id(data.get("supplier_id"), "supplier_id")
        self.get_supplier(supplier_id)
        project_id = optional_id(data.get("project_id"), "project_id")
        if project_id is not None and not self._projects.get_by_id(project_id):
            raise NotFoundError("Project not found")
        return SupplierPayment(
            payment_id=payment_id,
            supplier_id=supplier_id,
            project_id=project_id,
            amount=require_positive_amount(data.get("amount")),
            payment_method=optional_text(data.get("payment_method")) or "cash",
            reference_number=optional_text(data.get("reference_number")),
            payment_date=parse_required_date(data.get("payment_date"), "payment_date"),
            notes=optional_text(data.get("notes")),
        )

    # Reports

    def statement(
        self,
        supplier_id: int,
        *,
        project_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> SupplierStatement:
        supplier = self.get_supplier(supplier_id)
        require_date_order(date_from, date_to)

        purchases = list(
            self._purchases.list_filtered(
                project_ids=[project_id] if project_id is not None else None,
                date_from=date_from,
                date_to=date_to,
                supplier_id=supplier.supplier_id,
                supplier_name=supplier.name,
            )
        )
        payments = self.list_payments(
            supplier_id=supplier.supplier_id, project_id=project_id, date_from=date_from, date_to=date_to
        )

        cash = _group([p for p in purchases if p.purchase_type == PurchaseType.CASH])
        credit = _group([p for p in purchases if p.purchase_type == PurchaseType.CREDIT])
        total_debt = credit.total
        total_paid = total(p.paid_amount for p in credit.purchases) + total(p.amount for p in payments)
        return SupplierStatement(
            supplier=supplier,
            project_id=project_id,
            date_from=date_from,
            date_to=date_to,
            cash_purchases=cash,
            credit_purchases=credit,
            payments=payments,
            total_purchases=cash.total + credit.total,
            total_debt=total_debt,
            total_paid=total_paid,
            remaining_debt=total_debt - total_paid,
        )

    def statistics(
        self,
        *,
        supplier_id: Optional[int] = None,
        project_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        purchase_type: Optional[PurchaseType] = None,
    ) -> SupplierStatistics:
        require_date_order(date_from, date_to)
        suppliers = self.list_suppliers()
        supplier = self.get_supplier(supplier_id) if supplier_id is not None else None

        purchases = [
            p
            for p in self._purchases.list_filtered(
                project_ids=[project_id] if project_id is not None else None,
                date_from=date_from,
                date_to=date_to,
                purchase_type=purchase_type,
                supplier_id=supplier.supplier_id if supplier else None,
                supplier_name=supplier.name if supplier else None,
            )
            if p.supplier_id is not None or p.supplier_name
        ]
        # payments only settle credit purchases
        payments = (
            []
            if purchase_type == PurchaseType.CASH
            else self.list_payments(
                supplier_id=supplier.supplier_id if supplier else None,
                project_id=project_id,
                date_from=date_from,
                date_to=date_to,
            )
        )
        ids_by_name = {s.name: s.supplier_id for s in suppliers}
        active = {p.supplier_id or ids_by_name.get(p.supplier_name, p.supplier_name) for p in purchases}

        credit = [p for p in purchases if p.purchase_type == PurchaseType.CREDIT]
        total_debt = total(p.total_amount for p in credit)
        total_paid = total(p.paid_amount for p in credit) + total(p.amount for p in payments)
        return SupplierStatistics(
            total_suppliers=1 if supplier else len(suppliers),
            active_suppliers=len(active),
            total_cash_purchases=total(p.total_amount for p in purchases if p.purchase_type == PurchaseType.CASH),
            total_credit_purchases=total_debt,
            total_debt=total_debt,
            total_paid=total_paid,
            remaining_debt=total_debt - total_paid,
        )
