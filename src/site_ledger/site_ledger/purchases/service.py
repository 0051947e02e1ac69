from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_optional_date, parse_required_date, require_date_order
from ..common.money import ZERO, quantize
from ..common.validators import (
    optional_id,
    optional_text,
    reject_unknown_fields,
    require_id,
    require_non_empty,
    require_non_negative_amount,
    require_positive_amount,
    require_positive_decimal,
)
from ..core.constants import DEFAULT_MATERIAL_CATEGORY, QUANTITY_QUANT
from ..core.enums import PurchaseType
from ..core.exceptions import NotFoundError, ValidationError
from ..projects.repository import ProjectRepository
from ..summaries.service import DailySummaryService
from ..suppliers.repository import SupplierRepository
from .model import Material, MaterialPurchase
from .repository import MaterialRepository, PurchaseRepository

logger = logging.getLogger(__name__)

_EDITABLE = (
    "project_id",
    "material_id",
    "material_name",
    "material_unit",
    "material_category",
    "quantity",
    "unit_price",
    "purchase_type",
    "paid_amount",
    "purchase_date",
    "supplier_id",
    "supplier_name",
    "invoice_number",
    "invoice_date",
    "notes",
)


def parse_purchase_type(value: Any) -> PurchaseType:
    if isinstance(value, PurchaseType):
        return value
    if value in (None, ""):
        return PurchaseType.CASH
    try:
        return PurchaseType.parse(str(value))
    except ValueError:
        raise ValidationError("purchase_type must be cash or credit")


class PurchaseService:
    """Material purchases.

    Cash purchases are fully paid; credit purchases may carry a down payment
    and leave the rest owed to the supplier.
    """

    def __init__(
        self,
        purchases: PurchaseRepository,
        materials: MaterialRepository,
        projects: ProjectRepository,
        suppliers: SupplierRepository,
        summaries: DailySummaryService,
    ):
        self._purchases = purchases
        self._materials = materials
        self._projects = projects
        self._suppliers = suppliers
        self._summaries = summaries

    def list_materials(self) -> list[Material]:
        return list(self._materials.list_all())

    def find_or_create_material(self, *, name: Optional[str], unit: Optional[str], category: Optional[str] = None) -> Material:
        name = require_non_empty(name, "Material name")
        unit = require_non_empty(unit, "Material unit")
        existing = self._materials.find(name=name, unit=unit)
        if existing:
            return existing

        material_id = self._materials.create(
            name=name, unit=unit, category=optional_text(category) or DEFAULT_MATERIAL_CATEGORY
        )
        logger.info("material created id=%s name=%s unit=%s", material_id, name, unit)
        material = self._materials.get_by_id(material_id)
        if not material:
            raise NotFoundError("Material not found")
        return material

    def get(self, purchase_id: int) -> MaterialPurchase:
        purchase = self._purchases.get_by_id(int(purchase_id))
        if not purchase:
            raise NotFoundError("Purchase not found")
        return purchase

    def list_purchases(
        self,
        *,
        project_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        purchase_type: Any = None,
        supplier_id: Optional[int] = None,
    ) -> list[MaterialPurchase]:
        require_date_order(date_from, date_to)
        return list(
            self._purchases.list_filtered(
                project_ids=[project_id] if project_id is not None else None,
                date_from=date_from,
                date_to=date_to,
                purchase_type=parse_purchase_type(purchase_type) if purchase_type else None,
                supplier_id=supplier_id,
            )
        )

    def create(self, data: Mapping[str, Any]) -> MaterialPurchase:
        purchase = self._parse(0, data)
        purchase_id = self._purchases.create(purchase)
        self._summaries.refresh_day(purchase.project_id, purchase.purchase_date)
        logger.info(
            "purchase created id=%s project=%s total=%s type=%s",
            purchase_id,
            purchase.project_id,
            purchase.total_amount,
            purchase.purchase_type.value,
        )
        return self.get(purchase_id)

    def update(self, purchase_id: int, changes: Mapping[str, Any]) -> MaterialPurchase:
        current = self.get(purchase_id)
        reject_unknown_fields(changes, _EDITABLE)
        merged = {
            "project_id": current.project_id,
            "material_id": current.material_id,
            "quantity": current.quantity,
            "unit_price": current.unit_price,
            "purchase_type": current.purchase_type,
            "paid_amount": current.paid_amount,
            "purchase_date": current.purchase_date,
            "supplier_id": current.supplier_id,
            "supplier_name": current.supplier_name,
            "invoice_number": current.invoice_number,
            "invoice_date": current.invoice_date,
            "notes": current.notes,
        }
        if "material_name" in changes or "material_unit" in changes:
            merged.pop("material_id")
            merged["material_name"] = changes.get("material_name", current.material_name)
            merged["material_unit"] = changes.get("material_unit", current.material_unit)
        merged.update({k: v for k, v in changes.items() if k not in ("material_name", "material_unit")})
        if (
            current.purchase_type == PurchaseType.CASH
            and parse_purchase_type(merged["purchase_type"]) == PurchaseType.CREDIT
            and "paid_amount" not in changes
        ):
            # a cash total is not a down payment
            merged["paid_amount"] = ZERO

        updated = self._parse(current.purchase_id, merged)
        self._purchases.update(updated)
        self._summaries.refresh_day(current.project_id, current.purchase_date)
        if (updated.project_id, updated.purchase_date) != (current.project_id, current.purchase_date):
            self._summaries.refresh_day(updated.project_id, updated.purchase_date)
        return self.get(current.purchase_id)

    def delete(self, purchase_id: int) -> None:
        purchase = self.get(purchase_id)
        self._purchases.delete_by_id(purchase.purchase_id)
        self._summaries.refresh_day(purchase.project_id, purchase.purchase_date)

    def _parse(self, purchase_id: int, data: Mapping[str, Any]) -> MaterialPurchase:
        project_id = require_id(data.get("project_id"), "project_id")
        if not self._projects.get_by_id(project_id):
            raise NotFoundError("Project not found")

        if data.get("material_id") not in (None, ""):
            material = self._materials.get_by_id(require_id(data.get("material_id"), "material_id"))
            if not material:
                raise NotFoundError("Material not found")
        else:
            material = self.find_or_create_material(
                name=data.get("material_name"),
                unit=data.get("material_unit"),
                category=data.get("material_category"),
            )

        supplier_id = optional_id(data.get("supplier_id"), "supplier_id")
        supplier_name = optional_text(data.get("supplier_name"))
        if supplier_id is not None:
            supplier = self._suppliers.get_by_id(supplier_id)
            if not supplier:
                raise NotFoundError("Supplier not found")
            supplier_name = supplier.name

        quantity = require_positive_decimal(data.get("quantity"), "quantity", QUANTITY_QUANT)
        unit_price = require_positive_amount(data.get("unit_price"), "unit_price")
        total_amount = quantize(quantity * unit_price)
        purchase_type = parse_purchase_type(data.get("purchase_type"))

        if purchase_type == PurchaseType.CASH:
            paid_amount = total_amount
        else:
            paid_amount = require_non_negative_amount(data.get("paid_amount") or 0, "paid_amount")
            if paid_amount > total_amount:
                raise ValidationError("paid_amount cannot exceed the purchase total")
            if supplier_id is None and not supplier_name:
                raise ValidationError("Credit purchases need a supplier")

        return MaterialPurchase(
            purchase_id=purchase_id,
            project_id=project_id,
            material_id=material.material_id,
            material_name=material.name,
            material_unit=material.unit,
            quantity=quantity,
            unit_price=unit_price,
            total_amount=total_amount,
            purchase_type=purchase_type,
            paid_amount=paid_amount,
            remaining_amount=max(total_amount - paid_amount, ZERO),
            purchase_date=parse_required_date(data.get("purchase_date"), "purchase_date"),
            supplier_id=supplier_id,
            supplier_name=supplier_name,
            invoice_number=optional_text(data.get("invoice_number")),
            invoice_date=parse_optional_date(data.get("invoice_date"), "invoice_date"),
            notes=optional_text(data.get("notes")),
        )
