from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import PurchaseType
from .model import Material, MaterialPurchase


class MaterialRepository(Protocol):
    def get_by_id(self, material_id: int) -> Optional[Material]:
        raise NotImplementedError

    def find(self, *, name: str, unit: str) -> Optional[Material]:
        raise NotImplementedError

    def create(self, *, name: str, unit: str, category: str) -> int:
        raise NotImplementedError

    def list_all(self) -> Sequence[Material]:
        raise NotImplementedError


class PurchaseRepository(Protocol):
    """Purchases are returned with ``material_name``/``material_unit`` filled in."""

    def get_by_id(self, purchase_id: int) -> Optional[MaterialPurchase]:
        raise NotImplementedError

    def create(self, purchase: MaterialPurchase) -> int:
        raise NotImplementedError

    def update(self, purchase: MaterialPurchase) -> bool:
        raise NotImplementedError

    def delete_by_id(self, purchase_id: int) -> bool:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        project_ids: Optional[Sequence[int]] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        purchase_type: Optional[PurchaseType] = None,
        supplier_id: Optional[int] = None,
        supplier_name: Optional[str] = None,
    ) -> Sequence[MaterialPurchase]:
        """When both supplier filters are given a purchase matches either of them."""
        raise NotImplementedError
