from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Supplier, SupplierPayment


class SupplierRepository(Protocol):
    def get_by_id(self, supplier_id: int) -> Optional[Supplier]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Supplier]:
        raise NotImplementedError

    def list_all(self, *, active_only: bool = False) -> Sequence[Supplier]:
        raise NotImplementedError

    def create(self, supplier: Supplier) -> int:
        raise NotImplementedError

    def update(self, supplier: Supplier) -> bool:
        raise NotImplementedError

    def delete_by_id(self, supplier_id: int) -> bool:
        raise NotImplementedError


class SupplierPaymentRepository(Protocol):
    def get_by_id(self, payment_id: int) -> Optional[SupplierPayment]:
        raise NotImplementedError

    def create(self, payment: SupplierPayment) -> int:
        raise NotImplementedError

    def update(self, payment: SupplierPayment) -> bool:
        raise NotImplementedError

    def delete_by_id(self, payment_id: int) -> bool:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        supplier_id: Optional[int] = None,
        project_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[SupplierPayment]:
        raise NotImplementedError
