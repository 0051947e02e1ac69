from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.money import money_or_zero
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    build_where,
    date_range_conditions,
    db_cursor,
    fetchall,
    fetchone,
    normalize_mysql_date,
)
from .model import Supplier, SupplierPayment
from .repository import SupplierPaymentRepository, SupplierRepository

_SUPPLIER_COLUMNS = "supplier_id, name, contact_person, phone, address, payment_terms, notes, is_active, created_at"
_PAYMENT_COLUMNS = """
    payment_id, supplier_id, project_id, amount, payment_method, reference_number,
    payment_date, notes, created_at
"""


def _to_supplier(row: dict) -> Supplier:
    return Supplier(
        supplier_id=int(row["supplier_id"]),
        name=row["name"],
        contact_person=row.get("contact_person"),
        phone=row.get("phone"),
        address=row.get("address"),
        payment_terms=row.get("payment_terms"),
        notes=row.get("notes"),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
    )


def _to_payment(row: dict) -> SupplierPayment:
    return SupplierPayment(
        payment_id=int(row["payment_id"]),
        supplier_id=int(row["supplier_id"]),
        project_id=int(row["project_id"]) if row.get("project_id") is not None else None,
        amount=money_or_zero(row["amount"]),
        payment_method=row.get("payment_method") or "cash",
        reference_number=row.get("reference_number"),
        payment_date=normalize_mysql_date(row["payment_date"]),
        notes=row.get("notes"),
        created_at=row.get("created_at"),
    )


class MySQLSupplierRepository(SupplierRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, supplier_id: int) -> Optional[Supplier]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SUPPLIER_COLUMNS} FROM suppliers WHERE supplier_id=%s", (supplier_id,))
            row = fetchone(cur)
            return _to_supplier(row) if row else None

    def get_by_name(self, name: str) -> Optional[Supplier]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SUPPLIER_COLUMNS} FROM suppliers WHERE name=%s", (name,))
            row = fetchone(cur)
            return _to_supplier(row) if row else None

    def list_all(self, *, active_only: bool = False) -> Sequence[Supplier]:
        sql = f"SELECT {_SUPPLIER_COLUMNS} FROM suppliers"
        if active_only:
            sql += " WHERE is_active=1"
        sql += " ORDER BY name"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql)
            return [_to_supplier(r) for r in fetchall(cur)]

    def create(self, supplier: Supplier) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO suppliers(name, contact_person, phone, address, payment_terms, notes, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    supplier.name,
                    supplier.contact_person,
                    supplier.phone,
                    supplier.address,
                    supplier.payment_terms,
                    supplier.notes,
                    int(supplier.is_active),
                ),
            )
            return int(cur.lastrowid)

    def update(self, supplier: Supplier) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE suppliers
                SET name=%s, contact_person=%s, phone=%s, address=%s, payment_terms=%s,
                    notes=%s, is_active=%s
                WHERE supplier_id=%s
                """,
                (
                    supplier.name,
                    supplier.contact_person,
                    supplier.phone,
                    supplier.address,
                    supplier.payment_terms,
                    supplier.notes,
                    int(supplier.is_active),
                    supplier.supplier_id,
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, supplier_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM suppliers WHERE supplier_id=%s", (supplier_id,))
            return cur.rowcount > 0


class MySQLSupplierPaymentRepository(SupplierPaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, payment_id: int) -> Optional[SupplierPayment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PAYMENT_COLUMNS} FROM supplier_payments WHERE payment_id=%s", (payment_id,))
            row = fetchone(cur)
            return _to_payment(row) if row else None

    def create(self, payment: SupplierPayment) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO supplier_payments(
                    supplier_id, project_id, amount, payment_method, reference_number, payment_date, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    payment.supplier_id,
                    payment.project_id,
                    payment.amount,
                    payment.payment_method,
                    payment.reference_number,
                    payment.payment_date,
                    payment.notes,
                ),
            )
            return int(cur.lastrowid)

    def update(self, payment: SupplierPayment) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE supplier_payments
                SET supplier_id=%s, project_id=%s, amount=%s, payment_method=%s,
                    reference_number=%s, payment_date=%s, notes=%s
                WHERE payment_id=%s
                """,
                (
                    payment.supplier_id,
                    payment.project_id,
                    payment.amount,
                    payment.payment_method,
                    payment.reference_number,
                    payment.payment_date,
                    payment.notes,
                    payment.payment_id,
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, payment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM supplier_payments WHERE payment_id=%s", (payment_id,))
            return cur.rowcount > 0

    def list_filtered(
        self,
        *,
        supplier_id: Optional[int] = None,
        project_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[SupplierPayment]:
        conditions = []
        if supplier_id is not None:
            conditions.append(("supplier_id=%s", [supplier_id]))
        if project_id is not None:
            conditions.append(("project_id=%s", [project_id]))
        conditions.extend(date_range_conditions("payment_date", date_from, date_to))
        where, params = build_where(conditions)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_PAYMENT_COLUMNS} FROM supplier_payments {where} ORDER BY payment_date, payment_id",
                tuple(params),
            )
            return [_to_payment(r) for r in fetchall(cur)]
