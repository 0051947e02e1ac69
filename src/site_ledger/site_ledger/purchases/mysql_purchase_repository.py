from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..common.money import money_or_zero
from ..core.enums import PurchaseType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    build_where,
    date_range_conditions,
    db_cursor,
    fetchall,
    fetchone,
    in_clause,
    normalize_mysql_date,
)
from .model import Material, MaterialPurchase
from .repository import MaterialRepository, PurchaseRepository

_PURCHASE_SELECT = """
    SELECT p.purchase_id, p.project_id, p.material_id, p.supplier_id, p.supplier_name,
           p.quantity, p.unit_price, p.total_amount, p.purchase_type, p.paid_amount,
           p.remaining_amount, p.invoice_number, p.invoice_date, p.notes, p.purchase_date,
           p.created_at, m.name AS material_name, m.unit AS material_unit
    FROM material_purchases p
    JOIN materials m ON m.material_id = p.material_id
"""


def _to_material(row: dict) -> Material:
    return Material(
        material_id=int(row["material_id"]),
        name=row["name"],
        unit=row["unit"],
        category=row.get("category") or "general",
    )


def _to_purchase(row: dict) -> MaterialPurchase:
    return MaterialPurchase(
        purchase_id=int(row["purchase_id"]),
        project_id=int(row["project_id"]),
        material_id=int(row["material_id"]),
        supplier_id=int(row["supplier_id"]) if row.get("supplier_id") is not None else None,
        supplier_name=row.get("supplier_name"),
        quantity=Decimal(str(row["quantity"])),
        unit_price=money_or_zero(row["unit_price"]),
        total_amount=money_or_zero(row["total_amount"]),
        purchase_type=PurchaseType(row["purchase_type"]),
        paid_amount=money_or_zero(row["paid_amount"]),
        remaining_amount=money_or_zero(row["remaining_amount"]),
        invoice_number=row.get("invoice_number"),
        invoice_date=normalize_mysql_date(row.get("invoice_date")),
        notes=row.get("notes"),
        purchase_date=normalize_mysql_date(row["purchase_date"]),
        material_name=row.get("material_name"),
        material_unit=row.get("material_unit"),
        created_at=row.get("created_at"),
    )


def _values(p: MaterialPurchase) -> tuple:
    return (
        p.project_id,
        p.material_id,
        p.supplier_id,
        p.supplier_name,
        p.quantity,
        p.unit_price,
        p.total_amount,
        p.purchase_type.value,
        p.paid_amount,
        p.remaining_amount,
        p.invoice_number,
        p.invoice_date,
        p.notes,
        p.purchase_date,
    )


class MySQLMaterialRepository(MaterialRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, material_id: int) -> Optional[Material]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT material_id, name, unit, category FROM materials WHERE material_id=%s", (material_id,))
            row = fetchone(cur)
            return _to_material(row) if row else None

    def find(self, *, name: str, unit: str) -> Optional[Material]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT material_id, name, unit, category FROM materials WHERE name=%s AND unit=%s",
                (name, unit),
            )
            row = fetchone(cur)
            return _to_material(row) if row else None

    def create(self, *, name: str, unit: str, category: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO materials(name, unit, category) VALUES(%s, %s, %s)", (name, unit, category))
            return int(cur.lastrowid)

    def list_all(self) -> Sequence[Material]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT material_id, name, unit, category FROM materials ORDER BY name, unit")
            return [_to_material(r) for r in fetchall(cur)]


class MySQLPurchaseRepository(PurchaseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, purchase_id: int) -> Optional[MaterialPurchase]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_PURCHASE_SELECT} WHERE p.purchase_id=%s", (purchase_id,))
            row = fetchone(cur)
            return _to_purchase(row) if row else None

    def create(self, purchase: MaterialPurchase) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO material_purchases(
                    project_id, material_id, supplier_id, supplier_name, quantity, unit_price,
                    total_amount, purchase_type, paid_amount, remaining_amount, invoice_number,
                    invoice_date, notes, purchase_date
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _values(purchase),
            )
            return int(cur.lastrowid)

    def update(self, purchase: MaterialPurchase) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE material_purchases
                SET project_id=%s, material_id=%s, supplier_id=%s, supplier_name=%s, quantity=%s,
                    unit_price=%s, total_amount=%s, purchase_type=%s, paid_amount=%s,
                    remaining_amount=%s, invoice_number=%s, invoice_date=%s, notes=%s, purchase_date=%s
                WHERE purchase_id=%s
                """,
                _values(purchase) + (purchase.purchase_id,),
            )
            return cur.rowcount > 0

    def delete_by_id(self, purchase_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM material_purchases WHERE purchase_id=%s", (purchase_id,))
            return cur.rowcount > 0

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
        if project_ids is not None and not project_ids:
            return []
        conditions = []
        if project_ids:
            conditions.append(in_clause("p.project_id", project_ids))
        conditions.extend(date_range_conditions("p.purchase_date", date_from, date_to))
        if purchase_type is not None:
            conditions.append(("p.purchase_type=%s", [purchase_type.value]))
        if supplier_id is not None and supplier_name:
            conditions.append(("(p.supplier_id=%s OR p.supplier_name=%s)", [supplier_id, supplier_name]))
        elif supplier_id is not None:
            conditions.append(("p.supplier_id=%s", [supplier_id]))
        elif supplier_name:
            conditions.append(("p.supplier_name=%s", [supplier_name]))
        where, params = build_where(conditions)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_PURCHASE_SELECT} {where} ORDER BY p.purchase_date, p.purchase_id", tuple(params))
            return [_to_purchase(r) for r in fetchall(cur)]
