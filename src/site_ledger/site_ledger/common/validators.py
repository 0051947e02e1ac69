from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .money import money, quantize, to_decimal


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def require_positive_amount(value: Any, field_name: str = "amount") -> Decimal:
    amount = money(value, field_name)
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return amount


def require_non_negative_amount(value: Any, field_name: str = "amount") -> Decimal:
    amount = money(value, field_name)
    if amount < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return amount


def require_positive_decimal(value: Any, field_name: str, quant: Decimal) -> Decimal:
    number = quantize(to_decimal(value, field_name), quant)
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return number


def require_id(value: Any, field_name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is required")
    if parsed <= 0:
        raise ValidationError(f"{field_name} is required")
    return parsed


def optional_id(value: Any, field_name: str) -> Optional[int]:
    if value in (None, ""):
        return None
    return require_id(value, field_name)


E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: Type[E], value: Any, field_name: str, *, default: Optional[E] = None) -> E:
    if value is None or value == "":
        if default is None:
            raise ValidationError(f"{field_name} is required")
        return default
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def parse_bool(value: Any, *, default: bool) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def parse_id_list(value: Any, field_name: str) -> Optional[list[int]]:
    """Accept ``"1,2,3"``, a list of ids, or nothing (meaning no filter)."""
    if value in (None, "", []):
        return None
    items = value if isinstance(value, (list, tuple)) else str(value).split(",")
    out: list[int] = []
    for item in items:
        if str(item).strip() == "":
            continue
        out.append(require_id(item, field_name))
    return out or None


def reject_unknown_fields(changes: Any, editable: Iterable[str]) -> None:
    unknown = set(changes) - set(editable)
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
