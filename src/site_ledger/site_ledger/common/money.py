"""Fixed-point helpers for monetary amounts.

All money is handled as ``Decimal`` quantized to cents; floats never reach
the arithmetic.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

from ..core.constants import MONEY_QUANT
from ..core.exceptions import ValidationError

ZERO = Decimal("0.00")


def to_decimal(value: Any, field_name: str = "amount") -> Decimal:
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        if isinstance(value, float):
            result = Decimal(str(value))
        else:
            result = Decimal(str(value).strip().replace(",", ""))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    return result


def money(value: Any, field_name: str = "amount") -> Decimal:
    return quantize(to_decimal(value, field_name))


def quantize(value: Decimal, quant: Decimal = MONEY_QUANT) -> Decimal:
    return value.quantize(quant, rounding=ROUND_HALF_UP)


def money_or_zero(value: Any) -> Decimal:
    """Lenient conversion for values read back from the database."""
    if value is None or value == "":
        return ZERO
    return quantize(Decimal(str(value)))


def total(values: Iterable[Any]) -> Decimal:
    return quantize(sum((money_or_zero(v) for v in values), ZERO))
