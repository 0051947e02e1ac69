from __future__ import annotations

from decimal import Decimal

from ...common.money import ZERO
from .base import PaymentStrategy, Settlement


class CreditPaymentStrategy(PaymentStrategy):
    """Nothing is paid on the day; the full wage is owed to the worker."""

    def settle(self, *, actual_wage: Decimal, paid_amount: Decimal) -> Settlement:
        return Settlement(paid_amount=ZERO, remaining_amount=actual_wage)
