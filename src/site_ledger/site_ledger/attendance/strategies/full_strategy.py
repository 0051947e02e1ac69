from __future__ import annotations

from decimal import Decimal

from ...common.money import ZERO
from .base import PaymentStrategy, Settlement


class FullPaymentStrategy(PaymentStrategy):
    """The whole wage is handed over on the day; any typed amount is ignored."""

    def settle(self, *, actual_wage: Decimal, paid_amount: Decimal) -> Settlement:
        return Settlement(paid_amount=actual_wage, remaining_amount=ZERO)
