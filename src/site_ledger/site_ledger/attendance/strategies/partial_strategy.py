from __future__ import annotations

from decimal import Decimal

from ...core.exceptions import ValidationError
from .base import PaymentStrategy, Settlement


class PartialPaymentStrategy(PaymentStrategy):
    def settle(self, *, actual_wage: Decimal, paid_amount: Decimal) -> Settlement:
        if paid_amount < 0:
            raise ValidationError("paid_amount must not be negative")
        if paid_amount > actual_wage:
            raise ValidationError("paid_amount cannot exceed the day's wage")
        return Settlement(paid_amount=paid_amount, remaining_amount=actual_wage - paid_amount)
