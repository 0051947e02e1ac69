from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PaymentType
from .strategies.base import PaymentStrategy
from .strategies.credit_strategy import CreditPaymentStrategy
from .strategies.full_strategy import FullPaymentStrategy
from .strategies.partial_strategy import PartialPaymentStrategy


@dataclass
class PaymentStrategyFactory:
    """Factory Pattern: choose the settlement rule for a payment type."""

    def for_payment(self, payment_type: PaymentType) -> PaymentStrategy:
        if payment_type == PaymentType.FULL:
            return FullPaymentStrategy()
        if payment_type == PaymentType.CREDIT:
            return CreditPaymentStrategy()
        return PartialPaymentStrategy()
