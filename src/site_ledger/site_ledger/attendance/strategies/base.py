from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Settlement:
    paid_amount: Decimal
    remaining_amount: Decimal


class PaymentStrategy(ABC):
    """Strategy Pattern: decide how much of a day's wage is paid now and how much stays owed."""

    @abstractmethod
    def settle(self, *, actual_wage: Decimal, paid_amount: Decimal) -> Settlement:
        raise NotImplementedError
