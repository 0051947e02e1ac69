from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Worker:
    worker_id: int
    name: str
    type: str
    daily_wage: Decimal
    is_active: bool = True
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class WorkerType:
    """A named trade offered when registering workers (master, labourer, ...)."""

    worker_type_id: int
    name: str
    created_at: Optional[datetime] = None
