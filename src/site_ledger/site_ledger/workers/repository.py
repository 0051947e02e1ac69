from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Worker, WorkerType


class WorkerRepository(Protocol):
    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Worker]:
        raise NotImplementedError

    def list_all(self, *, active_only: bool = False) -> Sequence[Worker]:
        raise NotImplementedError

    def create(self, *, name: str, type: str, daily_wage: Decimal, is_active: bool) -> int:
        raise NotImplementedError

    def update(self, worker_id: int, *, name: str, type: str, daily_wage: Decimal, is_active: bool) -> bool:
        raise NotImplementedError

    def delete_by_id(self, worker_id: int) -> bool:
        raise NotImplementedError


class WorkerTypeRepository(Protocol):
    def get_by_id(self, worker_type_id: int) -> Optional[WorkerType]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[WorkerType]:
        raise NotImplementedError

    def list_all(self) -> Sequence[WorkerType]:
        raise NotImplementedError

    def create(self, *, name: str) -> int:
        raise NotImplementedError
