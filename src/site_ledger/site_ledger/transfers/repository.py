from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import WorkerTransfer


class WorkerTransferRepository(Protocol):
    def get_by_id(self, transfer_id: int) -> Optional[WorkerTransfer]:
        raise NotImplementedError

    def create(self, transfer: WorkerTransfer) -> int:
        raise NotImplementedError

    def update(self, transfer: WorkerTransfer) -> bool:
        raise NotImplementedError

    def delete_by_id(self, transfer_id: int) -> bool:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        worker_id: Optional[int] = None,
        project_ids: Optional[Sequence[int]] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[WorkerTransfer]:
        raise NotImplementedError
