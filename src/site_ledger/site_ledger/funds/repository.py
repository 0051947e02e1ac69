from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import FundTransfer, ProjectFundTransfer


class FundTransferRepository(Protocol):
    def get_by_id(self, fund_transfer_id: int) -> Optional[FundTransfer]:
        raise NotImplementedError

    def get_by_number(self, transfer_number: str) -> Optional[FundTransfer]:
        raise NotImplementedError

    def create(self, transfer: FundTransfer) -> int:
        raise NotImplementedError

    def update(self, transfer: FundTransfer) -> bool:
        raise NotImplementedError

    def delete_by_id(self, fund_transfer_id: int) -> bool:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        project_ids: Optional[Sequence[int]] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[FundTransfer]:
        raise NotImplementedError


class ProjectFundTransferRepository(Protocol):
    def get_by_id(self, project_transfer_id: int) -> Optional[ProjectFundTransfer]:
        raise NotImplementedError

    def create(self, transfer: ProjectFundTransfer) -> int:
        raise NotImplementedError

    def update(self, transfer: ProjectFundTransfer) -> bool:
        raise NotImplementedError

    def delete_by_id(self, project_transfer_id: int) -> bool:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        project_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[ProjectFundTransfer]:
        """Transfers touching ``project_id`` on either side."""
        raise NotImplementedError
