from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_required_date, require_date_order
from ..common.validators import (
    optional_text,
    reject_unknown_fields,
    require_id,
    require_non_empty,
    require_positive_amount,
)
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..projects.repository import ProjectRepository
from ..summaries.service import DailySummaryService
from .model import FundTransfer, ProjectFundTransfer
from .repository import FundTransferRepository, ProjectFundTransferRepository

logger = logging.getLogger(__name__)

_FUND_EDITABLE = (
    "project_id",
    "amount",
    "sender_name",
    "transfer_number",
    "transfer_type",
    "transfer_date",
    "notes",
)
_PROJECT_TRANSFER_EDITABLE = (
    "from_project_id",
    "to_project_id",
    "amount",
    "description",
    "transfer_reason",
    "transfer_date",
)


class FundTransferService:
    """Cash received by a project. Transfer numbers, when given, are unique."""

    def __init__(self, transfers: FundTransferRepository, projects: ProjectRepository, summaries: DailySummaryService):
        self._transfers = transfers
        self._projects = projects
        self._summaries = summaries

    def get(self, fund_transfer_id: int) -> FundTransfer:
        transfer = self._transfers.get_by_id(int(fund_transfer_id))
        if not transfer:
            raise NotFoundError("Fund transfer not found")
        return transfer

    def list_transfers(
        self,
        *,
        project_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[FundTransfer]:
        require_date_order(date_from, date_to)
        return list(
            self._transfers.list_filtered(
                project_ids=[project_id] if project_id is not None else None,
                date_from=date_from,
                date_to=date_to,
            )
        )

    def create(self, data: Mapping[str, Any]) -> FundTransfer:
        transfer = self._parse(0, data)
        transfer_id = self._transfers.create(transfer)
        self._summaries.refresh_day(transfer.project_id, transfer.transfer_date)
        logger.info("fund transfer created id=%s project=%s amount=%s", transfer_id, transfer.project_id, transfer.amount)
        return self.get(transfer_id)

    def update(self, fund_transfer_id: int, changes: Mapping[str, Any]) -> FundTransfer:
        current = self.get(fund_transfer_id)
        reject_unknown_fields(changes, _FUND_EDITABLE)
        updated = self._parse(current.fund_transfer_id, {**asdict(current), **changes})
        self._transfers.update(updated)
        self._summaries.refresh_day(current.project_id, current.transfer_date)
        if (updated.project_id, updated.transfer_date) != (current.project_id, current.transfer_date):
            self._summaries.refresh_day(updated.project_id, updated.transfer_date)
        return self.get(current.fund_transfer_id)

    def delete(self, fund_transfer_id: int) -> None:
        transfer = self.get(fund_transfer_id)
        self._transfers.delete_by_id(transfer.fund_transfer_id)
        self._summaries.refresh_day(transfer.project_id, transfer.transfer_date)

    def _parse(self, fund_transfer_id: int, data: Mapping[str, Any]) -> FundTransfer:
        project_id = require_id(data.get("project_id"), "project_id")
        if not self._projects.get_by_id(project_id):
            raise NotFoundError("Project not found")

        transfer_number = optional_text(data.get("transfer_number"))
        if transfer_number:
            existing = self._transfers.get_by_number(transfer_number)
            if existing and existing.fund_transfer_id != fund_transfer_id:
                raise ConflictError("Transfer number already exists")

        return FundTransfer(
            fund_transfer_id=fund_transfer_id,
            project_id=project_id,
            amount=require_positive_amount(data.get("amount")),
            sender_name=optional_text(data.get("sender_name")),
            transfer_number=transfer_number,
            transfer_type=require_non_empty(data.get("transfer_type"), "transfer_type"),
            transfer_date=parse_required_date(data.get("transfer_date"), "transfer_date"),
            notes=optional_text(data.get("notes")),
        )


class ProjectFundTransferService:
    """Moves cash between two projects; both sides' daily summaries follow."""

    def __init__(
        self,
        transfers: ProjectFundTransferRepository,
        projects: ProjectRepository,
        summaries: DailySummaryService,
    ):
        self._transfers = transfers
        self._projects = projects
        self._summaries = summaries

    def get(self, project_transfer_id: int) -> ProjectFundTransfer:
        transfer = self._transfers.get_by_id(int(project_transfer_id))
        if not transfer:
            raise NotFoundError("Project transfer not found")
        return transfer

    def list_transfers(
        self,
        *,
        project_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[ProjectFundTransfer]:
        require_date_order(date_from, date_to)
        return list(self._transfers.list_filtered(project_id=project_id, date_from=date_from, date_to=date_to))

    def create(self, data: Mapping[str, Any]) -> ProjectFundTransfer:
        transfer = self._parse(0, data)
        transfer_id = self._transfers.create(transfer)
        self._refresh(transfer)
        logger.info(
            "project transfer created id=%s from=%s to=%s amount=%s",
            transfer_id,
            transfer.from_project_id,
            transfer.to_project_id,
            transfer.amount,
        )
        return self.get(transfer_id)

    def update(self, project_transfer_id: int, changes: Mapping[str, Any]) -> ProjectFundTransfer:
        current = self.get(project_transfer_id)
        reject_unknown_fields(changes, _PROJECT_TRANSFER_EDITABLE)
        updated = self._parse(current.project_transfer_id, {**asdict(current), **changes})
        self._transfers.update(updated)
        self._refresh(current)
        self._refresh(updated)
        return self.get(current.project_transfer_id)

    def delete(self, project_transfer_id: int) -> None:
        transfer = self.get(project_transfer_id)
        self._transfers.delete_by_id(transfer.project_transfer_id)
        self._refresh(transfer)

    def _refresh(self, transfer: ProjectFundTransfer) -> None:
        self._summaries.refresh_day(transfer.from_project_id, transfer.transfer_date)
        self._summaries.refresh_day(transfer.to_project_id, transfer.transfer_date)

    def _parse(self, project_transfer_id: int, data: Mapping[str, Any]) -> ProjectFundTransfer:
        from_project_id = require_id(data.get("from_project_id"), "from_project_id")
        to_project_id = require_id(data.get("to_project_id"), "to_project_id")
        if from_project_id == to_project_id:
            raise ValidationError("Cannot transfer funds to the same project")
        if not self._projects.get_by_id(from_project_id):
            raise NotFoundError("Source project not found")
        if not self._projects.get_by_id(to_project_id):
            raise NotFoundError("Destination project not found")

        return ProjectFundTransfer(
            project_transfer_id=project_transfer_id,
            from_project_id=from_project_id,
            to_project_id=to_project_id,
            amount=require_positive_amount(data.get("amount")),
            description=optional_text(data.get("description")),
            transfer_reason=optional_text(data.get("transfer_reason")),
            transfer_date=parse_required_date(data.get("transfer_date"), "transfer_date"),
        )
