from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_required_date, require_date_order
from ..common.validators import (
    optional_text,
    parse_enum,
    reject_unknown_fields,
    require_id,
    require_non_empty,
    require_positive_amount,
)
from ..core.enums import TransferMethod
from ..core.exceptions import NotFoundError
from ..projects.repository import ProjectRepository
from ..summaries.service import DailySummaryService
from ..workers.repository import WorkerRepository
from .model import WorkerTransfer
from .repository import WorkerTransferRepository

logger = logging.getLogger(__name__)

_EDITABLE = (
    "worker_id",
    "project_id",
    "amount",
    "recipient_name",
    "recipient_phone",
    "transfer_method",
    "transfer_date",
    "notes",
)


class WorkerTransferService:
    def __init__(
        self,
        transfers: WorkerTransferRepository,
        workers: WorkerRepository,
        projects: ProjectRepository,
        summaries: DailySummaryService,
    ):
        self._transfers = transfers
        self._workers = workers
        self._projects = projects
        self._summaries = summaries

    def get(self, transfer_id: int) -> WorkerTransfer:
        transfer = self._transfers.get_by_id(int(transfer_id))
        if not transfer:
            raise NotFoundError("Worker transfer not found")
        return transfer

    def list_transfers(
        self,
        *,
        worker_id: Optional[int] = None,
        project_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[WorkerTransfer]:
        require_date_order(date_from, date_to)
        return list(
            self._transfers.list_filtered(
                worker_id=worker_id,
                project_ids=[project_id] if project_id is not None else None,
                date_from=date_from,
                date_to=date_to,
            )
        )

    def create(self, data: Mapping[str, Any]) -> WorkerTransfer:
        transfer = self._parse(0, data)
        transfer_id = self._transfers.create(transfer)
        self._summaries.refresh_day(transfer.project_id, transfer.transfer_date)
        logger.info(
            "worker transfer created id=%s worker=%s amount=%s to=%s",
            transfer_id,
            transfer.worker_id,
            transfer.amount,
            transfer.recipient_name,
        )
        return self.get(transfer_id)

    def update(self, transfer_id: int, changes: Mapping[str, Any]) -> WorkerTransfer:
        current = self.get(transfer_id)
        reject_unknown_fields(changes, _EDITABLE)
        updated = self._parse(current.transfer_id, {**asdict(current), **changes})
        self._transfers.update(updated)
        self._summaries.refresh_day(current.project_id, current.transfer_date)
        if (updated.project_id, updated.transfer_date) != (current.project_id, current.transfer_date):
            self._summaries.refresh_day(updated.project_id, updated.transfer_date)
        return self.get(current.transfer_id)

    def delete(self, transfer_id: int) -> None:
        transfer = self.get(transfer_id)
        self._transfers.delete_by_id(transfer.transfer_id)
        self._summaries.refresh_day(transfer.project_id, transfer.transfer_date)

    def _parse(self, transfer_id: int, data: Mapping[str, Any]) -> WorkerTransfer:
        worker_id = require_id(data.get("worker_id"), "worker_id")
        project_id = require_id(data.get("project_id"), "project_id")
        if not self._workers.get_by_id(worker_id):
            raise NotFoundError("Worker not found")
        if not self._projects.get_by_id(project_id):
            raise NotFoundError("Project not found")

        return WorkerTransfer(
            transfer_id=transfer_id,
            worker_id=worker_id,
            project_id=project_id,
            amount=require_positive_amount(data.get("amount")),
            recipient_name=require_non_empty(data.get("recipient_name"), "recipient_name"),
            recipient_phone=optional_text(data.get("recipient_phone")),
            transfer_method=parse_enum(TransferMethod, data.get("transfer_method"), "transfer_method"),
            transfer_date=parse_required_date(data.get("transfer_date"), "transfer_date"),
            notes=optional_text(data.get("notes")),
        )
