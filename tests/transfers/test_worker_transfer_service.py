from decimal import Decimal

import pytest

from src.site_ledger.site_ledger.core.exceptions import ValidationError


@pytest.fixture
def transfer(container, site):
    return container.worker_transfer_service.create(
        {
            "worker_id": site["ahmad"].worker_id,
            "project_id": site["tower"].project_id,
            "amount": "20",
            "recipient_name": "Wife",
            "transfer_method": "bank",
            "transfer_date": "2025-03-03",
        }
    )


def test_worker_transfer_needs_recipient_and_method(container, site):
    base = {
        "worker_id": site["ahmad"].worker_id,
        "project_id": site["tower"].project_id,
        "amount": "20",
        "transfer_date": "2025-03-03",
    }
    with pytest.raises(ValidationError):
        container.worker_transfer_service.create({**base, "transfer_method": "bank"})
    with pytest.raises(ValidationError):
        container.worker_transfer_service.create({**base, "recipient_name": "Wife", "transfer_method": "pigeon"})


def test_worker_transfer_delete_refreshes_summary(container, repos, site, day, transfer):
    summary = repos.summaries.get(project_id=site["tower"].project_id, summary_date=day(3))
    assert summary.total_worker_transfers == Decimal("20.00")

    container.worker_transfer_service.delete(transfer.transfer_id)

    summary = repos.summaries.get(project_id=site["tower"].project_id, summary_date=day(3))
    assert summary.total_worker_transfers == 0


def test_worker_transfer_update_rejects_unknown_fields(container, transfer):
    with pytest.raises(ValidationError, match="Unknown fields: ammount"):
        container.worker_transfer_service.update(transfer.transfer_id, {"ammount": "30"})

    assert container.worker_transfer_service.get(transfer.transfer_id).amount == Decimal("20.00")
