from decimal import Decimal

import pytest

from src.site_ledger.site_ledger.core.exceptions import ConflictError, ValidationError


def test_worker_wage_must_be_positive(container):
    with pytest.raises(ValidationError):
        container.worker_service.create_worker(name="Omar", type="labourer", daily_wage="0")


def test_worker_names_are_unique(container, site):
    with pytest.raises(ConflictError):
        container.worker_service.create_worker(name="Ahmad", type="labourer", daily_wage="90")


def test_worker_projects_come_from_attendance(container, site):
    for project in (site["villa"], site["tower"]):
        container.attendance_service.record(
            {"project_id": project.project_id, "worker_id": site["samir"].worker_id, "date": "2025-03-03"}
        )

    projects = container.worker_service.worker_projects(site["samir"].worker_id)

    assert [p.name for p in projects] == ["Tower A", "Villa B"]


def test_deactivated_worker_hidden_from_active_list(container, site):
    container.worker_service.update_worker(site["samir"].worker_id, {"is_active": "0"})

    names = [w.name for w in container.worker_service.list_workers(active_only=True)]

    assert names == ["Ahmad"]


def test_update_worker_rejects_unknown_fields(container, site):
    with pytest.raises(ValidationError, match="Unknown fields: wage"):
        container.worker_service.update_worker(site["samir"].worker_id, {"wage": "200"})


def test_delete_worker_refreshes_project_days(container, repos, site, day):
    tower = site["tower"].project_id
    container.fund_transfer_service.create(
        {"project_id": tower, "amount": "1000", "transfer_type": "owner", "transfer_date": "2025-03-01"}
    )
    container.attendance_service.record(
        {"project_id": tower, "worker_id": site["ahmad"].worker_id, "date": "2025-03-03", "payment_type": "full"}
    )
    container.attendance_service.record(
        {"project_id": tower, "worker_id": site["samir"].worker_id, "date": "2025-03-03", "payment_type": "full"}
    )
    container.worker_transfer_service.create(
        {
            "worker_id": site["ahmad"].worker_id,
            "project_id": tower,
            "amount": "40",
            "recipient_name": "Wife",
            "transfer_method": "bank",
            "transfer_date": "2025-03-05",
        }
    )
    assert repos.summaries.get(project_id=tower, summary_date=day(5)).remaining_balance == Decimal("690.00")

    container.worker_service.delete_worker(site["ahmad"].worker_id)

    third = repos.summaries.get(project_id=tower, summary_date=day(3))
    fifth = repos.summaries.get(project_id=tower, summary_date=day(5))
    assert third.total_worker_wages == Decimal("120.00")
    assert fifth.total_worker_transfers == 0
    assert fifth.remaining_balance == Decimal("880.00")
    assert not repos.attendance.list_filtered(worker_id=site["ahmad"].worker_id)
    assert not repos.worker_transfers.list_filtered(worker_id=site["ahmad"].worker_id)


def test_worker_types_are_unique_by_name(container):
    container.worker_service.create_worker_type("mason")
    container.worker_service.create_worker_type(" electrician ")

    assert [t.name for t in container.worker_service.list_worker_types()] == ["electrician", "mason"]
    with pytest.raises(ConflictError):
        container.worker_service.create_worker_type("mason")


def test_worker_type_name_required(container):
    with pytest.raises(ValidationError):
        container.worker_service.create_worker_type("  ")
