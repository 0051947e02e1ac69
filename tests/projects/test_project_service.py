from decimal import Decimal

import pytest

from src.site_ledger.site_ledger.core.enums import ProjectStatus
from src.site_ledger.site_ledger.core.exceptions import ConflictError, NotFoundError
from src.site_ledger.site_ledger.projects import service as project_service_module


def test_create_project_defaults_to_active(container):
    project = container.project_service.create_project(name="  School C ")

    assert project.name == "School C"
    assert project.status == ProjectStatus.ACTIVE


def test_project_names_are_unique(container, site):
    with pytest.raises(ConflictError):
        container.project_service.create_project(name="Tower A")
    with pytest.raises(ConflictError):
        container.project_service.update_project(site["villa"].project_id, name="Tower A")


def test_update_status_only(container, site):
    project = container.project_service.update_project(site["tower"].project_id, status="completed")

    assert project.name == "Tower A"
    assert project.status == ProjectStatus.COMPLETED


def test_statistics_cover_every_money_movement(container, site):
    tower, villa = site["tower"].project_id, site["villa"].project_id
    container.fund_transfer_service.create(
        {"project_id": tower, "amount": "3000", "transfer_type": "owner", "transfer_date": "2025-03-01"}
    )
    container.project_transfer_service.create(
        {"from_project_id": tower, "to_project_id": villa, "amount": "500", "transfer_date": "2025-03-01"}
    )
    for worker, n in ((site["ahmad"], 3), (site["ahmad"], 4), (site["samir"], 4)):
        container.attendance_service.record(
            {"project_id": tower, "worker_id": worker.worker_id, "date": f"2025-03-0{n}", "payment_type": "full"}
        )
    container.purchase_service.create(
        {"project_id": tower, "material_name": "Cement", "material_unit": "bag", "quantity": "10", "unit_price": "25", "purchase_date": "2025-03-04"}
    )
    container.transportation_service.create(
        {"project_id": tower, "amount": "60", "description": "Crane", "date": "2025-03-04"}
    )

    stats = container.project_service.statistics(tower)

    assert stats.total_workers == 2
    assert stats.completed_days == 2
    assert stats.material_purchases == 1
    assert stats.total_income == Decimal("3000.00")
    # 150 + 150 + 120 wages, 250 cement, 60 transport, 500 moved out
    assert stats.total_expenses == Decimal("1230.00")
    assert stats.current_balance == Decimal("1770.00")



def test_delete_project_refreshes_counterpart_days(container, repos, site, day):
    tower, villa = site["tower"].project_id, site["villa"].project_id
    container.fund_transfer_service.create(
        {"project_id": villa, "amount": "200", "transfer_type": "owner", "transfer_date": "2025-03-01"}
    )
    container.project_transfer_service.create(
        {"from_project_id": tower, "to_project_id": villa, "amount": "500", "transfer_date": "2025-03-02"}
    )
    container.misc_expense_service.create(
        {"project_id": villa, "amount": "50", "description": "Tea", "date": "2025-03-04"}
    )
    assert repos.summaries.get(project_id=villa, summary_date=day(4)).remaining_balance == Decimal("650.00")

    container.project_service.delete_project(tower)

    second = repos.summaries.get(project_id=villa, summary_date=day(2))
    assert second.total_incoming_transfers == 0
    assert second.remaining_balance == Decimal("200.00")
    assert repos.summaries.get(project_id=villa, summary_date=day(4)).remaining_balance == Decimal("150.00")
    assert not repos.summaries.list_for_project(project_id=tower)
    assert not repos.project_transfers.list_filtered(project_id=villa)
    with pytest.raises(NotFoundError):
        container.project_service.get_project(tower)


def test_projects_with_statistics(container, site):
    container.fund_transfer_service.create(
        {"project_id": site["villa"].project_id, "amount": "900", "transfer_type": "owner", "transfer_date": "2025-03-01"}
    )

    overview = {o.project.name: o.statistics for o in container.project_service.list_with_statistics()}

    assert set(overview) == {"Tower A", "Villa B"}
    assert overview["Villa B"].total_income == Decimal("900.00")
    assert overview["Tower A"].current_balance == 0


def test_stats_summary_counts(container, repos, site, monkeypatch, fixed_now):
    monkeypatch.setattr(project_service_module, "now_local", lambda: fixed_now)
    container.project_service.update_project(site["villa"].project_id, status="completed")
    container.worker_service.update_worker(site["samir"].worker_id, {"is_active": False})
    repos.materials.create(name="Cement", unit="bag", category="general")

    summary = container.project_service.stats_summary()

    assert (summary.total_projects, summary.active_projects) == (2, 1)
    assert (summary.total_workers, summary.active_workers) == (2, 1)
    assert summary.total_materials == 1
    assert summary.status == "operational"
    assert summary.last_updated == fixed_now
