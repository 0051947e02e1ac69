from decimal import Decimal

import pytest

from src.site_ledger.site_ledger.core.exceptions import NotFoundError


@pytest.fixture
def tower(site):
    return site["tower"].project_id


def _fund(container, project_id, amount, when, number=None):
    return container.fund_transfer_service.create(
        {
            "project_id": project_id,
            "amount": amount,
            "transfer_type": "owner",
            "transfer_date": when,
            "transfer_number": number,
        }
    )


def test_balance_carries_to_next_summarised_day(container, repos, site, tower, day):
    _fund(container, tower, "1000", "2025-03-01")
    container.attendance_service.record(
        {"project_id": tower, "worker_id": site["ahmad"].worker_id, "date": "2025-03-03", "paid_amount": "150", "payment_type": "full"}
    )

    first = repos.summaries.get(project_id=tower, summary_date=day(1))
    second = repos.summaries.get(project_id=tower, summary_date=day(3))

    assert first.remaining_balance == Decimal("1000.00")
    assert second.carried_forward_amount == first.remaining_balance
    assert second.total_income == Decimal("1000.00")
    assert second.total_expenses == Decimal("150.00")
    assert second.remaining_balance == second.total_income - second.total_expenses


def test_backdated_entry_recarries_later_days(container, repos, tower, day):
    _fund(container, tower, "500", "2025-03-05")
    _fund(container, tower, "200", "2025-03-02")

    later = repos.summaries.get(project_id=tower, summary_date=day(5))
    assert later.carried_forward_amount == Decimal("200.00")
    assert later.remaining_balance == Decimal("700.00")


def test_only_cash_purchases_count_as_material_costs(container, repos, tower, day):
    base = {"project_id": tower, "material_name": "Cement", "material_unit": "bag", "quantity": "10", "unit_price": "30", "purchase_date": "2025-03-03"}
    container.purchase_service.create({**base, "purchase_type": "cash"})
    container.purchase_service.create({**base, "purchase_type": "credit", "supplier_name": "Al-Quds Supply"})

    summary = repos.summaries.get(project_id=tower, summary_date=day(3))
    assert summary.total_material_costs == Decimal("300.00")


def test_project_transfers_move_balance_between_projects(container, repos, site, day):
    tower, villa = site["tower"].project_id, site["villa"].project_id
    container.project_transfer_service.create(
        {"from_project_id": tower, "to_project_id": villa, "amount": "250", "transfer_date": "2025-03-03"}
    )

    assert repos.summaries.get(project_id=tower, summary_date=day(3)).remaining_balance == Decimal("-250.00")
    assert repos.summaries.get(project_id=villa, summary_date=day(3)).remaining_balance == Decimal("250.00")


def test_recalculate_all_rebuilds_chain(container, repos, tower, day):
    _fund(container, tower, "300", "2025-03-01")
    container.transportation_service.create(
        {"project_id": tower, "amount": "40", "description": "Truck", "date": "2025-03-02"}
    )
    repos.summaries.rows.clear()

    rebuilt = container.summary_service.recalculate_all(tower)

    assert [s.summary_date for s in rebuilt] == [day(1), day(2)]
    assert rebuilt[1].carried_forward_amount == Decimal("300.00")
    assert rebuilt[1].remaining_balance == Decimal("260.00")


def test_daily_range_fills_missing_days_without_storing(container, repos, tower, day):
    _fund(container, tower, "100", "2025-03-02")
    before = dict(repos.summaries.rows)

    days = container.summary_service.daily_range(tower, "2025-03-01", "2025-03-04")

    assert [d.summary.summary_date for d in days] == [day(1), day(2), day(3), day(4)]
    assert [d.persisted for d in days] == [False, True, False, False]
    assert days[3].summary.remaining_balance == Decimal("100.00")
    assert repos.summaries.rows == before


def test_unknown_project_is_not_found(container):
    with pytest.raises(NotFoundError):
        container.summary_service.recalculate_all(42)
