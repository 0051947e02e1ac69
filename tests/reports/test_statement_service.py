from decimal import Decimal

import pytest

from src.site_ledger.site_ledger.core.exceptions import NotFoundError, ValidationError
from src.site_ledger.site_ledger.reports.service import work_days_label


@pytest.fixture
def worked(container, site):
    """Ahmad works three days across two projects and gets one transfer."""

    tower, villa = site["tower"].project_id, site["villa"].project_id
    ahmad = site["ahmad"].worker_id
    attend = container.attendance_service.record
    attend({"project_id": tower, "worker_id": ahmad, "date": "2025-03-03", "paid_amount": "100"})
    attend({"project_id": tower, "worker_id": ahmad, "date": "2025-03-04", "work_days": "0.5", "payment_type": "credit"})
    attend({"project_id": villa, "worker_id": ahmad, "date": "2025-03-05", "payment_type": "full"})
    container.worker_transfer_service.create(
        {
            "worker_id": ahmad,
            "project_id": tower,
            "amount": "50",
            "recipient_name": "Ahmad's brother",
            "transfer_method": "hawaleh",
            "transfer_date": "2025-03-06",
        }
    )
    return site


def test_worker_statement_totals(container, worked, day):
    st = container.statement_service.worker_statement(worker_id=worked["ahmad"].worker_id)

    assert [e.work_date for e in st.entries] == [day(3), day(4), day(5)]
    assert st.totals.total_work_days == Decimal("2.5")
    assert st.totals.total_earned == Decimal("375.00")
    assert st.totals.total_paid == Decimal("250.00")
    assert st.totals.total_transferred == Decimal("50.00")
    assert st.totals.remaining == Decimal("75.00")
    assert {p.name for p in st.projects} == {"Tower A", "Villa B"}


def test_worker_statement_limited_to_projects_and_dates(container, worked, day):
    st = container.statement_service.worker_statement(
        worker_id=worked["ahmad"].worker_id,
        project_ids=[worked["tower"].project_id],
        date_from=day(4),
        date_to=day(10),
    )

    assert [e.work_date for e in st.entries] == [day(4)]
    assert st.totals.total_earned == Decimal("75.00")
    assert st.totals.remaining == Decimal("25.00")


def test_absent_day_earns_nothing_on_statement(container, site):
    container.attendance_service.record(
        {"project_id": site["tower"].project_id, "worker_id": site["samir"].worker_id, "date": "2025-03-03", "is_present": "false"}
    )

    st = container.statement_service.worker_statement(worker_id=site["samir"].worker_id)

    assert st.entries[0].earned == 0
    assert st.totals.total_work_days == 0


def test_statement_for_unknown_worker(container):
    with pytest.raises(NotFoundError):
        container.statement_service.worker_statement(worker_id=404)


def test_multi_project_breakdown_adds_up(container, worked):
    st = container.statement_service.worker_multi_project_statement(worker_id=worked["ahmad"].worker_id)

    by_name = {p.project_name: p.totals for p in st.projects}
    assert by_name["Tower A"].total_earned == Decimal("225.00")
    assert by_name["Tower A"].total_transferred == Decimal("50.00")
    assert by_name["Villa B"].remaining == 0
    assert sum(p.totals.remaining for p in st.projects) == st.totals.remaining


def test_settlement_lists_only_workers_with_activity(container, worked):
    report = container.statement_service.workers_settlement()

    assert [r.worker_name for r in report.rows] == ["Ahmad"]
    assert report.rows[0].final_balance == Decimal("75.00")
    assert report.totals.total_workers == 1


def test_settlement_skips_inactive_workers(container, repos, worked):
    idle = repos.workers.add("Zaid", is_active=False)
    container.attendance_service.record(
        {"project_id": worked["tower"].project_id, "worker_id": idle.worker_id, "date": "2025-03-03"}
    )

    report = container.statement_service.workers_settlement(project_ids=[worked["tower"].project_id])

    assert [r.worker_name for r in report.rows] == ["Ahmad"]
    assert report.rows[0].total_earned == Decimal("225.00")


def test_project_summary_separates_credit_purchases(container, site):
    tower = site["tower"].project_id
    container.fund_transfer_service.create(
        {"project_id": tower, "amount": "2000", "transfer_type": "owner", "transfer_date": "2025-03-01"}
    )
    base = {"project_id": tower, "material_name": "Sand", "material_unit": "m3", "quantity": "4", "unit_price": "50", "purchase_date": "2025-03-02"}
    container.purchase_service.create(base)
    container.purchase_service.create({**base, "purchase_type": "credit", "supplier_name": "Quarry"})

    report = container.statement_service.project_summary(project_id=tower)

    assert report.material_costs == Decimal("200.00")
    assert report.credit_purchases == Decimal("200.00")
    assert report.net_balance == Decimal("1800.00")


def test_expense_ledger_lines_and_categories(container, worked, day):
    tower = worked["tower"].project_id
    container.misc_expense_service.create(
        {"project_id": tower, "worker_id": worked["ahmad"].worker_id, "amount": "15", "description": "Gloves", "date": "2025-03-04"}
    )

    ledger = container.statement_service.expense_ledger(project_id=tower, date_from=day(1), date_to=day(31))

    assert [line.category for line in ledger.lines] == ["wages", "misc", "worker_transfers"]
    assert ledger.lines[0].description == "Wage paid (1 day)"
    assert ledger.lines[1].party == "Ahmad"
    assert ledger.total == Decimal("165.00")
    assert ledger.by_category()["wages"] == Decimal("100.00")


def test_ledgers_require_both_dates(container, site, day):
    with pytest.raises(ValidationError):
        container.statement_service.expense_ledger(project_id=site["tower"].project_id, date_from=day(1), date_to=None)


def test_income_ledger_includes_incoming_project_transfers(container, site, day):
    tower, villa = site["tower"].project_id, site["villa"].project_id
    container.fund_transfer_service.create(
        {"project_id": villa, "amount": "900", "transfer_type": "bank", "transfer_date": "2025-03-01", "transfer_number": "B-7"}
    )
    container.project_transfer_service.create(
        {"from_project_id": tower, "to_project_id": villa, "amount": "100", "transfer_date": "2025-03-02"}
    )

    ledger = container.statement_service.income_ledger(project_id=villa, date_from=day(1), date_to=day(31))

    assert [line.category for line in ledger.lines] == ["bank", "project_transfer"]
    assert ledger.lines[1].party == "Tower A"
    assert ledger.total == Decimal("1000.00")


@pytest.mark.parametrize(
    "work_days, expected",
    [("1.00", "1 day"), ("1.50", "1.5 days"), ("0.50", "0.5 days"), ("2.00", "2 days"), ("10.00", "10 days")],
)
def test_work_days_label(work_days, expected):
    assert work_days_label(Decimal(work_days)) == expected


def test_worker_balance_per_project(container, worked):
    ahmad = worked["ahmad"].worker_id

    tower = container.statement_service.worker_balance(worker_id=ahmad, project_id=worked["tower"].project_id)
    villa = container.statement_service.worker_balance(worker_id=ahmad, project_id=worked["villa"].project_id)

    assert (tower.total_earned, tower.total_paid, tower.total_transferred) == (
        Decimal("225.00"),
        Decimal("100.00"),
        Decimal("50.00"),
    )
    assert tower.current_balance == Decimal("75.00")
    assert villa.current_balance == 0


def test_worker_balance_for_unknown_project(container, site):
    with pytest.raises(NotFoundError):
        container.statement_service.worker_balance(worker_id=site["ahmad"].worker_id, project_id=99)


def test_material_purchases_report(container, site, day):
    tower = site["tower"].project_id
    base = {"project_id": tower, "material_name": "Sand", "material_unit": "m3", "quantity": "4", "unit_price": "50"}
    container.purchase_service.create({**base, "purchase_date": "2025-03-02"})
    container.purchase_service.create(
        {**base, "purchase_date": "2025-03-03", "purchase_type": "credit", "supplier_name": "Quarry", "paid_amount": "80"}
    )
    container.purchase_service.create({**base, "purchase_date": "2025-03-20"})

    report = container.statement_service.material_purchases(project_id=tower, date_from=day(1), date_to=day(10))

    assert [p.purchase_date for p in report.purchases] == [day(2), day(3)]
    assert report.cash_total == Decimal("200.00")
    assert report.credit_total == Decimal("200.00")
    assert report.total_amount == Decimal("400.00")
    assert report.paid_total == Decimal("280.00")
    assert report.remaining_total == Decimal("120.00")


def test_material_purchases_report_requires_dates(container, site, day):
    with pytest.raises(ValidationError):
        container.statement_service.material_purchases(project_id=site["tower"].project_id, date_from=None, date_to=day(3))
