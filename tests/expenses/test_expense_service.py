import pytest

from src.site_ledger.site_ledger.core.exceptions import NotFoundError, ValidationError


def test_misc_expense_with_unknown_worker(container, site):
    with pytest.raises(NotFoundError):
        container.misc_expense_service.create(
            {"project_id": site["tower"].project_id, "worker_id": 55, "amount": "5", "description": "Tea", "date": "2025-03-03"}
        )


def test_expense_description_required(container, site):
    with pytest.raises(ValidationError):
        container.transportation_service.create(
            {"project_id": site["tower"].project_id, "amount": "5", "description": " ", "date": "2025-03-03"}
        )


def test_expense_update_moves_day(container, repos, site, day):
    expense = container.transportation_service.create(
        {"project_id": site["tower"].project_id, "amount": "60", "description": "Crane", "date": "2025-03-03"}
    )

    container.transportation_service.update(expense.expense_id, {"date": "2025-03-04"})

    tower = site["tower"].project_id
    assert repos.summaries.get(project_id=tower, summary_date=day(3)).total_transportation_costs == 0
    assert repos.summaries.get(project_id=tower, summary_date=day(4)).total_transportation_costs == 60


def test_expense_update_rejects_model_field_names(container, site):
    expense = container.transportation_service.create(
        {"project_id": site["tower"].project_id, "amount": "60", "description": "Crane", "date": "2025-03-03"}
    )

    with pytest.raises(ValidationError, match="Unknown fields: expense_date"):
        container.transportation_service.update(expense.expense_id, {"expense_date": "2025-03-04"})
