from decimal import Decimal

import pytest

from src.site_ledger.site_ledger.core.enums import PurchaseType
from src.site_ledger.site_ledger.core.exceptions import NotFoundError, ValidationError
from src.site_ledger.site_ledger.purchases.service import parse_purchase_type


def _data(project_id, **overrides):
    data = {
        "project_id": project_id,
        "material_name": "Steel rebar",
        "material_unit": "ton",
        "quantity": "2.5",
        "unit_price": "3000",
        "purchase_type": "cash",
        "purchase_date": "2025-03-03",
    }
    data.update(overrides)
    return data


def test_cash_purchase_is_fully_paid(container, site):
    p = container.purchase_service.create(_data(site["tower"].project_id))

    assert p.total_amount == Decimal("7500.00")
    assert p.paid_amount == p.total_amount
    assert p.remaining_amount == 0
    assert p.material_name == "Steel rebar"


def test_credit_purchase_keeps_down_payment_and_debt(container, site):
    p = container.purchase_service.create(
        _data(site["tower"].project_id, purchase_type="credit", paid_amount="1000", supplier_name="Haddad Steel")
    )

    assert p.purchase_type == PurchaseType.CREDIT
    assert p.paid_amount == Decimal("1000.00")
    assert p.remaining_amount == Decimal("6500.00")


def test_credit_purchase_needs_supplier(container, site):
    with pytest.raises(ValidationError):
        container.purchase_service.create(_data(site["tower"].project_id, purchase_type="credit"))


def test_down_payment_above_total_is_rejected(container, site):
    with pytest.raises(ValidationError):
        container.purchase_service.create(
            _data(site["tower"].project_id, purchase_type="credit", paid_amount="8000", supplier_name="X")
        )


@pytest.mark.parametrize("raw, expected", [("نقد", PurchaseType.CASH), ("آجل", PurchaseType.CREDIT), ("Credit", PurchaseType.CREDIT)])
def test_purchase_type_accepts_arabic_spellings(raw, expected):
    assert parse_purchase_type(raw) == expected


def test_unknown_purchase_type_is_invalid():
    with pytest.raises(ValidationError):
        parse_purchase_type("barter")


def test_materials_are_reused_by_name_and_unit(container, site):
    project_id = site["tower"].project_id
    first = container.purchase_service.create(_data(project_id))
    second = container.purchase_service.create(_data(project_id, purchase_date="2025-03-04"))
    third = container.purchase_service.create(_data(project_id, material_unit="kg"))

    assert first.material_id == second.material_id
    assert third.material_id != first.material_id
    assert len(container.purchase_service.list_materials()) == 2


def test_unknown_supplier_id_is_not_found(container, site):
    with pytest.raises(NotFoundError):
        container.purchase_service.create(_data(site["tower"].project_id, supplier_id=77))


def test_update_to_credit_moves_cost_out_of_summary(container, repos, site, day):
    project_id = site["tower"].project_id
    p = container.purchase_service.create(_data(project_id))

    container.purchase_service.update(p.purchase_id, {"purchase_type": "credit", "paid_amount": "0", "supplier_name": "Haddad"})

    assert repos.summaries.get(project_id=project_id, summary_date=day(3)).total_material_costs == 0


def test_switch_to_credit_without_down_payment_owes_everything(container, site):
    p = container.purchase_service.create(_data(site["tower"].project_id))

    updated = container.purchase_service.update(p.purchase_id, {"purchase_type": "credit", "supplier_name": "Haddad"})

    assert updated.paid_amount == 0
    assert updated.remaining_amount == Decimal("7500.00")


def test_switch_to_credit_keeps_given_down_payment(container, site):
    p = container.purchase_service.create(_data(site["tower"].project_id))

    updated = container.purchase_service.update(
        p.purchase_id, {"purchase_type": "credit", "supplier_name": "Haddad", "paid_amount": "1500"}
    )

    assert updated.paid_amount == Decimal("1500.00")
    assert updated.remaining_amount == Decimal("6000.00")


def test_purchase_update_rejects_unknown_fields(container, site):
    p = container.purchase_service.create(_data(site["tower"].project_id))

    with pytest.raises(ValidationError, match="Unknown fields: total_amount"):
        container.purchase_service.update(p.purchase_id, {"total_amount": "10"})
