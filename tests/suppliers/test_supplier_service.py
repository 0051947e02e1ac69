from decimal import Decimal

import pytest

from src.site_ledger.site_ledger.core.enums import PurchaseType
from src.site_ledger.site_ledger.core.exceptions import ConflictError, ValidationError


@pytest.fixture
def supplier(container):
    return container.supplier_service.create_supplier({"name": "Haddad Steel", "phone": "0599000000"})


def _purchase(container, project_id, supplier, **overrides):
    data = {
        "project_id": project_id,
        "material_name": "Steel rebar",
        "material_unit": "ton",
        "quantity": "1",
        "unit_price": "1000",
        "purchase_type": "credit",
        "purchase_date": "2025-03-03",
        "supplier_id": supplier.supplier_id,
    }
    data.update(overrides)
    return container.purchase_service.create(data)


def test_supplier_names_are_unique(container, supplier):
    with pytest.raises(ConflictError):
        container.supplier_service.create_supplier({"name": "Haddad Steel"})


def test_statement_debt_comes_from_credit_purchases_only(container, site, supplier):
    tower = site["tower"].project_id
    _purchase(container, tower, supplier, paid_amount="200")
    _purchase(container, tower, supplier, purchase_type="cash", unit_price="400")
    container.supplier_service.create_payment(
        {"supplier_id": supplier.supplier_id, "amount": "300", "payment_date": "2025-03-05"}
    )

    st = container.supplier_service.statement(supplier.supplier_id)

    assert st.cash_purchases.total == Decimal("400.00")
    assert st.credit_purchases.count == 1
    assert st.total_purchases == Decimal("1400.00")
    assert st.total_debt == Decimal("1000.00")
    assert st.total_paid == Decimal("500.00")
    assert st.remaining_debt == Decimal("500.00")


def test_statement_matches_purchases_recorded_by_name(container, site, supplier):
    _purchase(container, site["tower"].project_id, supplier, supplier_id=None, supplier_name="Haddad Steel")

    st = container.supplier_service.statement(supplier.supplier_id)

    assert st.total_debt == Decimal("1000.00")


def test_statement_respects_date_range(container, site, supplier, day):
    tower = site["tower"].project_id
    _purchase(container, tower, supplier)
    _purchase(container, tower, supplier, purchase_date="2025-03-20")

    st = container.supplier_service.statement(supplier.supplier_id, date_from=day(10), date_to=day(31))

    assert st.credit_purchases.count == 1


def test_statistics_over_all_suppliers(container, site, supplier):
    other = container.supplier_service.create_supplier({"name": "Nablus Cement"})
    tower = site["tower"].project_id
    _purchase(container, tower, supplier)
    _purchase(container, tower, other, purchase_type="cash", unit_price="250")

    stats = container.supplier_service.statistics()
    credit_only = container.supplier_service.statistics(purchase_type=PurchaseType.CREDIT)

    assert stats.total_suppliers == 2
    assert stats.active_suppliers == 2
    assert stats.total_cash_purchases == Decimal("250.00")
    assert stats.total_credit_purchases == Decimal("1000.00")
    assert stats.remaining_debt == Decimal("1000.00")
    assert credit_only.total_cash_purchases == 0


def test_statistics_count_a_supplier_once_by_id_or_name(container, site, supplier):
    tower = site["tower"].project_id
    _purchase(container, tower, supplier)
    _purchase(container, tower, supplier, supplier_id=None, supplier_name="Haddad Steel")

    stats = container.supplier_service.statistics()

    assert stats.active_suppliers == 1
    assert stats.total_debt == Decimal("2000.00")


def test_cash_only_statistics_leave_out_debt_payments(container, site, supplier):
    tower = site["tower"].project_id
    _purchase(container, tower, supplier)
    _purchase(container, tower, supplier, purchase_type="cash", unit_price="400")
    container.supplier_service.create_payment(
        {"supplier_id": supplier.supplier_id, "amount": "300", "payment_date": "2025-03-05"}
    )

    cash_only = container.supplier_service.statistics(purchase_type=PurchaseType.CASH)
    credit_only = container.supplier_service.statistics(purchase_type=PurchaseType.CREDIT)

    assert (cash_only.total_paid, cash_only.remaining_debt) == (0, 0)
    assert cash_only.total_cash_purchases == Decimal("400.00")
    assert credit_only.total_paid == Decimal("300.00")
    assert credit_only.remaining_debt == Decimal("700.00")


def test_supplier_and_payment_updates_reject_unknown_fields(container, supplier):
    payment = container.supplier_service.create_payment(
        {"supplier_id": supplier.supplier_id, "amount": "300", "payment_date": "2025-03-05"}
    )

    with pytest.raises(ValidationError, match="Unknown fields: mobile"):
        container.supplier_service.update_supplier(supplier.supplier_id, {"mobile": "0599111111"})
    with pytest.raises(ValidationError, match="Unknown fields: date"):
        container.supplier_service.update_payment(payment.payment_id, {"date": "2025-03-06"})

    assert container.supplier_service.get_supplier(supplier.supplier_id).phone == "0599000000"
