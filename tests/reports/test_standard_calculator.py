from datetime import date
from decimal import Decimal

from src.site_ledger.site_ledger.attendance.model import WorkerAttendance
from src.site_ledger.site_ledger.core.enums import PaymentType
from src.site_ledger.site_ledger.reports.calculator.standard_calculator import StandardStatementCalculator


def _row(**overrides):
    data = dict(
        attendance_id=1,
        project_id=1,
        worker_id=1,
        work_date=date(2025, 1, 1),
        daily_wage=Decimal("120.00"),
        work_days=Decimal("1.5"),
        actual_wage=Decimal("180.00"),
        paid_amount=Decimal("0"),
        remaining_amount=Decimal("180.00"),
        payment_type=PaymentType.CREDIT,
    )
    data.update(overrides)
    return WorkerAttendance(**data)


def test_standard_calculator_uses_stored_wage():
    assert StandardStatementCalculator().earned(_row(actual_wage=Decimal("175.00"))) == Decimal("175.00")


def test_standard_calculator_falls_back_to_wage_times_days():
    assert StandardStatementCalculator().earned(_row(actual_wage=Decimal("0"))) == Decimal("180.00")


def test_standard_calculator_absent_is_zero():
    assert StandardStatementCalculator().earned(_row(is_present=False)) == 0


def test_remaining_subtracts_paid_and_transfers():
    calc = StandardStatementCalculator()
    assert calc.remaining(earned=Decimal("300"), paid=Decimal("100"), transferred=Decimal("50")) == Decimal("150")
