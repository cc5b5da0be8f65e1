from decimal import Decimal

import pytest

from office_hr.core.exceptions import ValidationError
from office_hr.payroll.calculator.standard_calculator import StandardPayrollCalculator
from office_hr.payroll.rates import PayrollRates


def test_standard_calculator_prorates_basic_and_applies_rates():
    calc = StandardPayrollCalculator()
    b = calc.calculate(basic_salary=Decimal("30000"), total_days=30, working_days=25)

    assert b.basic_salary == Decimal("25000")
    assert b.allowances.transport == Decimal("3000")
    assert b.allowances.medical == Decimal("1500")
    assert b.allowances.bonus == Decimal("0")
    assert b.deductions.tax == Decimal("600")
    assert b.deductions.insurance == Decimal("300")
    assert b.deductions.other == Decimal("0")
    assert b.gross_salary == Decimal("29500")
    assert b.net_salary == Decimal("28600")


def test_zero_attendance_still_gets_allowances():
    b = StandardPayrollCalculator().calculate(basic_salary=Decimal("31000"), total_days=31, working_days=0)

    assert b.basic_salary == Decimal("0")
    assert b.gross_salary == Decimal("4650")
    assert b.net_salary == Decimal("3720")


def test_money_is_rounded_to_cents():
    b = StandardPayrollCalculator().calculate(basic_salary=Decimal("10000"), total_days=31, working_days=10)

    assert b.basic_salary == Decimal("3225.81")
    assert b.basic_salary.as_tuple().exponent == -2


def test_custom_rates_from_configuration():
    rates = PayrollRates.from_mapping({"transport_rate": "0.2", "bonus_flat": "500", "other_flat": 100})
    b = StandardPayrollCalculator(rates).calculate(basic_salary=Decimal("1000"), total_days=30, working_days=30)

    assert b.allowances.transport == Decimal("200")
    assert b.allowances.bonus == Decimal("500")
    assert b.deductions.other == Decimal("100")
    assert b.gross_salary == Decimal("1750")
    assert b.net_salary == Decimal("1620")


def test_unknown_rate_name_is_rejected():
    with pytest.raises(ValueError):
        PayrollRates.from_mapping({"pension_rate": "0.05"})


@pytest.mark.parametrize("total_days, working_days", [(0, 0), (30, 31), (30, -1)])
def test_invalid_day_counts(total_days, working_days):
    with pytest.raises(ValidationError):
        StandardPayrollCalculator().calculate(basic_salary=Decimal("1000"), total_days=total_days, working_days=working_days)
