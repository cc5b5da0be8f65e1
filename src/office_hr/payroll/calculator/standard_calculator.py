from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...core.exceptions import ValidationError
from ..model import Allowances, Deductions, PayrollBreakdown
from ..rates import PayrollRates
from .base import PayrollCalculator

_CENTS = Decimal("0.01")


def _money(value: Decimal) -> Decimal:
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: basic pro-rated by attended days, allowances and
    deductions as fixed rates of the full basic salary."""

    def __init__(self, rates: PayrollRates | None = None):
        self._rates = rates or PayrollRates()

    @property
    def rates(self) -> PayrollRates:
        return self._rates

    def calculate(self, *, basic_salary: Decimal, total_days: int, working_days: int) -> PayrollBreakdown:
        if total_days <= 0:
            raise ValidationError("Total days must be positive")
        if not 0 <= working_days <= total_days:
            raise ValidationError("Working days must be between 0 and total days")
        if basic_salary < 0:
            raise ValidationError("Basic salary cannot be negative")

        r = self._rates
        basic = Decimal(basic_salary)
        earned_basic = _money(basic / Decimal(total_days) * Decimal(working_days))

        allowances = Allowances(
            transport=_money(basic * r.transport_rate),
            medical=_money(basic * r.medical_rate),
            bonus=_money(r.bonus_flat),
        )
        deductions = Deductions(
            tax=_money(basic * r.tax_rate),
            insurance=_money(basic * r.insurance_rate),
            other=_money(r.other_flat),
        )
        gross = earned_basic + allowances.total
        net = gross - deductions.total

        return PayrollBreakdown(
            basic_salary=earned_basic,
            allowances=allowances,
            deductions=deductions,
            total_days=int(total_days),
            working_days=int(working_days),
            gross_salary=gross,
            net_salary=net,
        )
