from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ...common.validators import require_non_negative, to_decimal
from ...core.enums import DeductionType
from ..model import AppliedDeduction, DeductionRule, PayRate, PayrollResult, round2
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: salary, else hours x rate; deductions in order.

    Percentage deductions apply to the running net, so order matters. Every
    step is rounded to cents.
    """

    def gross_pay(self, hours_total: float | Decimal, rate: PayRate) -> Optional[Decimal]:
        if rate.salary_amount is not None:
            return round2(to_decimal(rate.salary_amount, "salary_amount"))
        if rate.hourly_rate is not None:
            hours = require_non_negative(to_decimal(hours_total, "hours_total"), "hours_total")
            return round2(hours * to_decimal(rate.hourly_rate, "hourly_rate"))
        return None

    def compute(self, hours_total: float | Decimal, rate: PayRate, deductions: Sequence[DeductionRule]) -> PayrollResult:
        gross = self.gross_pay(hours_total, rate)
        if not gross:
            return PayrollResult(gross_pay=gross, net_pay=None)

        net = gross
        applied = []
        for rule in deductions:
            value = to_decimal(rule.value, "deduction value")
            if rule.type == DeductionType.FLAT:
                amount = round2(value)
            else:
                amount = round2(net * value / 100)
            net = round2(net - amount)
            applied.append(AppliedDeduction(name=rule.name, type=rule.type, value=rule.value, amount=amount))

        return PayrollResult(gross_pay=gross, net_pay=net, applied_deductions=tuple(applied))


def compute_payroll(
    hours_total: float | Decimal,
    rate: PayRate,
    deductions: Sequence[DeductionRule] = (),
    *,
    calculator: Optional[PayrollCalculator] = None,
) -> PayrollResult:
    return (calculator or StandardPayrollCalculator()).compute(hours_total, rate, deductions)
