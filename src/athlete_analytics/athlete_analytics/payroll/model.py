from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..common.validators import parse_enum, require_non_empty, require_non_negative, to_decimal
from ..core.enums import DeductionType, PayPeriod
from ..core.exceptions import ConfigurationError

CENT = Decimal("0.01")


def round2(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class DeductionRule:
    """One payroll deduction. Rules apply in list order."""

    name: str
    type: DeductionType
    value: Decimal
    rule_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict, *, position: int = 0) -> "DeductionRule":
        value = to_decimal(data.get("value", 0), "deduction value")
        require_non_negative(value, "deduction value")
        return cls(
            name=require_non_empty(str(data.get("name") or ""), "deduction name"),
            type=parse_enum(DeductionType, data.get("type"), "deduction type"),
            value=value,
            rule_id=data.get("id") or f"ded_{position}",
        )


@dataclass(frozen=True)
class PayRate:
    """Hourly rate or fixed salary, never both."""

    hourly_rate: Optional[Decimal] = None
    salary_amount: Optional[Decimal] = None

    def __post_init__(self):
        if self.hourly_rate is not None and self.salary_amount is not None:
            raise ConfigurationError("hourly_rate and salary_amount are mutually exclusive")

    @property
    def configured(self) -> bool:
        return self.hourly_rate is not None or self.salary_amount is not None

    def with_hourly_rate(self, hourly_rate: Optional[Decimal]) -> "PayRate":
        return PayRate(hourly_rate=hourly_rate, salary_amount=None)

    def with_salary(self, salary_amount: Optional[Decimal]) -> "PayRate":
        return PayRate(hourly_rate=None, salary_amount=salary_amount)


@dataclass(frozen=True)
class AppliedDeduction:
    name: str
    type: DeductionType
    value: Decimal
    amount: Decimal


@dataclass(frozen=True)
class PayrollResult:
    """`net_pay=None` means pay is not configured, as opposed to zero earned."""

    gross_pay: Optional[Decimal]
    net_pay: Optional[Decimal]
    applied_deductions: tuple[AppliedDeduction, ...] = ()


@dataclass(frozen=True)
class PayrollConfig:
    """Organization payroll settings; `deductions` keeps the configured order."""

    pay_period: Optional[PayPeriod] = None
    default_hourly_rate: Optional[Decimal] = None
    deductions: tuple[DeductionRule, ...] = field(default_factory=tuple)

    def updated(
        self,
        *,
        pay_period: Optional[PayPeriod] = None,
        default_hourly_rate: Optional[Decimal] = None,
        deductions: Optional[Iterable[dict]] = None,
    ) -> "PayrollConfig":
        """Partial update; fields left as None keep their current value."""
        changes = {}
        if pay_period is not None:
            changes["pay_period"] = parse_enum(PayPeriod, pay_period, "pay period")
        if default_hourly_rate is not None:
            changes["default_hourly_rate"] = to_decimal(default_hourly_rate, "default hourly rate")
        if deductions is not None:
            changes["deductions"] = tuple(
                DeductionRule.from_dict(d, position=i) for i, d in enumerate(deductions)
            )
        return replace(self, **changes)
