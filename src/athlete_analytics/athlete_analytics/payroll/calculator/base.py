from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Sequence

from ..model import DeductionRule, PayRate, PayrollResult


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, hours_total: float | Decimal, rate: PayRate, deductions: Sequence[DeductionRule]) -> PayrollResult:
        raise NotImplementedError
