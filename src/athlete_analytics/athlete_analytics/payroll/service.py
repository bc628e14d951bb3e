from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..attendance.model import CheckIn
from ..common.datetime_utils import at_noon_utc, month_bounds
from ..common.validators import require_month, require_year
from ..core.enums import STAFF_ROLES
from ..core.exceptions import NotFoundError
from ..events.model import Event
from ..records.repository import RecordSource
from ..teams.model import OrganizationMember
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import AppliedDeduction, PayRate, round2

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StaffHoursEntry:
    event: Event
    check_in: CheckIn
    hours_logged: float


@dataclass(frozen=True)
class StaffPayrollRow:
    user_id: str
    name: str
    total_hours: Decimal
    hourly_rate: Optional[Decimal]
    salary_amount: Optional[Decimal]
    gross_pay: Optional[Decimal]
    net_pay: Optional[Decimal]
    applied_deductions: tuple[AppliedDeduction, ...]
    entries: tuple[StaffHoursEntry, ...]


@dataclass(frozen=True)
class StaffPayrollReport:
    organization_id: str
    month: int
    year: int
    rows: list[StaffPayrollRow]


class PayrollReportService:
    """Use case: monthly hours and pay for an organization's staff."""

    def __init__(self, records: RecordSource, *, calculator: Optional[PayrollCalculator] = None):
        self._records = records
        self._calculator = calculator or StandardPayrollCalculator()

    def _worked_entries(self, *, user_id: str, organization_id: str, month: int, year: int) -> list[StaffHoursEntry]:
        start, end = month_bounds(require_year(year), require_month(month))
        events = {
            e.event_id: e
            for e in self._records.list_events(organization_id=organization_id)
            if start <= at_noon_utc(e.date) < end
        }
        entries = [
            StaffHoursEntry(event=events[c.event_id], check_in=c, hours_logged=c.hours_logged or 0.0)
            for c in self._records.list_check_ins(user_id=user_id, event_ids=events)
            if c.status.attended
        ]
        entries.sort(key=lambda x: x.event.date)
        return entries

    def _row(self, member: OrganizationMember, *, month: int, year: int) -> StaffPayrollRow:
        entries = self._worked_entries(
            user_id=member.user_id, organization_id=member.organization_id, month=month, year=year
        )
        total_hours = round2(sum((Decimal(str(x.hours_logged)) for x in entries), Decimal("0")))
        rate = PayRate(hourly_rate=member.hourly_rate, salary_amount=member.salary_amount)
        deductions = self._records.get_payroll_config(member.organization_id).deductions
        result = self._calculator.compute(total_hours, rate, deductions)

        return StaffPayrollRow(
            user_id=member.user_id,
            name=member.name,
            total_hours=total_hours,
            hourly_rate=member.hourly_rate,
            salary_amount=member.salary_amount,
            gross_pay=result.gross_pay,
            net_pay=result.net_pay,
            applied_deductions=result.applied_deductions,
            entries=tuple(entries),
        )

    def staff_hours(self, *, organization_id: str, user_id: str, month: int, year: int) -> StaffPayrollRow:
        member = next(
            (m for m in self._records.list_organization_members(organization_id) if m.user_id == user_id),
            None,
        )
        if member is None:
            raise NotFoundError(f"User {user_id} is not a member of organization {organization_id}")
        return self._row(member, month=month, year=year)

    def build_staff_report(self, *, organization_id: str, month: int, year: int) -> StaffPayrollReport:
        month = require_month(month)
        year = require_year(year)
        staff = [m for m in self._records.list_organization_members(organization_id) if m.role in STAFF_ROLES]
        rows = [self._row(m, month=month, year=year) for m in staff]
        logger.info("Built payroll report for %s %04d-%02d: %d staff", organization_id, year, month, len(rows))
        return StaffPayrollReport(organization_id=organization_id, month=month, year=year, rows=rows)
