from __future__ import annotations

from enum import Enum


class CheckInStatus(str, Enum):
    """Attendance status recorded on a check-in."""

    ON_TIME = "ON_TIME"
    LATE = "LATE"
    ABSENT = "ABSENT"
    EXCUSED = "EXCUSED"

    @property
    def attended(self) -> bool:
        return self in (CheckInStatus.ON_TIME, CheckInStatus.LATE)


class TeamRole(str, Enum):
    OWNER = "OWNER"
    MANAGER = "MANAGER"
    COACH = "COACH"
    CAPTAIN = "CAPTAIN"
    MEMBER = "MEMBER"


class OrgRole(str, Enum):
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    COACH = "COACH"
    ATHLETE = "ATHLETE"
    GUARDIAN = "GUARDIAN"


class Frequency(str, Enum):
    """Recurrence frequency for generated schedules."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"


class DeductionType(str, Enum):
    FLAT = "FLAT"
    PERCENT = "PERCENT"


class TimeRange(str, Enum):
    WEEK = "WEEK"
    MONTH = "MONTH"
    ALL = "ALL"


class PayPeriod(str, Enum):
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"


# Roles that count as athletes for attendance analytics.
ATHLETE_ROLES = frozenset({TeamRole.MEMBER, TeamRole.CAPTAIN})

# Organization roles that are paid through payroll.
STAFF_ROLES = frozenset({OrgRole.OWNER, OrgRole.ADMIN, OrgRole.MANAGER, OrgRole.COACH})
