from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import CheckInStatus
from ..events.model import Event
from ..membership.model import MembershipPeriod
from ..seasons.model import Season


@dataclass(frozen=True)
class CheckIn:
    """A user's attendance record for one event.

    `hours_logged` is authoritative; it is never recomputed from the times.
    """

    check_in_id: str
    user_id: str
    event_id: str
    status: CheckInStatus
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    hours_logged: float = 0.0
    approved: bool = True


@dataclass(frozen=True)
class HoursAggregate:
    """Derived per query, never stored."""

    hours_required: float
    hours_logged: float
    attendance_percent: float


@dataclass(frozen=True)
class TeamScope:
    """One team's inputs for an org-wide aggregation."""

    team_id: str
    season: Optional[Season]
    periods: Sequence[MembershipPeriod]
    events: Sequence[Event]


@dataclass(frozen=True)
class Streaks:
    current_streak: int
    best_streak: int


@dataclass(frozen=True)
class AttendanceInsights:
    total_expected: int
    on_time_count: int
    late_count: int
    absent_count: int
    excused_count: int
    attendance_rate: float
    event_count: int


@dataclass(frozen=True)
class WeeklyTrend:
    week_start: date
    hours_required: float
    hours_logged: float
    events_count: int
    attendance_percent: float


@dataclass(frozen=True)
class UserStats:
    hours_logged: float = 0.0
    hours_required: float = 0.0
    attendance_percent: float = 0.0
    team_rank: int = 0
    team_size: int = 0
    org_rank: int = 0
    org_size: int = 0
    current_streak: int = 0
    best_streak: int = 0
