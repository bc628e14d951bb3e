from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from src.athlete_analytics.athlete_analytics.attendance.model import CheckIn
from src.athlete_analytics.athlete_analytics.core.enums import CheckInStatus, OrgRole, TeamRole
from src.athlete_analytics.athlete_analytics.events.model import Event
from src.athlete_analytics.athlete_analytics.membership.model import MembershipPeriod
from src.athlete_analytics.athlete_analytics.payroll.model import PayrollConfig
from src.athlete_analytics.athlete_analytics.records.memory import InMemoryRecordSource
from src.athlete_analytics.athlete_analytics.seasons.model import Season
from src.athlete_analytics.athlete_analytics.teams.model import OrganizationMember, Team, TeamMember

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)
SEASON_2025 = Season(start_month=9, end_month=6, year=2025)


def make_event(event_id, day, *, team_id="t1", start="4:00 PM", end="6:00 PM", participating=(), ad_hoc=False):
    return Event(
        event_id=event_id,
        date=day,
        start_time=start,
        end_time=end,
        team_id=team_id,
        participating_team_ids=frozenset(participating),
        is_ad_hoc=ad_hoc,
        organization_id="o1",
        title=f"Practice {event_id}",
    )


def make_check_in(user_id, event_id, status=CheckInStatus.ON_TIME, hours=2.0, approved=True):
    return CheckIn(
        check_in_id=f"{user_id}-{event_id}",
        user_id=user_id,
        event_id=event_id,
        status=status,
        hours_logged=hours,
        approved=approved,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def records() -> InMemoryRecordSource:
    """Organization o1 in the middle of its Sep 2025 - Jun 2026 season."""
    return InMemoryRecordSource(
        teams=[
            Team(team_id="t1", organization_id="o1", name="Varsity", season=SEASON_2025),
            Team(team_id="t2", organization_id="o1", name="JV", season=SEASON_2025),
            Team(team_id="t3", organization_id="o1", name="Alumni", season=Season(9, 6, 2024)),
        ],
        team_members=[
            TeamMember(user_id="u1", team_id="t1", role=TeamRole.MEMBER, hours_required=10),
            TeamMember(user_id="u2", team_id="t1", role=TeamRole.CAPTAIN, hours_required=10),
            TeamMember(user_id="c1", team_id="t1", role=TeamRole.COACH),
            TeamMember(user_id="u1", team_id="t2", role=TeamRole.MEMBER, hours_required=4),
            TeamMember(user_id="u3", team_id="t2", role=TeamRole.MEMBER, hours_required=4),
            TeamMember(user_id="u4", team_id="t3", role=TeamRole.MEMBER, hours_required=4),
        ],
        history={
            ("u2", "t1"): [MembershipPeriod(joined_at=datetime(2026, 3, 5, tzinfo=timezone.utc))],
        },
        events=[
            make_event("e1", date(2026, 3, 2)),
            make_event("e2", date(2026, 3, 9)),
            make_event("e3", date(2026, 3, 10), team_id="t2", participating=["t1"]),
            make_event("e4", date(2026, 3, 20)),
            make_event("e5", date(2026, 3, 11), ad_hoc=True),
        ],
        check_ins=[
            make_check_in("u1", "e1", CheckInStatus.ON_TIME, 2.0),
            make_check_in("u1", "e2", CheckInStatus.LATE, 1.5),
            make_check_in("u1", "e3", CheckInStatus.ON_TIME, 2.0),
            make_check_in("u1", "e5", CheckInStatus.ON_TIME, 1.0),
            make_check_in("u2", "e1", CheckInStatus.ABSENT, 0.0),
            make_check_in("u2", "e2", CheckInStatus.ON_TIME, 2.0),
            make_check_in("u3", "e3", CheckInStatus.ABSENT, 0.0),
            make_check_in("c1", "e1", CheckInStatus.ON_TIME, 2.0),
        ],
        organization_members=[
            OrganizationMember(user_id="c1", organization_id="o1", role=OrgRole.COACH, hourly_rate=Decimal("30"), name="Coach"),
            OrganizationMember(user_id="u1", organization_id="o1", role=OrgRole.ATHLETE, name="Athlete One"),
        ],
        payroll_configs={
            "o1": PayrollConfig().updated(
                deductions=[
                    {"name": "Tax", "type": "PERCENT", "value": 10},
                    {"name": "Fee", "type": "FLAT", "value": 5},
                ]
            )
        },
    )
