"""Hours aggregation: required vs logged hours for one user.

The season window is capped at `now`, so events that have not happened yet
never raise the requirement. Events are compared as noon-UTC instants of
their calendar day.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import as_utc, at_noon_utc
from ..common.validators import require_non_negative
from ..core.constants import MAX_PERCENT
from ..events.duration import compute_event_duration
from ..events.model import Event
from ..membership.filter import filter_events_by_membership
from ..membership.model import MembershipPeriod
from ..seasons.model import Season, SeasonRange
from ..seasons.resolver import season_window
from .model import CheckIn, HoursAggregate, TeamScope

logger = logging.getLogger(__name__)


def attendance_percent(hours_logged: float, hours_required: float) -> float:
    if hours_required <= 0:
        return 0.0
    return min(MAX_PERCENT, hours_logged / hours_required * 100)


def required_window(season: Optional[Season], now: datetime) -> SeasonRange:
    return season_window(season, now).capped_at(as_utc(now))


def team_events_in_window(events: Iterable[Event], team_id: str, window: SeasonRange) -> list[Event]:
    """Scheduled (non ad-hoc) events of the team, directly or as a participant, inside the window."""
    return [
        e
        for e in events
        if not e.is_ad_hoc and e.involves_team(team_id) and window.contains(at_noon_utc(e.date))
    ]


def member_events(
    team_id: str,
    season: Optional[Season],
    periods: Sequence[MembershipPeriod],
    events: Iterable[Event],
    now: datetime,
) -> list[Event]:
    window = required_window(season, now)
    return filter_events_by_membership(team_events_in_window(events, team_id, window), periods)


def logged_hours(user_id: str, event_ids: set[str], check_ins: Iterable[CheckIn]) -> float:
    total = 0.0
    for c in check_ins:
        if c.user_id != user_id or not c.approved or c.event_id not in event_ids:
            continue
        total += require_non_negative(c.hours_logged or 0.0, "hours_logged")
    return total


def aggregate_hours(
    user_id: str,
    team_id: str,
    season: Optional[Season],
    periods: Sequence[MembershipPeriod],
    events: Iterable[Event],
    check_ins: Iterable[CheckIn],
    now: datetime,
) -> HoursAggregate:
    """Required hours, logged hours and attendance percent for one user on one team.

    `periods` must already hold the caller's fallback for missing history
    (see `periods_or_full_season`); a missing season falls back to all time.
    """
    counted = member_events(team_id, season, periods, events, now)
    hours_required = sum(compute_event_duration(e.start_time, e.end_time) for e in counted)
    hours_logged = logged_hours(user_id, {e.event_id for e in counted}, check_ins)
    return HoursAggregate(
        hours_required=hours_required,
        hours_logged=hours_logged,
        attendance_percent=attendance_percent(hours_logged, hours_required),
    )


def aggregate_org_hours(
    user_id: str,
    scopes: Iterable[TeamScope],
    check_ins: Iterable[CheckIn],
    now: datetime,
) -> HoursAggregate:
    """Org-wide totals across every team the user belongs to.

    An event reachable through several teams counts once.
    """
    counted: dict[str, Event] = {}
    for scope in scopes:
        for e in member_events(scope.team_id, scope.season, scope.periods, scope.events, now):
            if e.event_id in counted:
                logger.debug("Event %s already counted through another team", e.event_id)
                continue
            counted[e.event_id] = e

    hours_required = sum(compute_event_duration(e.start_time, e.end_time) for e in counted.values())
    hours_logged = logged_hours(user_id, set(counted), check_ins)
    return HoursAggregate(
        hours_required=hours_required,
        hours_logged=hours_logged,
        attendance_percent=attendance_percent(hours_logged, hours_required),
    )
