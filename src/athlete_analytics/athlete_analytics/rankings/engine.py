"""Leaderboards and team rankings.

Ranks are ordinal: equal percentages get consecutive ranks in input order.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence, TypeVar

from ..attendance.hours import aggregate_hours, attendance_percent
from ..attendance.model import CheckIn
from ..common.datetime_utils import at_noon_utc
from ..core.enums import ATHLETE_ROLES
from ..events.model import Event
from ..membership.filter import periods_or_full_season
from ..membership.model import MembershipPeriod
from ..seasons.resolver import is_in_current_season, season_window
from ..teams.model import Team, TeamMember
from .model import LeaderboardEntry, TeamRanking

R = TypeVar("R", LeaderboardEntry, TeamRanking)

History = Mapping[tuple, Sequence[MembershipPeriod]]


def rank_entries(entries: Iterable[R], limit: Optional[int] = None) -> list[R]:
    """Stable sort by attendance percent (descending) and assign 1-based ranks."""
    ordered = sorted(entries, key=lambda e: e.attendance_percent, reverse=True)
    if limit is not None:
        ordered = ordered[:limit]
    return [replace(entry, rank=index + 1) for index, entry in enumerate(ordered)]


def _member_entry(
    user_id: str,
    team: Team,
    history: History,
    events: Sequence[Event],
    check_ins: Sequence[CheckIn],
    now: datetime,
):
    periods = periods_or_full_season(history.get((user_id, team.team_id), ()), season_window(team.season, now))
    return aggregate_hours(user_id, team.team_id, team.season, periods, events, check_ins, now)


def team_leaderboard(
    team: Team,
    members: Iterable[TeamMember],
    history: History,
    events: Sequence[Event],
    check_ins: Sequence[CheckIn],
    now: datetime,
    limit: Optional[int] = None,
) -> list[LeaderboardEntry]:
    entries = []
    for m in members:
        if m.team_id != team.team_id or m.role not in ATHLETE_ROLES:
            continue
        agg = _member_entry(m.user_id, team, history, events, check_ins, now)
        entries.append(
            LeaderboardEntry(
                user_id=m.user_id,
                hours_logged=agg.hours_logged,
                hours_required=agg.hours_required,
                attendance_percent=agg.attendance_percent,
            )
        )
    return rank_entries(entries, limit)


def organization_leaderboard(
    teams: Iterable[Team],
    members: Iterable[TeamMember],
    history: History,
    events: Sequence[Event],
    check_ins: Sequence[CheckIn],
    now: datetime,
    limit: Optional[int] = None,
) -> list[LeaderboardEntry]:
    """One entry per athlete across the current-season teams.

    Per-team percentages are averaged over the teams that required any hours;
    hours are summed.
    """
    current = {t.team_id: t for t in teams if not t.archived and is_in_current_season(t.season, now)}

    teams_by_user: dict[str, list[Team]] = {}
    for m in members:
        if m.role in ATHLETE_ROLES and m.team_id in current:
            user_teams = teams_by_user.setdefault(m.user_id, [])
            if current[m.team_id] not in user_teams:
                user_teams.append(current[m.team_id])

    entries = []
    for user_id, user_teams in teams_by_user.items():
        total_logged = total_required = 0.0
        percents = []
        for team in user_teams:
            agg = _member_entry(user_id, team, history, events, check_ins, now)
            total_logged += agg.hours_logged
            total_required += agg.hours_required
            if agg.hours_required > 0:
                percents.append(agg.attendance_percent)

        entries.append(
            LeaderboardEntry(
                user_id=user_id,
                hours_logged=total_logged,
                hours_required=total_required,
                attendance_percent=sum(percents) / len(percents) if percents else 0.0,
            )
        )
    return rank_entries(entries, limit)


def team_rankings(
    teams: Iterable[Team],
    members: Iterable[TeamMember],
    events: Sequence[Event],
    check_ins: Sequence[CheckIn],
    now: datetime,
) -> list[TeamRanking]:
    """Team-vs-team ranking of current-season teams.

    Uses the stored per-member `hours_required` rather than recomputing it.
    """
    members = list(members)
    rankings = []
    for team in teams:
        if team.archived or not is_in_current_season(team.season, now):
            continue

        athletes = [m for m in members if m.team_id == team.team_id and m.role in ATHLETE_ROLES]
        athlete_ids = {m.user_id for m in athletes}
        window = season_window(team.season, now)
        own_events = {e.event_id for e in events if e.team_id == team.team_id and window.contains(at_noon_utc(e.date))}

        logged = sum(
            c.hours_logged or 0.0
            for c in check_ins
            if c.approved and c.user_id in athlete_ids and c.event_id in own_events
        )
        required = sum(m.hours_required for m in athletes)
        rankings.append(
            TeamRanking(team_id=team.team_id, name=team.name, attendance_percent=attendance_percent(logged, required))
        )
    return rank_entries(rankings)
