"""Analytics use cases over a RecordSource.

This is where the fallbacks for missing data are chosen: teams without a
season use all time, members without recorded history count as members for
the whole season.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.athletes import non_athlete_team_map
from ..attendance.hours import aggregate_hours, aggregate_org_hours, required_window
from ..attendance.insights import attendance_insights, calendar_year_window, scope_events, weekly_trends
from ..attendance.model import AttendanceInsights, TeamScope, UserStats, WeeklyTrend
from ..attendance.streaks import compute_streaks
from ..core.constants import DEFAULT_LEADERBOARD_LIMIT
from ..core.enums import ATHLETE_ROLES
from ..core.exceptions import NotFoundError
from ..gamification.badges import BadgeProgress, badge_stats, evaluate_badges
from ..membership.filter import periods_or_full_season
from ..rankings.engine import organization_leaderboard, team_leaderboard, team_rankings
from ..rankings.model import LeaderboardEntry, TeamRanking
from ..records.repository import RecordSource
from ..seasons.resolver import is_in_current_season, season_window
from ..teams.model import Team, TeamMember

logger = logging.getLogger(__name__)


class AnalyticsService:
    def __init__(self, records: RecordSource, *, leaderboard_limit: int = DEFAULT_LEADERBOARD_LIMIT):
        self._records = records
        self._limit = int(leaderboard_limit)

    def _team(self, team_id: str) -> Team:
        team = self._records.get_team(team_id)
        if team is None:
            raise NotFoundError(f"Team {team_id} not found")
        return team

    def _history(self, members: Sequence[TeamMember]) -> dict:
        return {
            (m.user_id, m.team_id): self._records.list_membership_history(user_id=m.user_id, team_id=m.team_id)
            for m in members
        }

    def _periods(self, user_id: str, team: Team, now: datetime):
        history = self._records.list_membership_history(user_id=user_id, team_id=team.team_id)
        return periods_or_full_season(history, season_window(team.season, now))

    # ------------------------------------------------------------------
    # Leaderboards
    # ------------------------------------------------------------------

    def _board_limit(self, limit: Optional[int]) -> int:
        return self._limit if limit is None else limit

    def team_leaderboard(self, team_id: str, *, now: datetime, limit: Optional[int] = None) -> list[LeaderboardEntry]:
        return self._team_board(team_id, now, self._board_limit(limit))

    def _team_board(self, team_id: str, now: datetime, limit: Optional[int]) -> list[LeaderboardEntry]:
        team = self._team(team_id)
        members = self._records.list_team_members(team_id=team_id)
        events = self._records.list_events(team_id=team_id)
        check_ins = self._records.list_check_ins(event_ids=[e.event_id for e in events])
        return team_leaderboard(team, members, self._history(members), events, check_ins, now, limit)

    def organization_leaderboard(
        self, organization_id: str, *, now: datetime, limit: Optional[int] = None
    ) -> list[LeaderboardEntry]:
        return self._org_board(organization_id, now, self._board_limit(limit))

    def _org_board(self, organization_id: str, now: datetime, limit: Optional[int]) -> list[LeaderboardEntry]:
        teams = self._records.list_teams(organization_id)
        members = [m for m in self._records.list_team_members(organization_id=organization_id) if m.role in ATHLETE_ROLES]
        events = self._records.list_events(organization_id=organization_id)
        check_ins = self._records.list_check_ins(event_ids=[e.event_id for e in events])
        return organization_leaderboard(teams, members, self._history(members), events, check_ins, now, limit)

    def team_rankings(self, organization_id: str, *, now: datetime) -> list[TeamRanking]:
        teams = self._records.list_teams(organization_id)
        members = self._records.list_team_members(organization_id=organization_id)
        events = self._records.list_events(organization_id=organization_id)
        check_ins = self._records.list_check_ins(event_ids=[e.event_id for e in events])
        return team_rankings(teams, members, events, check_ins, now)

    # ------------------------------------------------------------------
    # Per-user stats
    # ------------------------------------------------------------------

    def user_stats(
        self,
        user_id: str,
        organization_id: str,
        *,
        now: datetime,
        team_id: Optional[str] = None,
    ) -> UserStats:
        if team_id:
            return self._team_user_stats(user_id, organization_id, team_id, now=now)
        return self._org_user_stats(user_id, organization_id, now=now)

    def _org_size(self, organization_id: str) -> int:
        members = self._records.list_team_members(organization_id=organization_id)
        return len({m.user_id for m in members if m.role in ATHLETE_ROLES})

    @staticmethod
    def _rank_of(user_id: str, entries: Sequence[LeaderboardEntry]) -> int:
        return next((e.rank for e in entries if e.user_id == user_id), 0)

    def _team_user_stats(self, user_id: str, organization_id: str, team_id: str, *, now: datetime) -> UserStats:
        if not self._records.list_team_members(team_id=team_id, user_id=user_id):
            return UserStats()

        team = self._team(team_id)
        events = self._records.list_events(team_id=team_id)
        check_ins = self._records.list_check_ins(user_id=user_id, event_ids=[e.event_id for e in events])
        agg = aggregate_hours(user_id, team_id, team.season, self._periods(user_id, team, now), events, check_ins, now)

        by_id = {e.event_id: e for e in events}
        streaks = compute_streaks((by_id[c.event_id].date, c.status) for c in check_ins)

        board = self._team_board(team_id, now, None)
        athletes = [m for m in self._records.list_team_members(team_id=team_id) if m.role in ATHLETE_ROLES]
        return UserStats(
            hours_logged=agg.hours_logged,
            hours_required=agg.hours_required,
            attendance_percent=agg.attendance_percent,
            team_rank=self._rank_of(user_id, board),
            team_size=len(athletes),
            org_rank=self._rank_of(user_id, self._org_board(organization_id, now, None)),
            org_size=self._org_size(organization_id),
            current_streak=streaks.current_streak,
            best_streak=streaks.best_streak,
        )

    def _org_user_stats(self, user_id: str, organization_id: str, *, now: datetime) -> UserStats:
        memberships = self._records.list_team_members(organization_id=organization_id, user_id=user_id)
        if not memberships:
            return UserStats()

        scopes = []
        for m in memberships:
            team = self._team(m.team_id)
            scopes.append(
                TeamScope(
                    team_id=team.team_id,
                    season=team.season,
                    periods=self._periods(user_id, team, now),
                    events=self._records.list_events(team_id=team.team_id),
                )
            )

        org_events = {e.event_id: e for e in self._records.list_events(organization_id=organization_id)}
        check_ins = self._records.list_check_ins(user_id=user_id, event_ids=org_events)
        agg = aggregate_org_hours(user_id, scopes, check_ins, now)
        streaks = compute_streaks((org_events[c.event_id].date, c.status) for c in check_ins)

        return UserStats(
            hours_logged=agg.hours_logged,
            hours_required=agg.hours_required,
            attendance_percent=agg.attendance_percent,
            org_rank=self._rank_of(user_id, self._org_board(organization_id, now, None)),
            org_size=self._org_size(organization_id),
            current_streak=streaks.current_streak,
            best_streak=streaks.best_streak,
        )

    # ------------------------------------------------------------------
    # Insights, trends, badges
    # ------------------------------------------------------------------

    def _reference_team(self, organization_id: str, team_id: Optional[str], now: datetime) -> Optional[Team]:
        if team_id:
            return self._team(team_id)
        current = [t for t in self._records.list_teams(organization_id) if is_in_current_season(t.season, now)]
        return current[0] if current else None

    def attendance_insights(
        self, organization_id: str, *, now: datetime, team_id: Optional[str] = None
    ) -> AttendanceInsights:
        team = self._reference_team(organization_id, team_id, now)
        window = season_window(team.season if team else None, now)
        events = scope_events(self._records.list_events(organization_id=organization_id), window, team_id=team_id)
        check_ins = self._records.list_check_ins(event_ids=[e.event_id for e in events])
        staff_teams = non_athlete_team_map(self._records.list_team_members(organization_id=organization_id))
        return attendance_insights(events, check_ins, staff_teams)

    def attendance_trends(
        self, organization_id: str, *, now: datetime, team_id: Optional[str] = None
    ) -> list[WeeklyTrend]:
        current = [t for t in self._records.list_teams(organization_id) if is_in_current_season(t.season, now)]
        reference = next((t for t in current if t.team_id == team_id), None) if team_id else None
        reference = reference or (current[0] if current else None)

        if reference is not None and reference.season is not None:
            window = required_window(reference.season, now)
        else:
            window = calendar_year_window(now).capped_at(now)

        events = scope_events(
            self._records.list_events(organization_id=organization_id),
            window,
            team_id=team_id,
            include_ad_hoc=False,
        )
        check_ins = self._records.list_check_ins(event_ids=[e.event_id for e in events])
        return weekly_trends(events, check_ins)

    def user_badges(self, user_id: str, organization_id: str, *, now: datetime) -> list[BadgeProgress]:
        events = {e.event_id: e for e in self._records.list_events(organization_id=organization_id)}
        check_ins = self._records.list_check_ins(user_id=user_id, event_ids=events)
        earned_at = self._records.get_earned_badges(user_id=user_id, organization_id=organization_id)
        badges = evaluate_badges(badge_stats(check_ins, events), earned_at, now)
        new = [b.badge_id for b in badges if b.is_new]
        if new:
            logger.info("User %s earned badges %s in %s", user_id, ", ".join(new), organization_id)
        return badges
