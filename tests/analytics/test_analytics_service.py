from datetime import date

import pytest

from src.athlete_analytics.athlete_analytics.analytics.service import AnalyticsService
from src.athlete_analytics.athlete_analytics.attendance.model import UserStats
from src.athlete_analytics.athlete_analytics.core.exceptions import NotFoundError


@pytest.fixture
def service(records):
    return AnalyticsService(records, leaderboard_limit=10)


def test_team_leaderboard(service, now):
    board = service.team_leaderboard("t1", now=now)

    assert [(e.user_id, e.rank) for e in board] == [("u1", 1), ("u2", 2)]
    assert board[0].hours_required == pytest.approx(6.0)
    assert board[0].hours_logged == pytest.approx(5.5)
    assert board[1].hours_required == pytest.approx(4.0)
    assert board[1].attendance_percent == pytest.approx(50.0)


def test_team_leaderboard_limit(service, now):
    assert [e.user_id for e in service.team_leaderboard("t1", now=now, limit=1)] == ["u1"]


def test_unknown_team(service, now):
    with pytest.raises(NotFoundError):
        service.team_leaderboard("nope", now=now)


def test_organization_leaderboard_skips_past_season_teams(service, now):
    board = service.organization_leaderboard("o1", now=now)

    assert [e.user_id for e in board] == ["u1", "u2", "u3"]
    u1 = board[0]
    assert u1.attendance_percent == pytest.approx((5.5 / 6 * 100 + 100) / 2)
    assert u1.hours_logged == pytest.approx(7.5)
    assert u1.hours_required == pytest.approx(8.0)


def test_team_rankings(service, now):
    rankings = service.team_rankings("o1", now=now)

    assert [(r.team_id, r.rank) for r in rankings] == [("t1", 1), ("t2", 2)]
    assert rankings[0].attendance_percent == pytest.approx(32.5)
    assert rankings[1].attendance_percent == pytest.approx(25.0)


def test_team_user_stats(service, now):
    stats = service.user_stats("u1", "o1", now=now, team_id="t1")

    assert stats.hours_required == pytest.approx(6.0)
    assert stats.hours_logged == pytest.approx(5.5)
    assert (stats.team_rank, stats.team_size) == (1, 2)
    assert (stats.org_rank, stats.org_size) == (1, 4)
    assert (stats.current_streak, stats.best_streak) == (4, 4)


def test_org_user_stats_count_shared_event_once(service, now):
    stats = service.user_stats("u1", "o1", now=now)

    assert stats.hours_required == pytest.approx(6.0)
    assert stats.hours_logged == pytest.approx(5.5)
    assert stats.team_rank == 0
    assert stats.org_rank == 1


def test_user_stats_for_non_member(service, now):
    assert service.user_stats("u2", "o1", now=now, team_id="t2") == UserStats()
    assert service.user_stats("ghost", "o1", now=now) == UserStats()


def test_late_joiner_stats(service, now):
    stats = service.user_stats("u2", "o1", now=now, team_id="t1")

    assert stats.hours_required == pytest.approx(4.0)
    assert stats.hours_logged == pytest.approx(2.0)
    assert stats.team_rank == 2
    assert stats.current_streak == 1
    assert stats.best_streak == 1


def test_insights_exclude_staff_on_their_own_team(service, now):
    insights = service.attendance_insights("o1", now=now)

    assert insights.on_time_count == 4
    assert insights.late_count == 1
    assert insights.absent_count == 2
    assert insights.total_expected == 7
    assert insights.attendance_rate == pytest.approx(5 / 7)
    assert insights.event_count == 5


def test_team_insights(service, now):
    insights = service.attendance_insights("o1", now=now, team_id="t2")

    assert insights.total_expected == 2
    assert insights.attendance_rate == pytest.approx(0.5)
    assert insights.event_count == 1


def test_trends_skip_future_and_ad_hoc_events(service, now):
    trends = service.attendance_trends("o1", now=now)

    assert [t.week_start for t in trends] == [date(2026, 3, 2), date(2026, 3, 9)]
    assert [t.events_count for t in trends] == [1, 2]
    assert [t.hours_required for t in trends] == [2.0, 4.0]
    assert trends[1].hours_logged == pytest.approx(5.5)


def test_user_badges(service, now):
    badges = {b.badge_id: b for b in service.user_badges("u1", "o1", now=now)}

    assert sorted(b for b, p in badges.items() if p.earned) == ["attend_100", "attend_75", "attend_90"]
    assert all(badges[b].is_new for b in ("attend_75", "attend_90", "attend_100"))
    assert badges["hours_10"].progress == pytest.approx(6.5)


def test_default_limit_does_not_affect_user_ranks(records, now):
    service = AnalyticsService(records, leaderboard_limit=1)

    assert [e.user_id for e in service.organization_leaderboard("o1", now=now)] == ["u1"]
    assert service.user_stats("u2", "o1", now=now, team_id="t1").org_rank == 2
