from datetime import date, timedelta

from src.athlete_analytics.athlete_analytics.attendance.streaks import compute_streaks
from src.athlete_analytics.athlete_analytics.core.enums import CheckInStatus

ON_TIME, LATE, ABSENT, EXCUSED = (
    CheckInStatus.ON_TIME,
    CheckInStatus.LATE,
    CheckInStatus.ABSENT,
    CheckInStatus.EXCUSED,
)


def dated(*statuses):
    start = date(2026, 1, 5)
    return [(start + timedelta(days=7 * i), s) for i, s in enumerate(statuses)]


def test_current_and_best_after_a_break():
    streaks = compute_streaks(dated(ON_TIME, ABSENT, ON_TIME, ON_TIME))

    assert streaks.best_streak == 2
    assert streaks.current_streak == 2


def test_trailing_absence_resets_current_only():
    streaks = compute_streaks(dated(ON_TIME, ABSENT, ON_TIME, ON_TIME, ABSENT))

    assert streaks.current_streak == 0
    assert streaks.best_streak == 2


def test_excused_is_neutral():
    assert compute_streaks(dated(ON_TIME, EXCUSED, LATE)).best_streak == 2
    assert compute_streaks(dated(ON_TIME, LATE, EXCUSED)).current_streak == 2
    assert compute_streaks(dated(ON_TIME, ABSENT, EXCUSED)).current_streak == 0


def test_input_order_does_not_matter():
    entries = dated(ON_TIME, ON_TIME, ON_TIME, ABSENT, LATE)

    assert compute_streaks(reversed(entries)) == compute_streaks(entries)
    assert compute_streaks(entries).best_streak == 3
    assert compute_streaks(entries).current_streak == 1


def test_no_check_ins():
    streaks = compute_streaks([])
    assert (streaks.current_streak, streaks.best_streak) == (0, 0)
