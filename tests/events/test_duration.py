import pytest

from src.athlete_analytics.athlete_analytics.events.duration import compute_event_duration, parse_time_string


@pytest.mark.parametrize(
    "start,end,hours",
    [
        ("4:00 PM", "6:30 PM", 2.5),
        ("12:00 PM", "1:00 PM", 1.0),
        ("12:00 AM", "1:30 AM", 1.5),
        ("9:15 am", "11:45 am", 2.5),
        ("14:00", "15:45", 1.75),
    ],
)
def test_duration_in_decimal_hours(start, end, hours):
    assert compute_event_duration(start, end) == pytest.approx(hours)


def test_overnight_event_counts_zero():
    assert compute_event_duration("10:00 PM", "1:00 AM") == 0.0


def test_all_day_and_garbage_count_zero():
    assert compute_event_duration("All Day", "All Day") == 0.0
    assert compute_event_duration("", "5:00 PM") == 0.0
    assert compute_event_duration("soon", "later") == 0.0


def test_parse_time_string():
    assert parse_time_string("6:05 PM") == (18, 5)
    assert parse_time_string("12:30 AM") == (0, 30)
    assert parse_time_string("7:00") == (7, 0)
    assert parse_time_string("noon") is None
