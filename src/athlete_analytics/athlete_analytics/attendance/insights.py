from __future__ import annotations

from collections import Counter
from datetime import date, datetime
from typing import Iterable, Mapping, Optional

from ..common.datetime_utils import as_utc, at_noon_utc, to_week_start
from ..core.enums import CheckInStatus
from ..events.duration import compute_event_duration
from ..events.model import Event
from ..seasons.model import SeasonRange
from .athletes import is_athlete_check_in
from .hours import attendance_percent
from .model import AttendanceInsights, CheckIn, WeeklyTrend


def scope_events(
    events: Iterable[Event],
    window: SeasonRange,
    *,
    team_id: Optional[str] = None,
    include_ad_hoc: bool = True,
) -> list[Event]:
    out = []
    for e in events:
        if not include_ad_hoc and e.is_ad_hoc:
            continue
        if team_id is not None and not e.involves_team(team_id):
            continue
        if window.contains(at_noon_utc(e.date)):
            out.append(e)
    return out


def attendance_insights(
    events: Iterable[Event],
    check_ins: Iterable[CheckIn],
    staff_teams: Mapping[str, set[str]],
) -> AttendanceInsights:
    """Status breakdown of approved athlete check-ins on the given events."""
    by_id = {e.event_id: e for e in events}
    counts: Counter = Counter()
    for c in check_ins:
        event = by_id.get(c.event_id)
        if event is None or not c.approved:
            continue
        if is_athlete_check_in(c, event, staff_teams):
            counts[c.status] += 1

    on_time = counts[CheckInStatus.ON_TIME]
    late = counts[CheckInStatus.LATE]
    total = sum(counts.values())
    return AttendanceInsights(
        total_expected=total,
        on_time_count=on_time,
        late_count=late,
        absent_count=counts[CheckInStatus.ABSENT],
        excused_count=counts[CheckInStatus.EXCUSED],
        attendance_rate=(on_time + late) / total if total else 0.0,
        event_count=len(by_id),
    )


def weekly_trends(events: Iterable[Event], check_ins: Iterable[CheckIn]) -> list[WeeklyTrend]:
    """Required vs logged hours grouped by Monday-start week, oldest first."""
    events = list(events)
    logged_by_event: dict[str, float] = {}
    wanted = {e.event_id for e in events}
    for c in check_ins:
        if c.approved and c.event_id in wanted:
            logged_by_event[c.event_id] = logged_by_event.get(c.event_id, 0.0) + (c.hours_logged or 0.0)

    weeks: dict[date, list[float]] = {}
    for e in events:
        bucket = weeks.setdefault(to_week_start(e.date), [0.0, 0.0, 0])
        bucket[0] += compute_event_duration(e.start_time, e.end_time)
        bucket[1] += logged_by_event.get(e.event_id, 0.0)
        bucket[2] += 1

    return [
        WeeklyTrend(
            week_start=week,
            hours_required=required,
            hours_logged=logged,
            events_count=int(count),
            attendance_percent=attendance_percent(logged, required),
        )
        for week, (required, logged, count) in sorted(weeks.items())
    ]


def calendar_year_window(now: datetime) -> SeasonRange:
    """Trend window for orgs without season data: the current UTC calendar year."""
    now = as_utc(now)
    start = datetime(now.year, 1, 1, tzinfo=now.tzinfo)
    end = datetime(now.year, 12, 31, 23, 59, 59, tzinfo=now.tzinfo)
    return SeasonRange(start=start, end=end)
