from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from ..core.constants import NOON


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 instant; date-only strings map to noon UTC."""
    if len(value) == 10:
        return at_noon_utc(parse_iso_date(value))
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return as_utc(parsed)


def now_utc() -> datetime:
    """Current time in UTC.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_day(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return as_utc(value).date()
    return value


def at_noon_utc(day: date | datetime) -> datetime:
    return datetime.combine(utc_day(day), NOON, tzinfo=timezone.utc)


def js_weekday(day: date) -> int:
    """Weekday numbered 0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7


def to_week_start(day: date | datetime) -> date:
    """Monday of the week containing `day`."""
    d = utc_day(day)
    return d - timedelta(days=d.weekday())


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """[first instant of month, first instant of next month) in UTC."""
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    if month == 12:
        end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        end = datetime(year, month + 1, 1, tzinfo=timezone.utc)
    return start, end
