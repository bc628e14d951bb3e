from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterable

from ..common.datetime_utils import at_noon_utc, js_weekday, utc_day
from ..core.enums import Frequency


def generate_recurring_dates(
    start_date: date | datetime,
    end_date: date | datetime,
    frequency: Frequency,
    days_of_week: Iterable[int] = (),
) -> list[datetime]:
    """Expand a recurrence rule into noon-UTC datetimes within [start_date, end_date].

    `days_of_week` uses 0=Sunday .. 6=Saturday and only applies to WEEKLY and
    BIWEEKLY. Only UTC calendar fields are used so the result does not depend
    on the server timezone.
    """
    first = utc_day(start_date)
    last = utc_day(end_date)
    if last < first:
        return []

    frequency = Frequency(frequency)
    weekdays = frozenset(days_of_week)

    if frequency == Frequency.MONTHLY:
        return [at_noon_utc(d) for d in _monthly(first, last)]

    # Sunday of the start's week; BIWEEKLY keeps the even weeks from it.
    week_origin = first - timedelta(days=js_weekday(first))

    dates = []
    current = first
    while current <= last:
        if frequency == Frequency.DAILY:
            dates.append(at_noon_utc(current))
        elif js_weekday(current) in weekdays:
            week_index = (current - week_origin).days // 7
            if frequency == Frequency.WEEKLY or week_index % 2 == 0:
                dates.append(at_noon_utc(current))
        current += timedelta(days=1)
    return dates


def _monthly(first: date, last: date) -> list[date]:
    day_of_month = first.day
    year, month = first.year, first.month
    out = []
    while date(year, month, 1) <= last:
        # Months without that day are skipped, no roll-over.
        if day_of_month <= calendar.monthrange(year, month)[1]:
            target = date(year, month, day_of_month)
            if first <= target <= last:
                out.append(target)
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return out
