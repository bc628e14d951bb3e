from __future__ import annotations

import calendar
import logging
from datetime import datetime, time, timedelta, timezone
from typing import Optional

from ..common.datetime_utils import as_utc
from ..core.constants import EPOCH
from ..core.enums import TimeRange
from .model import Season, SeasonRange

logger = logging.getLogger(__name__)


def resolve_season_range(start_month: int, end_month: int, year: int) -> SeasonRange:
    """Concrete UTC interval for a season.

    Month values are expected to be validated by the caller.
    """
    start = datetime(year, start_month, 1, tzinfo=timezone.utc)
    end_year = year if end_month >= start_month else year + 1
    last_day = calendar.monthrange(end_year, end_month)[1]
    end = datetime.combine(
        datetime(end_year, end_month, last_day).date(), time.max, tzinfo=timezone.utc
    )
    return SeasonRange(start=start, end=end)


def season_window(season: Optional[Season], now: datetime) -> SeasonRange:
    """Range for `season`, or [epoch, now] for entities without season data.

    Legacy teams predate seasons; the all-time fallback keeps their records in.
    """
    if season is None:
        logger.debug("No season data, falling back to [epoch, %s]", now.isoformat())
        return SeasonRange(start=EPOCH, end=as_utc(now))
    return resolve_season_range(season.start_month, season.end_month, season.year)


def is_in_current_season(season: Optional[Season], now: datetime) -> bool:
    if season is None:
        return True
    return season_window(season, now).contains(as_utc(now))


def date_range_for(time_range: Optional[TimeRange], now: datetime) -> SeasonRange:
    now = as_utc(now)
    if time_range == TimeRange.WEEK:
        return SeasonRange(start=now - timedelta(days=7), end=now)
    if time_range == TimeRange.MONTH:
        if now.month == 1:
            year, month = now.year - 1, 12
        else:
            year, month = now.year, now.month - 1
        day = min(now.day, calendar.monthrange(year, month)[1])
        return SeasonRange(start=now.replace(year=year, month=month, day=day), end=now)
    return SeasonRange(start=EPOCH, end=now)
