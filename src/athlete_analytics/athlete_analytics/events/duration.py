from __future__ import annotations

import logging
import re
from typing import Optional

from ..core.constants import ALL_DAY

logger = logging.getLogger(__name__)

_TIME_12H = re.compile(r"^(\d{1,2}):(\d{2})\s*(AM|PM)$", re.IGNORECASE)
_TIME_24H = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time_string(value: str) -> Optional[tuple[int, int]]:
    """Parse "6:00 PM" or "18:00" into (hours, minutes); None when unparseable."""
    text = (value or "").strip()
    match = _TIME_12H.match(text)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        period = match.group(3).upper()
        if period == "PM" and hours != 12:
            hours += 12
        if period == "AM" and hours == 12:
            hours = 0
        return hours, minutes

    match = _TIME_24H.match(text)
    if match:
        return int(match.group(1)), int(match.group(2))
    return None


def compute_event_duration(start_time: str, end_time: str) -> float:
    """Duration in decimal hours between two time-of-day strings.

    An end before the start (overnight events) counts as zero; it does not
    wrap into the next day. "All Day" and unparseable values are zero too.
    """
    if not start_time or not end_time or ALL_DAY in (start_time, end_time):
        return 0.0

    start = parse_time_string(start_time)
    end = parse_time_string(end_time)
    if start is None or end is None:
        logger.warning("Unparseable event time %r - %r, counting 0 hours", start_time, end_time)
        return 0.0

    minutes = (end[0] * 60 + end[1]) - (start[0] * 60 + start[1])
    if minutes < 0:
        logger.debug("Event ends before it starts (%s - %s), counting 0 hours", start_time, end_time)
        return 0.0
    return minutes / 60
