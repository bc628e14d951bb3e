from __future__ import annotations

from datetime import date
from typing import Iterable, Tuple

from ..common.datetime_utils import utc_day
from ..core.enums import CheckInStatus
from .model import Streaks


def compute_streaks(entries: Iterable[Tuple[date, CheckInStatus]]) -> Streaks:
    """Current and best runs of attended events from (event_date, status) pairs.

    Best streak resets on ABSENT and keeps scanning; current streak walks back
    from the latest event and stops at the first ABSENT. EXCUSED is neutral.
    """
    ordered = sorted(entries, key=lambda entry: utc_day(entry[0]))

    best = running = 0
    for _, status in ordered:
        if status.attended:
            running += 1
            best = max(best, running)
        elif status == CheckInStatus.ABSENT:
            running = 0

    current = 0
    for _, status in reversed(ordered):
        if status.attended:
            current += 1
        elif status == CheckInStatus.ABSENT:
            break

    return Streaks(current_streak=current, best_streak=best)
