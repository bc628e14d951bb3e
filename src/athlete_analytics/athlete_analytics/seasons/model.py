from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import as_utc


@dataclass(frozen=True)
class Season:
    """Organization season window, e.g. Sep-Jun.

    Months are 1-indexed. When `end_month < start_month` the season crosses
    into `year + 1`.
    """

    start_month: int
    end_month: int
    year: int


@dataclass(frozen=True)
class SeasonRange:
    """Closed interval [start, end] of aware UTC instants."""

    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end

    def capped_at(self, now: datetime) -> "SeasonRange":
        """Same range with `end` moved back to `now` if it lies in the future."""
        return SeasonRange(start=self.start, end=min(self.end, as_utc(now)))
