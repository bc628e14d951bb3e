from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Sequence, TypeVar

from ..common.datetime_utils import utc_day
from ..core.exceptions import OverlappingMembershipError, ValidationError
from ..seasons.model import SeasonRange
from .model import MembershipPeriod

logger = logging.getLogger(__name__)

T = TypeVar("T")


def validate_periods(periods: Iterable[MembershipPeriod]) -> list[MembershipPeriod]:
    """Return periods ordered by `joined_at`, raising on malformed history."""
    ordered = sorted(periods, key=lambda p: p.joined_at)
    for p in ordered:
        if p.left_at is not None and p.left_at < p.joined_at:
            raise ValidationError(f"Membership period leaves before it starts: {p}")

    for prev, nxt in zip(ordered, ordered[1:]):
        if prev.left_at is None or nxt.joined_at < prev.left_at:
            raise OverlappingMembershipError(f"Membership periods overlap: {prev} and {nxt}")
    return ordered


def event_during_membership(event_day: date, periods: Sequence[MembershipPeriod]) -> bool:
    """Inclusive on both ends, compared by calendar day."""
    for p in periods:
        if event_day < utc_day(p.joined_at):
            continue
        if p.left_at is None or event_day <= utc_day(p.left_at):
            return True
    return False


def filter_events_by_membership(events: Iterable[T], periods: Iterable[MembershipPeriod]) -> list[T]:
    """Keep events (anything with a `date`) dated inside at least one period.

    No fallback here: an empty period list keeps nothing.
    """
    ordered = validate_periods(periods)
    return [e for e in events if event_during_membership(utc_day(e.date), ordered)]


def periods_or_full_season(
    history: Sequence[MembershipPeriod], season_range: SeasonRange
) -> list[MembershipPeriod]:
    """Membership history, or one open period from the season start when none was recorded."""
    if history:
        return list(history)
    logger.debug("Empty membership history, assuming member since %s", season_range.start.isoformat())
    return [MembershipPeriod(joined_at=season_range.start, left_at=None)]
