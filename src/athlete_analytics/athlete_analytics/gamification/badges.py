"""Milestone badges derived from a user's attendance stats.

Earned badges are persisted by the caller; this module only decides which
ones are earned and which are new since the last evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Mapping, Optional

from ..attendance.model import CheckIn
from ..attendance.streaks import compute_streaks
from ..events.model import Event


@dataclass(frozen=True)
class BadgeDefinition:
    badge_id: str
    name: str
    description: str
    category: str
    threshold: float
    field: str


@dataclass(frozen=True)
class BadgeProgress:
    badge_id: str
    name: str
    description: str
    category: str
    earned: bool
    earned_at: Optional[datetime]
    is_new: bool
    progress: float
    threshold: float


@dataclass(frozen=True)
class BadgeStats:
    hours_logged: float
    check_in_count: int
    attendance_percent: float
    best_streak: int


BADGE_DEFINITIONS = (
    BadgeDefinition("hours_10", "Getting Started", "Log 10 hours of training", "hours", 10, "hours_logged"),
    BadgeDefinition("hours_25", "Committed", "Log 25 hours of training", "hours", 25, "hours_logged"),
    BadgeDefinition("hours_50", "Dedicated", "Log 50 hours of training", "hours", 50, "hours_logged"),
    BadgeDefinition("hours_100", "Century Club", "Log 100 hours of training", "hours", 100, "hours_logged"),
    BadgeDefinition("hours_250", "Elite Athlete", "Log 250 hours of training", "hours", 250, "hours_logged"),
    BadgeDefinition("streak_5", "On a Roll", "Attend 5 events in a row", "streak", 5, "best_streak"),
    BadgeDefinition("streak_10", "Unstoppable", "Attend 10 events in a row", "streak", 10, "best_streak"),
    BadgeDefinition("streak_25", "Streak Master", "Attend 25 events in a row", "streak", 25, "best_streak"),
    BadgeDefinition("attend_75", "Reliable", "Reach 75% attendance rate", "attendance", 75, "attendance_percent"),
    BadgeDefinition("attend_90", "Consistent", "Reach 90% attendance rate", "attendance", 90, "attendance_percent"),
    BadgeDefinition("attend_100", "Perfect Attendance", "Reach 100% attendance rate", "attendance", 100, "attendance_percent"),
    BadgeDefinition("checkin_10", "Regular", "Check in to 10 events", "checkins", 10, "check_in_count"),
    BadgeDefinition("checkin_25", "Veteran", "Check in to 25 events", "checkins", 25, "check_in_count"),
    BadgeDefinition("checkin_50", "All-Star", "Check in to 50 events", "checkins", 50, "check_in_count"),
    BadgeDefinition("checkin_100", "Legend", "Check in to 100 events", "checkins", 100, "check_in_count"),
)


def badge_stats(check_ins: Iterable[CheckIn], events: Mapping[str, Event]) -> BadgeStats:
    """Stats over approved check-ins; the attendance rate here is per check-in, not per hour."""
    approved = [c for c in check_ins if c.approved and c.event_id in events]
    attended = sum(1 for c in approved if c.status.attended)
    streaks = compute_streaks((events[c.event_id].date, c.status) for c in approved)
    return BadgeStats(
        hours_logged=sum(c.hours_logged or 0.0 for c in approved),
        check_in_count=attended,
        attendance_percent=attended / len(approved) * 100 if approved else 0.0,
        best_streak=streaks.best_streak,
    )


def evaluate_badges(
    stats: BadgeStats,
    earned_at: Mapping[str, datetime],
    now: datetime,
) -> list[BadgeProgress]:
    out = []
    for definition in BADGE_DEFINITIONS:
        progress = float(getattr(stats, definition.field))
        earned = progress >= definition.threshold
        is_new = earned and definition.badge_id not in earned_at
        out.append(
            BadgeProgress(
                badge_id=definition.badge_id,
                name=definition.name,
                description=definition.description,
                category=definition.category,
                earned=earned,
                earned_at=now if is_new else earned_at.get(definition.badge_id),
                is_new=is_new,
                progress=progress,
                threshold=definition.threshold,
            )
        )
    return out
