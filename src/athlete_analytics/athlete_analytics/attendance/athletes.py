from __future__ import annotations

from typing import Iterable, Mapping

from ..core.enums import ATHLETE_ROLES
from ..events.model import Event
from .model import CheckIn


def non_athlete_team_map(members: Iterable) -> dict[str, set[str]]:
    """user_id -> team ids where that user holds a staff (non-athlete) role.

    A user who coaches one team and plays on another keeps the second team's data.
    """
    out: dict[str, set[str]] = {}
    for m in members:
        if m.role in ATHLETE_ROLES:
            continue
        out.setdefault(m.user_id, set()).add(m.team_id)
    return out


def is_athlete_check_in(check_in: CheckIn, event: Event, staff_teams: Mapping[str, set[str]]) -> bool:
    """Org-wide events (no team) always count."""
    if event.team_id is None:
        return True
    return event.team_id not in staff_teams.get(check_in.user_id, ())
