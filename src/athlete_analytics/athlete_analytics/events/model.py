from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class Event:
    """Scheduled team event. Duration is derived from the time strings, never stored."""

    event_id: str
    date: date
    start_time: str
    end_time: str
    team_id: Optional[str] = None
    participating_team_ids: FrozenSet[str] = field(default_factory=frozenset)
    is_ad_hoc: bool = False
    organization_id: Optional[str] = None
    title: str = ""

    def involves_team(self, team_id: str) -> bool:
        return self.team_id == team_id or team_id in self.participating_team_ids
