from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LeaderboardEntry:
    user_id: str
    hours_logged: float
    hours_required: float
    attendance_percent: float
    rank: int = 0


@dataclass(frozen=True)
class TeamRanking:
    team_id: str
    name: str
    attendance_percent: float
    rank: int = 0
