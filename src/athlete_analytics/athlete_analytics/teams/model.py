from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import OrgRole, TeamRole
from ..seasons.model import Season


@dataclass(frozen=True)
class Team:
    """Team of an organization. `season=None` marks a legacy team without season data."""

    team_id: str
    organization_id: str
    name: str
    season: Optional[Season] = None
    archived: bool = False


@dataclass(frozen=True)
class TeamMember:
    """Current team membership; `hours_required` is the stored per-member target."""

    user_id: str
    team_id: str
    role: TeamRole = TeamRole.MEMBER
    hours_required: float = 0.0


@dataclass(frozen=True)
class OrganizationMember:
    user_id: str
    organization_id: str
    role: OrgRole
    hourly_rate: Optional[Decimal] = None
    salary_amount: Optional[Decimal] = None
    name: str = ""
