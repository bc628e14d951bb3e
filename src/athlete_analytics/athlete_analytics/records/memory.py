from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence

from ..attendance.model import CheckIn
from ..events.model import Event
from ..membership.model import MembershipPeriod
from ..payroll.model import PayrollConfig
from ..teams.model import OrganizationMember, Team, TeamMember


@dataclass
class InMemoryRecordSource:
    """RecordSource over plain lists; used by tests and the snapshot-backed app."""

    teams: list[Team] = field(default_factory=list)
    team_members: list[TeamMember] = field(default_factory=list)
    history: dict[tuple[str, str], list[MembershipPeriod]] = field(default_factory=dict)
    events: list[Event] = field(default_factory=list)
    check_ins: list[CheckIn] = field(default_factory=list)
    organization_members: list[OrganizationMember] = field(default_factory=list)
    payroll_configs: dict[str, PayrollConfig] = field(default_factory=dict)
    earned_badges: dict[tuple[str, str], dict[str, datetime]] = field(default_factory=dict)

    def get_team(self, team_id: str) -> Optional[Team]:
        return next((t for t in self.teams if t.team_id == team_id), None)

    def list_teams(self, organization_id: str) -> Sequence[Team]:
        return [t for t in self.teams if t.organization_id == organization_id and not t.archived]

    def list_team_members(
        self,
        *,
        team_id: Optional[str] = None,
        organization_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Sequence[TeamMember]:
        org_teams = None
        if organization_id is not None:
            org_teams = {t.team_id for t in self.teams if t.organization_id == organization_id}

        out = []
        for m in self.team_members:
            if team_id is not None and m.team_id != team_id:
                continue
            if user_id is not None and m.user_id != user_id:
                continue
            if org_teams is not None and m.team_id not in org_teams:
                continue
            out.append(m)
        return out

    def list_membership_history(self, *, user_id: str, team_id: str) -> Sequence[MembershipPeriod]:
        return sorted(self.history.get((user_id, team_id), []), key=lambda p: p.joined_at)

    def list_events(self, *, organization_id: Optional[str] = None, team_id: Optional[str] = None) -> Sequence[Event]:
        out = []
        for e in self.events:
            if organization_id is not None and e.organization_id != organization_id:
                continue
            if team_id is not None and not e.involves_team(team_id):
                continue
            out.append(e)
        return out

    def list_check_ins(
        self,
        *,
        user_id: Optional[str] = None,
        event_ids: Optional[Iterable[str]] = None,
    ) -> Sequence[CheckIn]:
        wanted = set(event_ids) if event_ids is not None else None
        return [
            c
            for c in self.check_ins
            if (user_id is None or c.user_id == user_id) and (wanted is None or c.event_id in wanted)
        ]

    def list_organization_members(self, organization_id: str) -> Sequence[OrganizationMember]:
        return [m for m in self.organization_members if m.organization_id == organization_id]

    def get_payroll_config(self, organization_id: str) -> PayrollConfig:
        return self.payroll_configs.get(organization_id, PayrollConfig())

    def get_earned_badges(self, *, user_id: str, organization_id: str) -> Mapping[str, datetime]:
        return dict(self.earned_badges.get((user_id, organization_id), {}))
