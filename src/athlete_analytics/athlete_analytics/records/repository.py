from __future__ import annotations

from datetime import datetime
from typing import Iterable, Mapping, Optional, Protocol, Sequence

from ..attendance.model import CheckIn
from ..events.model import Event
from ..membership.model import MembershipPeriod
from ..payroll.model import PayrollConfig
from ..teams.model import OrganizationMember, Team, TeamMember


class RecordSource(Protocol):
    """Read access to already-persisted records.

    The analytics layer never writes; storage is owned by the caller.
    """

    def get_team(self, team_id: str) -> Optional[Team]:
        raise NotImplementedError

    def list_teams(self, organization_id: str) -> Sequence[Team]:
        """Non-archived teams of the organization."""

        raise NotImplementedError

    def list_team_members(
        self,
        *,
        team_id: Optional[str] = None,
        organization_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Sequence[TeamMember]:
        raise NotImplementedError

    def list_membership_history(self, *, user_id: str, team_id: str) -> Sequence[MembershipPeriod]:
        """Join/leave periods ordered by `joined_at`."""

        raise NotImplementedError

    def list_events(self, *, organization_id: Optional[str] = None, team_id: Optional[str] = None) -> Sequence[Event]:
        """Events of the organization, or of the team directly or as a participant."""

        raise NotImplementedError

    def list_check_ins(
        self,
        *,
        user_id: Optional[str] = None,
        event_ids: Optional[Iterable[str]] = None,
    ) -> Sequence[CheckIn]:
        raise NotImplementedError

    def list_organization_members(self, organization_id: str) -> Sequence[OrganizationMember]:
        raise NotImplementedError

    def get_payroll_config(self, organization_id: str) -> PayrollConfig:
        raise NotImplementedError

    def get_earned_badges(self, *, user_id: str, organization_id: str) -> Mapping[str, datetime]:
        raise NotImplementedError
