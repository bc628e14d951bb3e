"""Load a JSON snapshot of records into an InMemoryRecordSource.

Keys follow the camelCase field names used by the storage layer's exports.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..attendance.model import CheckIn
from ..common.datetime_utils import parse_instant, utc_day
from ..common.validators import parse_enum, require_month, to_decimal
from ..core.enums import CheckInStatus, OrgRole, TeamRole
from ..events.model import Event
from ..membership.model import MembershipPeriod
from ..payroll.model import PayrollConfig
from ..seasons.model import Season
from ..teams.model import OrganizationMember, Team, TeamMember
from .memory import InMemoryRecordSource

logger = logging.getLogger(__name__)


def _optional_instant(value: Optional[str]):
    return parse_instant(value) if value else None


def _optional_decimal(value: Any, field_name: str):
    return to_decimal(value, field_name) if value is not None else None


def _season(data: Optional[dict]) -> Optional[Season]:
    if not data:
        return None
    return Season(
        start_month=require_month(data["startMonth"], "startMonth"),
        end_month=require_month(data["endMonth"], "endMonth"),
        year=int(data["year"]),
    )


def load_snapshot(payload: dict) -> InMemoryRecordSource:
    source = InMemoryRecordSource()

    for t in payload.get("teams", []):
        source.teams.append(
            Team(
                team_id=str(t["id"]),
                organization_id=str(t["organizationId"]),
                name=t.get("name", ""),
                season=_season(t.get("season")),
                archived=bool(t.get("archived", False)),
            )
        )

    for m in payload.get("teamMembers", []):
        source.team_members.append(
            TeamMember(
                user_id=str(m["userId"]),
                team_id=str(m["teamId"]),
                role=parse_enum(TeamRole, m.get("role", "MEMBER"), "role"),
                hours_required=float(m.get("hoursRequired", 0)),
            )
        )

    for h in payload.get("membershipHistory", []):
        key = (str(h["userId"]), str(h["teamId"]))
        source.history.setdefault(key, []).append(
            MembershipPeriod(joined_at=parse_instant(h["joinedAt"]), left_at=_optional_instant(h.get("leftAt")))
        )

    for e in payload.get("events", []):
        source.events.append(
            Event(
                event_id=str(e["id"]),
                date=utc_day(parse_instant(str(e["date"]))),
                start_time=e.get("startTime", ""),
                end_time=e.get("endTime", ""),
                team_id=e.get("teamId"),
                participating_team_ids=frozenset(e.get("participatingTeamIds", [])),
                is_ad_hoc=bool(e.get("isAdHoc", False)),
                organization_id=e.get("organizationId"),
                title=e.get("title", ""),
            )
        )

    for c in payload.get("checkIns", []):
        source.check_ins.append(
            CheckIn(
                check_in_id=str(c["id"]),
                user_id=str(c["userId"]),
                event_id=str(c["eventId"]),
                status=parse_enum(CheckInStatus, c["status"], "status"),
                check_in_time=_optional_instant(c.get("checkInTime")),
                check_out_time=_optional_instant(c.get("checkOutTime")),
                hours_logged=float(c.get("hoursLogged") or 0),
                approved=bool(c.get("approved", True)),
            )
        )

    for m in payload.get("organizationMembers", []):
        source.organization_members.append(
            OrganizationMember(
                user_id=str(m["userId"]),
                organization_id=str(m["organizationId"]),
                role=parse_enum(OrgRole, m["role"], "role"),
                hourly_rate=_optional_decimal(m.get("hourlyRate"), "hourlyRate"),
                salary_amount=_optional_decimal(m.get("salaryAmount"), "salaryAmount"),
                name=m.get("name", ""),
            )
        )

    for org_id, cfg in payload.get("payrollConfigs", {}).items():
        source.payroll_configs[str(org_id)] = PayrollConfig().updated(
            pay_period=cfg.get("payPeriod"),
            default_hourly_rate=cfg.get("defaultHourlyRate"),
            deductions=cfg.get("deductions"),
        )

    for b in payload.get("earnedBadges", []):
        key = (str(b["userId"]), str(b["organizationId"]))
        source.earned_badges.setdefault(key, {})[b["badgeId"]] = parse_instant(b["earnedAt"])

    logger.info(
        "Loaded snapshot: %d teams, %d events, %d check-ins",
        len(source.teams),
        len(source.events),
        len(source.check_ins),
    )
    return source


def load_snapshot_file(path: str | Path) -> InMemoryRecordSource:
    with open(path, encoding="utf-8") as f:
        return load_snapshot(json.load(f))
