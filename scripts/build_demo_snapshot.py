"""Write a demo JSON snapshot (one org, two teams, a season of practices).

Usage: python scripts/build_demo_snapshot.py [output.json]
Point DATA_FILE at the output to serve it from the API.
"""

from __future__ import annotations

import json
import random
import sys
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.athlete_analytics.athlete_analytics.core.enums import Frequency
from src.athlete_analytics.athlete_analytics.events.duration import compute_event_duration
from src.athlete_analytics.athlete_analytics.events.recurrence import generate_recurring_dates

ORG = "demo-org"
SEASON = {"startMonth": 9, "endMonth": 6, "year": 2025}

TEAMS = {
    "varsity": {"days": [1, 3], "start": "4:00 PM", "end": "6:00 PM", "athletes": ["ava", "ben", "cy"]},
    "jv": {"days": [2, 4], "start": "3:30 PM", "end": "5:00 PM", "athletes": ["dee", "eli", "ava"]},
}


def build(seed: int = 7) -> dict:
    rng = random.Random(seed)
    payload = {
        "teams": [],
        "teamMembers": [],
        "events": [],
        "checkIns": [],
        "organizationMembers": [
            {"userId": "coach-kim", "organizationId": ORG, "role": "COACH", "hourlyRate": "25.00", "name": "Coach Kim"},
            {"userId": "mgr-lee", "organizationId": ORG, "role": "MANAGER", "salaryAmount": "3000.00", "name": "Lee"},
        ],
        "payrollConfigs": {
            ORG: {
                "payPeriod": "MONTHLY",
                "deductions": [
                    {"name": "Tax", "type": "PERCENT", "value": 10},
                    {"name": "Insurance", "type": "FLAT", "value": 5},
                ],
            }
        },
    }

    for team_id, plan in TEAMS.items():
        payload["teams"].append({"id": team_id, "organizationId": ORG, "name": team_id.upper(), "season": SEASON})
        payload["teamMembers"].append({"userId": "coach-kim", "teamId": team_id, "role": "COACH"})

        dates = generate_recurring_dates(date(2025, 9, 1), date(2026, 6, 30), Frequency.WEEKLY, plan["days"])
        hours = compute_event_duration(plan["start"], plan["end"])
        for athlete in plan["athletes"]:
            payload["teamMembers"].append(
                {"userId": athlete, "teamId": team_id, "role": "MEMBER", "hoursRequired": hours * len(dates)}
            )

        for i, when in enumerate(dates):
            event_id = f"{team_id}-{i:03d}"
            payload["events"].append(
                {
                    "id": event_id,
                    "organizationId": ORG,
                    "teamId": team_id,
                    "date": when.date().isoformat(),
                    "startTime": plan["start"],
                    "endTime": plan["end"],
                    "title": f"{team_id.upper()} practice",
                }
            )
            for user_id in plan["athletes"] + ["coach-kim"]:
                status = rng.choices(["ON_TIME", "LATE", "ABSENT", "EXCUSED"], weights=[70, 15, 10, 5])[0]
                logged = hours if status == "ON_TIME" else hours / 2 if status == "LATE" else 0
                payload["checkIns"].append(
                    {
                        "id": f"{event_id}-{user_id}",
                        "userId": user_id,
                        "eventId": event_id,
                        "status": status,
                        "hoursLogged": logged,
                        "approved": True,
                    }
                )
    return payload


def main() -> None:
    out = Path(sys.argv[1]) if len(sys.argv) > 1 else REPO_ROOT / "demo_snapshot.json"
    payload = build()
    out.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    print(f"OK: wrote {len(payload['events'])} events, {len(payload['checkIns'])} check-ins -> {out}")


if __name__ == "__main__":
    main()
