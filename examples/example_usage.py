"""Example: use the service layer directly (no Flask).

Controllers stay thin; the analytics and payroll rules live in the services.
Run scripts/build_demo_snapshot.py first, or set DATA_FILE to your own snapshot.
"""

import importlib
from datetime import datetime, timezone

from config import get_settings_module

from src.athlete_analytics.athlete_analytics.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(data_file=settings.DATA_FILE or "demo_snapshot.json")
    now = datetime(2026, 3, 15, 12, tzinfo=timezone.utc)

    for entry in container.analytics_service.organization_leaderboard("demo-org", now=now, limit=5):
        print(f"#{entry.rank} {entry.user_id}: {entry.attendance_percent:.1f}% ({entry.hours_logged:.1f}h)")

    report = container.payroll_report_service.build_staff_report(organization_id="demo-org", month=3, year=2026)
    for row in report.rows:
        print(f"{row.name}: {row.total_hours}h gross={row.gross_pay} net={row.net_pay}")


if __name__ == "__main__":
    main()
