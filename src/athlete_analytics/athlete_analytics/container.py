from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .analytics.service import AnalyticsService
from .core.constants import DEFAULT_LEADERBOARD_LIMIT
from .payroll.service import PayrollReportService
from .records.memory import InMemoryRecordSource
from .records.repository import RecordSource
from .records.snapshot import load_snapshot_file


@dataclass(frozen=True)
class Container:
    records: RecordSource

    analytics_service: AnalyticsService
    payroll_report_service: PayrollReportService


def build_container(
    *,
    records: Optional[RecordSource] = None,
    data_file: Optional[str] = None,
    leaderboard_limit: int = DEFAULT_LEADERBOARD_LIMIT,
) -> Container:
    if records is None:
        records = load_snapshot_file(data_file) if data_file else InMemoryRecordSource()

    analytics_service = AnalyticsService(records, leaderboard_limit=leaderboard_limit)
    payroll_report_service = PayrollReportService(records)

    return Container(
        records=records,
        analytics_service=analytics_service,
        payroll_report_service=payroll_report_service,
    )
