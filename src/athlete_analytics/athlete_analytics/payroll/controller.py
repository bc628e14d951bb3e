from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_utc
from ..common.serialization import to_jsonable
from ..container import Container
from ..core.exceptions import ValidationError
from .service import StaffPayrollReport, StaffPayrollRow


def _month_year() -> tuple[int, int]:
    today = now_utc()
    try:
        month = int(request.args.get("month") or today.month)
        year = int(request.args.get("year") or today.year)
    except ValueError as e:
        raise ValidationError("month and year must be integers") from e
    return month, year


def _row_json(row: StaffPayrollRow) -> dict:
    return {
        "user_id": row.user_id,
        "name": row.name,
        "total_hours": to_jsonable(row.total_hours),
        "hourly_rate": to_jsonable(row.hourly_rate),
        "salary_amount": to_jsonable(row.salary_amount),
        "gross_pay": to_jsonable(row.gross_pay),
        "net_pay": to_jsonable(row.net_pay),
        "applied_deductions": to_jsonable(row.applied_deductions),
        "entries": [
            {
                "event_id": x.event.event_id,
                "event_title": x.event.title,
                "date": x.event.date.isoformat(),
                "status": x.check_in.status.value,
                "hours_logged": x.hours_logged,
            }
            for x in row.entries
        ],
    }


def register(app: Flask, container: Container) -> None:
    service = container.payroll_report_service

    def _write_report_csv(*, report: StaffPayrollReport, filename: str):
        """Write one row per staff member; deductions are flattened into one column."""

        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=[
                "user_id",
                "name",
                "total_hours",
                "hourly_rate",
                "salary_amount",
                "gross_pay",
                "deductions",
                "net_pay",
            ],
        )
        writer.writeheader()
        for row in report.rows:
            writer.writerow(
                {
                    "user_id": row.user_id,
                    "name": row.name,
                    "total_hours": row.total_hours,
                    "hourly_rate": row.hourly_rate if row.hourly_rate is not None else "-",
                    "salary_amount": row.salary_amount if row.salary_amount is not None else "-",
                    "gross_pay": row.gross_pay if row.gross_pay is not None else "-",
                    "deductions": "; ".join(f"{d.name}: {d.amount}" for d in row.applied_deductions),
                    "net_pay": row.net_pay if row.net_pay is not None else "-",
                }
            )

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/organizations/<org_id>/staff-hours", methods=["GET"], endpoint="staff_hours")
    def staff_hours(org_id: str):
        month, year = _month_year()
        report = service.build_staff_report(organization_id=org_id, month=month, year=year)
        return jsonify({"month": report.month, "year": report.year, "staff": [_row_json(r) for r in report.rows]})

    @app.route("/api/organizations/<org_id>/staff-hours.csv", methods=["GET"], endpoint="staff_hours_csv")
    def staff_hours_csv(org_id: str):
        month, year = _month_year()
        report = service.build_staff_report(organization_id=org_id, month=month, year=year)
        return _write_report_csv(report=report, filename=f"payroll_{org_id}_{year:04d}{month:02d}.csv")

    @app.route("/api/organizations/<org_id>/users/<user_id>/hours", methods=["GET"], endpoint="member_hours")
    def member_hours(org_id: str, user_id: str):
        month, year = _month_year()
        row = service.staff_hours(organization_id=org_id, user_id=user_id, month=month, year=year)
        return jsonify(_row_json(row))
