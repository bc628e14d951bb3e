from __future__ import annotations

from datetime import datetime
from typing import Optional

from flask import Flask, current_app, jsonify, request

from ..common.datetime_utils import now_utc, parse_instant
from ..common.serialization import to_jsonable
from ..core.enums import TimeRange
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from ..seasons.resolver import date_range_for


def _request_now() -> datetime:
    """`?now=` pins the clock for a request; otherwise the real time is used."""
    value = request.args.get("now")
    if not value:
        return now_utc()
    try:
        return parse_instant(value)
    except ValueError as e:
        raise ValidationError(f"Invalid now parameter: {value!r}") from e


def _limit(default: int) -> int:
    value = request.args.get("limit")
    if value is None:
        return default
    try:
        limit = int(value)
    except ValueError as e:
        raise ValidationError(f"Invalid limit: {value!r}") from e
    if limit <= 0:
        raise ValidationError("limit must be positive")
    return limit


def register(app: Flask, container: Container) -> None:
    service = container.analytics_service

    @app.errorhandler(NotFoundError)
    def not_found(e: NotFoundError):
        return jsonify({"success": False, "message": str(e)}), 404

    @app.errorhandler(ValidationError)
    def invalid(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.route("/api/users/<user_id>/stats", methods=["GET"], endpoint="user_stats")
    def user_stats(user_id: str):
        organization_id: Optional[str] = request.args.get("organizationId")
        if not organization_id:
            raise ValidationError("organizationId is required")
        stats = service.user_stats(
            user_id,
            organization_id,
            now=_request_now(),
            team_id=request.args.get("teamId"),
        )
        return jsonify(to_jsonable(stats))

    @app.route("/api/teams/<team_id>/leaderboard", methods=["GET"], endpoint="team_leaderboard")
    def team_leaderboard(team_id: str):
        entries = service.team_leaderboard(
            team_id, now=_request_now(), limit=_limit(current_app.config["LEADERBOARD_LIMIT"])
        )
        return jsonify(to_jsonable(entries))

    @app.route("/api/organizations/<org_id>/leaderboard", methods=["GET"], endpoint="organization_leaderboard")
    def organization_leaderboard(org_id: str):
        entries = service.organization_leaderboard(
            org_id, now=_request_now(), limit=_limit(current_app.config["LEADERBOARD_LIMIT"])
        )
        return jsonify(to_jsonable(entries))

    @app.route("/api/organizations/<org_id>/team-rankings", methods=["GET"], endpoint="team_rankings")
    def team_rankings(org_id: str):
        return jsonify(to_jsonable(service.team_rankings(org_id, now=_request_now())))

    @app.route("/api/organizations/<org_id>/insights", methods=["GET"], endpoint="attendance_insights")
    def attendance_insights(org_id: str):
        insights = service.attendance_insights(org_id, now=_request_now(), team_id=request.args.get("teamId"))
        return jsonify(to_jsonable(insights))

    @app.route("/api/organizations/<org_id>/trends", methods=["GET"], endpoint="attendance_trends")
    def attendance_trends(org_id: str):
        trends = service.attendance_trends(org_id, now=_request_now(), team_id=request.args.get("teamId"))
        return jsonify(to_jsonable(trends))

    @app.route("/api/users/<user_id>/badges", methods=["GET"], endpoint="user_badges")
    def user_badges(user_id: str):
        organization_id = request.args.get("organizationId")
        if not organization_id:
            raise ValidationError("organizationId is required")
        badges = service.user_badges(user_id, organization_id, now=_request_now())
        return jsonify(
            {
                "badges": to_jsonable(badges),
                "total_earned": sum(1 for b in badges if b.earned),
            }
        )

    @app.route("/api/date-range", methods=["GET"], endpoint="date_range")
    def date_range():
        raw = request.args.get("timeRange")
        try:
            time_range = TimeRange(raw.upper()) if raw else None
        except ValueError as e:
            raise ValidationError(f"Unknown timeRange {raw!r}") from e
        return jsonify(to_jsonable(date_range_for(time_range, _request_now())))
