import csv
import io

import pytest

from src.athlete_analytics.athlete_analytics.main import create_app

NOW_PARAM = "now=2026-03-15T12:00:00Z"


@pytest.fixture
def client(monkeypatch, records):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(records=records)
    return app.test_client()


def test_team_leaderboard_endpoint(client):
    res = client.get(f"/api/teams/t1/leaderboard?{NOW_PARAM}")

    assert res.status_code == 200
    body = res.get_json()
    assert [e["user_id"] for e in body] == ["u1", "u2"]
    assert body[0]["rank"] == 1


def test_leaderboard_limit_validation(client):
    assert client.get(f"/api/organizations/o1/leaderboard?limit=0&{NOW_PARAM}").status_code == 400
    body = client.get(f"/api/organizations/o1/leaderboard?limit=2&{NOW_PARAM}").get_json()
    assert [e["user_id"] for e in body] == ["u1", "u2"]


def test_unknown_team_is_404(client):
    res = client.get(f"/api/teams/nope/leaderboard?{NOW_PARAM}")

    assert res.status_code == 404
    assert res.get_json()["success"] is False


def test_user_stats_requires_organization(client):
    assert client.get("/api/users/u1/stats").status_code == 400

    body = client.get(f"/api/users/u1/stats?organizationId=o1&teamId=t1&{NOW_PARAM}").get_json()
    assert body["hours_required"] == 6.0
    assert body["team_rank"] == 1
    assert body["org_size"] == 4


def test_team_rankings_endpoint(client):
    body = client.get(f"/api/organizations/o1/team-rankings?{NOW_PARAM}").get_json()
    assert [(r["team_id"], r["rank"]) for r in body] == [("t1", 1), ("t2", 2)]


def test_insights_and_trends_endpoints(client):
    insights = client.get(f"/api/organizations/o1/insights?{NOW_PARAM}").get_json()
    assert insights["total_expected"] == 7

    trends = client.get(f"/api/organizations/o1/trends?{NOW_PARAM}").get_json()
    assert [t["week_start"] for t in trends] == ["2026-03-02", "2026-03-09"]


def test_badges_endpoint(client):
    body = client.get(f"/api/users/u1/badges?organizationId=o1&{NOW_PARAM}").get_json()
    assert body["total_earned"] == 3
    assert len(body["badges"]) == 15


def test_date_range_endpoint(client):
    body = client.get(f"/api/date-range?timeRange=week&{NOW_PARAM}").get_json()
    assert body == {"start": "2026-03-08T12:00:00+00:00", "end": "2026-03-15T12:00:00+00:00"}

    assert client.get("/api/date-range?timeRange=decade").status_code == 400
    assert client.get("/api/date-range?now=yesterday").status_code == 400


def test_staff_hours_endpoint(client):
    body = client.get("/api/organizations/o1/staff-hours?month=3&year=2026").get_json()

    assert (body["month"], body["year"]) == (3, 2026)
    (coach,) = body["staff"]
    assert coach["user_id"] == "c1"
    assert coach["total_hours"] == "2.00"
    assert coach["gross_pay"] == "60.00"
    assert [d["amount"] for d in coach["applied_deductions"]] == ["6.00", "5.00"]
    assert coach["net_pay"] == "49.00"
    assert coach["entries"][0]["event_id"] == "e1"


def test_member_hours_endpoint(client):
    body = client.get("/api/organizations/o1/users/u1/hours?month=3&year=2026").get_json()
    assert body["total_hours"] == "6.50"
    assert body["gross_pay"] is None
    assert body["net_pay"] is None

    assert client.get("/api/organizations/o1/users/zz/hours?month=3&year=2026").status_code == 404
    assert client.get("/api/organizations/o1/users/u1/hours?month=13&year=2026").status_code == 400


def test_staff_hours_csv_export(client):
    res = client.get("/api/organizations/o1/staff-hours.csv?month=3&year=2026")

    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    assert "payroll_o1_202603.csv" in res.headers["Content-Disposition"]
    rows = list(csv.DictReader(io.StringIO(res.data.decode("utf-8-sig"))))
    assert rows == [
        {
            "user_id": "c1",
            "name": "Coach",
            "total_hours": "2.00",
            "hourly_rate": "30",
            "salary_amount": "-",
            "gross_pay": "60.00",
            "deductions": "Tax: 6.00; Fee: 5.00",
            "net_pay": "49.00",
        }
    ]


def test_staff_hours_year_out_of_range_is_400(client):
    res = client.get("/api/organizations/o1/staff-hours?month=12&year=9999")

    assert res.status_code == 400
    assert res.get_json()["success"] is False
