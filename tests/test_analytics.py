"""
Tests des endpoints /analytics et /reports
"""

from datetime import date, datetime

import pytest
from sqlalchemy.exc import OperationalError

from app.services.metrics_service import recompute_daily_snapshot

RANGE = {"start_date": "2025-03-01", "end_date": "2025-03-31"}


@pytest.fixture
def march(db, test_user, make_task):
    """Trois jours de données en mars 2025 (scores 40, 100, 0)"""
    make_task(datetime(2025, 3, 3, 9), status="completed", actual_duration=30, category="work", priority="high")
    make_task(datetime(2025, 3, 3, 10), status="completed", actual_duration=15, category="health", priority="low")
    for hour in (11, 12, 13):
        make_task(datetime(2025, 3, 3, hour), category="work")
    make_task(datetime(2025, 3, 4, 9), status="completed", actual_duration=60, category="learning", priority="urgent")
    make_task(datetime(2025, 3, 5, 9), status="cancelled", category="personal")

    for day in (3, 4, 5):
        recompute_daily_snapshot(db, test_user.id, date(2025, 3, day))


# ========== DASHBOARD ==========

def test_dashboard(client, auth_headers, march):
    response = client.get("/analytics/dashboard", headers=auth_headers, params=RANGE)

    assert response.status_code == 200
    data = response.json()

    assert [d["date"] for d in data["dailyProductivity"]] == ["2025-03-03", "2025-03-04", "2025-03-05"]
    assert data["dailyProductivity"][0]["completionRate"] == 40
    assert data["taskBreakdown"]["byStatus"] == {"pending": 3, "inProgress": 0, "completed": 3, "cancelled": 1}
    assert data["taskBreakdown"]["byPriority"]["urgent"] == 1
    assert data["taskBreakdown"]["byCategory"]["work"] == 4
    assert data["timeAnalysis"]["totalWorkTime"] == 105
    assert data["timeAnalysis"]["averageWorkTimePerDay"] == 35
    assert data["categoryTimeBreakdown"] == {"work": 30, "personal": 0, "health": 15, "learning": 60, "other": 0}
    assert data["trends"]["productivityTrend"][1] == {"date": "2025-03-04", "score": 100}
    assert data["trends"]["completionTrend"][0] == {"date": "2025-03-03", "completed": 2, "planned": 5}
    assert data["summary"]["totalDays"] == 3
    assert data["summary"]["bestDay"]["date"][:10] == "2025-03-04"


def test_dashboard_empty_range(client, auth_headers, march):
    data = client.get(
        "/analytics/dashboard",
        headers=auth_headers,
        params={"start_date": "2024-01-01", "end_date": "2024-01-31"}
    ).json()

    assert data["dailyProductivity"] == []
    assert data["summary"]["overallProductivityScore"] == 0
    assert data["summary"]["bestDay"] is None


def test_dashboard_invalid_range(client, auth_headers):
    response = client.get("/analytics/dashboard", headers=auth_headers, params={"start_date": "hier?"})
    assert response.status_code == 400


# ========== EXPORT ==========

def test_export_csv(client, auth_headers, march):
    response = client.get("/analytics/export", headers=auth_headers, params={"format": "csv", **RANGE})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment; filename=productivity_export_" in response.headers["content-disposition"]

    lines = response.text.splitlines()
    assert len(lines) == 4
    assert lines[0].startswith("Date,Tasks Completed,Tasks Planned,Productivity Score")
    assert lines[1] == "2025-03-03,2,5,40,45,0,0,30,0,15,0,0"


def test_export_json(client, auth_headers, march):
    response = client.get("/analytics/export", headers=auth_headers, params=RANGE)

    assert response.status_code == 200
    payload = response.json()
    assert payload["dateRange"] == {"start": "2025-03-01", "end": "2025-03-31"}
    assert "exportDate" in payload
    assert [d["date"] for d in payload["data"]] == ["2025-03-03", "2025-03-04", "2025-03-05"]
    assert payload["data"][1]["categoryBreakdown"]["learning"] == 60


def test_export_unknown_format(client, auth_headers):
    response = client.get("/analytics/export", headers=auth_headers, params={"format": "xlsx"})
    assert response.status_code == 422


def test_store_failure_reports_aggregation_failed(client, auth_headers, monkeypatch):
    import app.services.stats_service as stats_service

    def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("db down"))

    monkeypatch.setattr(stats_service, "find_snapshots", broken)

    response = client.get("/analytics/dashboard", headers=auth_headers, params=RANGE)

    assert response.status_code == 500
    assert response.json() == {"detail": "Aggregation failed"}


# ========== REPORTS ==========

def test_report_summary(client, auth_headers, march):
    response = client.get("/reports/summary", headers=auth_headers, params=RANGE)

    assert response.status_code == 200
    data = response.json()
    assert data["dateRange"] == {"start": "2025-03-01", "end": "2025-03-31"}
    assert data["totalTasksPlanned"] == 7
    assert data["totalTasksCompleted"] == 3
    assert data["completionRate"] == pytest.approx(300 / 7)
    assert data["totalWorkTime"] == 105
    assert data["averageProductivityScore"] == pytest.approx(140 / 3)
    assert data["categoryBreakdown"]["personal"] == 1
    assert data["statusBreakdown"]["cancelled"] == 1


def test_report_summary_requires_auth(client):
    assert client.get("/reports/summary").status_code == 401
