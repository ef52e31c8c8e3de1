import pytest

from attendance_dashboard.attendance.service import AttendanceService
from attendance_dashboard.config import testing as testing_settings
from attendance_dashboard.container import Container, build_container
from attendance_dashboard.leave.service import LeaveService
from attendance_dashboard.main import create_app

from conftest import rec


@pytest.fixture
def client(monkeypatch, api, preferences, make_dashboard):
    monkeypatch.setenv("APP_ENV", "testing")
    api.add("E001", rec("2025-03-14"), rec("2025-03-13", "08:00", "19:00", wfh=True))
    dashboard = make_dashboard()
    container = Container(
        api=api,
        preferences=preferences,
        attendance_service=AttendanceService(api),
        leave_service=LeaveService(api),
        dashboard_service=dashboard,
    )
    app = create_app(container)
    return app.test_client()


def test_dashboard_payload(client):
    res = client.get("/api/dashboard")
    body = res.get_json()

    assert res.status_code == 200
    assert body["employee_id"] == "E001"
    assert body["profile"]["name"] == "Rahim Uddin"
    assert body["leave_summary"]["wfh_count"] == 1


def test_select_unknown_employee(client):
    res = client.post("/api/employees/select", json={"employee_id": "nobody"})
    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_attendance_table(client):
    body = client.get("/api/attendance").get_json()
    assert body["page_info"] == "Page 1 of 1"
    assert [r["date"] for r in body["rows"]] == ["2025-03-14", "2025-03-13"]
    assert body["rows"][1]["long_day"] is True


def test_save_validation_error_is_400(client):
    res = client.post("/api/attendance", json={"date": "2025-03-15", "clock_in": "", "clock_out": "17:00"})
    assert res.status_code == 400
    assert res.get_json()["message"] == "Please fill all required fields"


def test_save_api_failure_is_502(client, api):
    api.fail("save_attendance", status=500)
    res = client.post("/api/attendance", json={"date": "2025-03-15", "clock_in": "09:00", "clock_out": "17:00"})
    assert res.status_code == 502
    assert res.get_json()["level"] == "error"


def test_filters_sort_and_page(client):
    body = client.post("/api/attendance/filters", json={"wfh": "true"}).get_json()
    assert [r["date"] for r in body["rows"]] == ["2025-03-13"]

    client.post("/api/attendance/filters/clear")
    body = client.post("/api/attendance/sort", json={"column": "hours", "direction": "asc"}).get_json()
    assert [r["date"] for r in body["rows"]] == ["2025-03-14", "2025-03-13"]
    assert body["sort"] == {"column": "hours", "direction": "asc"}

    assert client.post("/api/attendance/sort", json={"column": "hours", "direction": "up"}).status_code == 400
    assert client.post("/api/attendance/page", json={"page": "x"}).status_code == 400
    assert client.post("/api/attendance/page", json={"move": "next"}).get_json()["page"] == 1


def test_draft_clock_out_without_record(client):
    res = client.get("/api/attendance/draft?action=clock-out")
    assert res.status_code == 400
    assert res.get_json()["message"] == "Please clock in first!"


def test_export_csv(client):
    res = client.get("/api/attendance/export.csv")
    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    assert "attachment; filename=attendance_E001_" in res.headers["Content-Disposition"]
    assert res.data.decode("utf-8-sig").splitlines()[0].startswith("Date,Clock In")


def test_request_leave_and_settings(client):
    res = client.post("/api/leaves/request", json={"leave_type": "Annual", "date": "2025-03-20", "reason": "wedding"})
    assert res.status_code == 200

    leaves = client.get("/api/leaves").get_json()
    assert leaves["history"][0]["notes"] == "wedding"
    assert leaves["summary"]["balances"][0]["used"] == 1

    res = client.post("/api/settings/yearly-reset")
    assert res.get_json()["year"] == 2026
    assert client.get("/api/settings").get_json()["year_start_date"] == "2026-01-01"


def test_test_connection(client):
    assert client.post("/api/settings/test-connection").get_json()["message"] == "Connection successful!"


def test_build_container_uses_settings(api):
    container = build_container(settings=testing_settings, api=api)
    notices = container.dashboard_service.start()
    assert notices == []
    assert container.dashboard_service.state.employee_id == "E001"


def test_wfh_false_filter_from_json_boolean(client):
    body = client.post("/api/attendance/filters", json={"wfh": False}).get_json()
    assert [r["date"] for r in body["rows"]] == ["2025-03-14"]
    assert body["filters"]["wfh"] == "false"


@pytest.mark.parametrize("year", [0, 10000])
def test_out_of_range_year_is_rejected(client, year):
    res = client.post("/api/year", json={"year": year})
    assert res.status_code == 400
    assert res.get_json()["message"] == "Invalid year"
    assert client.get("/api/dashboard").get_json()["year"] == 2025
