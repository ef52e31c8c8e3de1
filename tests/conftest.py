from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

import pytest

from attendance_dashboard.attendance.model import AttendanceRecord
from attendance_dashboard.attendance.service import AttendanceService
from attendance_dashboard.common.preferences import InMemoryPreferenceStore
from attendance_dashboard.core.exceptions import ApiStatusError, ApiTransportError
from attendance_dashboard.dashboard.service import DashboardService
from attendance_dashboard.employees.model import Employee
from attendance_dashboard.leave.model import LeaveQuota, LeaveUsage
from attendance_dashboard.leave.service import LeaveService

DHAKA = ZoneInfo("Asia/Dhaka")


class InMemoryAttendanceApi:
    """Stand-in for the remote spreadsheet API."""

    def __init__(self, employees: Optional[list[Employee]] = None):
        self.employees: Optional[list[Employee]] = employees if employees is not None else []
        self.records: dict[tuple[str, date], AttendanceRecord] = {}
        self.quotas: dict[int, LeaveQuota] = {}
        self.usage: dict[tuple[str, int], LeaveUsage] = {}
        self.reset_years: list[int] = []
        self.calls: list[str] = []
        self.fail_on: dict[str, Exception] = {}

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise self.fail_on[name]

    def fail(self, name: str, *, status: Optional[int] = None) -> None:
        if status is None:
            self.fail_on[name] = ApiTransportError(f"Network error: {name} unavailable")
        else:
            self.fail_on[name] = ApiStatusError(status)

    def add(self, employee_id: str, *records: AttendanceRecord) -> None:
        for r in records:
            self.records[(employee_id, r.work_date)] = replace(r, employee_id=employee_id)

    def list_employees(self):
        self._call("list_employees")
        return None if self.employees is None else list(self.employees)

    def get_attendance(self, employee_id, date_from=None, date_to=None):
        self._call("get_attendance")
        out = [
            r
            for (eid, d), r in self.records.items()
            if eid == employee_id and (date_from is None or d >= date_from) and (date_to is None or d <= date_to)
        ]
        return sorted(out, key=lambda r: r.work_date)

    def save_attendance(self, record):
        self._call("save_attendance")
        self.records[(record.employee_id, record.work_date)] = record

    def delete_attendance(self, work_date, employee_id):
        self._call("delete_attendance")
        self.records.pop((employee_id, work_date), None)

    def get_leave_quotas(self, year):
        self._call("get_leave_quotas")
        return self.quotas.get(year)

    def save_leave_quotas(self, quota):
        self._call("save_leave_quotas")
        self.quotas[quota.year] = quota

    def get_leave_usage(self, employee_id, year):
        self._call("get_leave_usage")
        return self.usage.get((employee_id, year))

    def perform_yearly_reset(self, next_year):
        self._call("perform_yearly_reset")
        self.reset_years.append(next_year)
        self.quotas.setdefault(next_year, LeaveQuota(year=next_year))


def rec(day: str, clock_in: Optional[str] = "09:00", clock_out: Optional[str] = "17:00", **kwargs) -> AttendanceRecord:
    y, m, d = (int(p) for p in day.split("-"))
    return AttendanceRecord(work_date=date(y, m, d), clock_in=clock_in, clock_out=clock_out, **kwargs)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 15, 10, 30, tzinfo=DHAKA)


@pytest.fixture
def employees() -> list[Employee]:
    return [
        Employee(employee_id="E001", name="Rahim Uddin", department="Engineering", role="Developer"),
        Employee(employee_id="E002", name="Karim Ahmed", department="Finance", role="Analyst", photo_url="https://cdn.example.com/karim.png"),
    ]


@pytest.fixture
def api(employees) -> InMemoryAttendanceApi:
    return InMemoryAttendanceApi(employees)


@pytest.fixture
def preferences() -> InMemoryPreferenceStore:
    return InMemoryPreferenceStore()


@pytest.fixture
def make_dashboard(api, preferences, fixed_now):
    def _make(*, items_per_page: int = 20, api_configured: bool = True, clock=None) -> DashboardService:
        return DashboardService(
            api,
            AttendanceService(api),
            LeaveService(api),
            preferences,
            items_per_page=items_per_page,
            api_configured=api_configured,
            clock=clock or (lambda: fixed_now),
        )

    return _make
