from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

import requests

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import format_iso_date
from ..core.constants import DEFAULT_API_TIMEOUT_SECONDS
from ..core.exceptions import ApiStatusError, ApiTransportError
from ..employees.model import Employee
from ..leave.model import LeaveQuota, LeaveUsage
from .repository import AttendanceApi

logger = logging.getLogger(__name__)


class HttpAttendanceApi(AttendanceApi):
    """JSON-over-HTTP client for the Apps Script web app.

    Responses are objects whose ``data`` member carries the payload.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_API_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def _request(self, endpoint: str, method: str = "GET", data: Optional[dict] = None) -> dict:
        url = f"{self._base_url}{endpoint}"
        try:
            if method == "GET":
                res = self._session.get(url, params=data, headers={"Accept": "application/json"}, timeout=self._timeout)
            else:
                res = self._session.post(url, json=data, headers={"Content-Type": "application/json"}, timeout=self._timeout)
        except requests.RequestException as e:
            logger.error("API request failed", extra={"endpoint": endpoint, "method": method, "error": str(e)})
            raise ApiTransportError(f"Network error: {e}") from e

        if not res.ok:
            logger.error("API request failed", extra={"endpoint": endpoint, "method": method, "status": res.status_code})
            raise ApiStatusError(res.status_code)

        try:
            body = res.json()
        except ValueError as e:
            logger.error("API response is not JSON", extra={"endpoint": endpoint, "method": method})
            raise ApiTransportError("Invalid response from server") from e

        if not isinstance(body, dict):
            raise ApiTransportError("Invalid response from server")
        return body

    @staticmethod
    def _rows(body: dict) -> Optional[list[dict]]:
        data = body.get("data")
        if data is None:
            return None
        if not isinstance(data, list):
            raise ApiTransportError("Invalid response from server")
        return [row for row in data if isinstance(row, dict)]

    # Employees
    def list_employees(self) -> Optional[Sequence[Employee]]:
        rows = self._rows(self._request("/employees"))
        if rows is None:
            return None
        return [Employee.from_api(r) for r in rows if r.get("EmployeeID") not in (None, "")]

    # Attendance
    def get_attendance(
        self,
        employee_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        params: dict[str, Any] = {"employeeId": employee_id}
        if date_from:
            params["from"] = format_iso_date(date_from)
        if date_to:
            params["to"] = format_iso_date(date_to)

        rows = self._rows(self._request("/attendance", "GET", params)) or []
        records: list[AttendanceRecord] = []
        for r in rows:
            try:
                records.append(AttendanceRecord.from_api(r))
            except ValueError:
                # blank or malformed spreadsheet rows
                logger.warning("skipping attendance row without a valid date", extra={"row": r})
        return records

    def save_attendance(self, record: AttendanceRecord) -> None:
        self._request("/attendance", "POST", record.to_api())

    def delete_attendance(self, work_date: date, employee_id: str) -> None:
        self._request("/attendance/delete", "POST", {"date": format_iso_date(work_date), "employeeId": employee_id})

    # Leave
    def get_leave_quotas(self, year: int) -> Optional[LeaveQuota]:
        data = self._request("/leave/quotas", "GET", {"year": year}).get("data")
        if not isinstance(data, dict):
            return None
        return LeaveQuota.from_api(data, year=year)

    def save_leave_quotas(self, quota: LeaveQuota) -> None:
        self._request("/leave/quotas", "POST", quota.to_api())

    def get_leave_usage(self, employee_id: str, year: int) -> Optional[LeaveUsage]:
        data = self._request("/leave/usage", "GET", {"employeeId": employee_id, "year": year}).get("data")
        if not isinstance(data, dict):
            return None
        return LeaveUsage.from_api(data)

    # Settings
    def perform_yearly_reset(self, next_year: int) -> None:
        self._request("/settings/year-reset", "POST", {"year": next_year})
