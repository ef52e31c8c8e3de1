from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..attendance.model import AttendanceRecord
from ..employees.model import Employee
from ..leave.model import LeaveQuota, LeaveUsage


class AttendanceApi(Protocol):
    """Remote spreadsheet-backed API owning employees, attendance and leave data.

    Every method raises ``ApiError`` on transport failure or non-success status.
    Getters return None when the response carried no ``data``.
    """

    def list_employees(self) -> Optional[Sequence[Employee]]:
        raise NotImplementedError

    def get_attendance(
        self,
        employee_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def save_attendance(self, record: AttendanceRecord) -> None:
        """Upsert keyed by (employee, date)."""

        raise NotImplementedError

    def delete_attendance(self, work_date: date, employee_id: str) -> None:
        raise NotImplementedError

    def get_leave_quotas(self, year: int) -> Optional[LeaveQuota]:
        raise NotImplementedError

    def save_leave_quotas(self, quota: LeaveQuota) -> None:
        raise NotImplementedError

    def get_leave_usage(self, employee_id: str, year: int) -> Optional[LeaveUsage]:
        raise NotImplementedError

    def perform_yearly_reset(self, next_year: int) -> None:
        raise NotImplementedError
