from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..attendance.filters import FilterCriteria, SortSpec
from ..attendance.model import AttendanceRecord
from ..core.enums import NoticeLevel
from ..employees.model import Employee
from ..leave.model import LeaveQuota, LeaveUsage


@dataclass(frozen=True)
class Notice:
    """Single user-visible notification (toast)."""

    level: NoticeLevel
    message: str
    # the remote API failed (transport or status), as opposed to bad input
    from_api: bool = False

    @property
    def ok(self) -> bool:
        return self.level in {NoticeLevel.SUCCESS, NoticeLevel.INFO}

    def as_dict(self) -> dict:
        return {"success": self.ok, "level": self.level.value, "message": self.message}


@dataclass
class DashboardState:
    """In-memory snapshot behind the dashboard.

    Only ``DashboardService`` writes to it; ``view`` is always
    ``filter_and_sort(records, filters, sort)`` of the current fields.
    """

    year: int
    employees: list[Employee] = field(default_factory=list)
    employee_id: Optional[str] = None
    records: list[AttendanceRecord] = field(default_factory=list)
    view: list[AttendanceRecord] = field(default_factory=list)
    filters: FilterCriteria = field(default_factory=FilterCriteria)
    sort: SortSpec = field(default_factory=SortSpec)
    page: int = 1
    quota: Optional[LeaveQuota] = None
    usage: Optional[LeaveUsage] = None
    pending_requests: int = 0

    @property
    def busy(self) -> bool:
        return self.pending_requests > 0

    @property
    def employee(self) -> Optional[Employee]:
        for e in self.employees:
            if e.employee_id == self.employee_id:
                return e
        return None
