from __future__ import annotations

from enum import Enum


class LeaveType(str, Enum):
    """Loại ngày công: NONE là ngày làm việc bình thường, còn lại là ngày nghỉ."""

    NONE = "None"
    ANNUAL = "Annual"
    CASUAL = "Casual"
    SICK = "Sick"


class LeaveKind(str, Enum):
    """Leave kinds that carry a yearly quota."""

    ANNUAL = "Annual"
    CASUAL = "Casual"
    SICK = "Sick"


class WfhFilter(str, Enum):
    ANY = ""
    YES = "true"
    NO = "false"


class SortColumn(str, Enum):
    DATE = "date"
    CLOCK_IN = "clockIn"
    CLOCK_OUT = "clockOut"
    BREAK_MINUTES = "breakMinutes"
    HOURS = "hours"
    LEAVE_TYPE = "leaveType"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class NoticeLevel(str, Enum):
    """Mức độ thông báo hiển thị cho người dùng (toast)."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
