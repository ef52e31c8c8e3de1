from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..common.validators import parse_flag, parse_int_or_default
from ..core.enums import LeaveType
from .hours import compute_hours, normalize_clock


def _normalize_leave_type(value: Any) -> str:
    text = str(value).strip() if value is not None else ""
    return text or LeaveType.NONE.value


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi chấm công của một ngày.

    ``work_date`` is the natural key: one record per employee per day.
    A record with a leave type other than ``None`` is a leave day, even though
    leave requests are stored with placeholder ``00:00`` clock times.
    """

    work_date: date
    clock_in: Optional[str] = None
    clock_out: Optional[str] = None
    break_minutes: int = 0
    wfh: bool = False
    leave_type: str = LeaveType.NONE.value
    notes: Optional[str] = None
    employee_id: Optional[str] = None

    @property
    def is_leave(self) -> bool:
        return self.leave_type != LeaveType.NONE.value

    @property
    def hours(self) -> float:
        return compute_hours(self.clock_in, self.clock_out, self.break_minutes)

    @classmethod
    def from_api(cls, row: Mapping[str, Any]) -> "AttendanceRecord":
        raw_date = str(row.get("Date") or "").strip()
        leave_type = _normalize_leave_type(row.get("LeaveType"))
        return cls(
            work_date=parse_iso_date(raw_date[:10]),
            clock_in=normalize_clock(row.get("ClockIn")),
            clock_out=normalize_clock(row.get("ClockOut")),
            break_minutes=max(parse_int_or_default(row.get("BreakMinutes")), 0),
            wfh=parse_flag(row.get("WFH")) and leave_type == LeaveType.NONE.value,
            leave_type=leave_type,
            notes=(str(row.get("Notes")) if row.get("Notes") else None),
            employee_id=(str(row["EmployeeID"]) if row.get("EmployeeID") is not None else None),
        )

    def to_api(self) -> dict:
        return {
            "Date": format_iso_date(self.work_date),
            "EmployeeID": self.employee_id,
            "ClockIn": self.clock_in,
            "ClockOut": self.clock_out,
            "BreakMinutes": int(self.break_minutes),
            "WFH": bool(self.wfh) if not self.is_leave else False,
            "LeaveType": self.leave_type,
            "Notes": self.notes or "",
        }


@dataclass(frozen=True)
class AttendanceDraft:
    """Prefilled attendance form (quick actions / edit)."""

    work_date: str
    clock_in: str = ""
    clock_out: str = ""
    break_minutes: int = 0
    wfh: bool = False
    leave_type: str = LeaveType.NONE.value
    notes: str = ""
    # date of the record being edited; empty for a new entry
    editing: str = ""

    @classmethod
    def from_record(cls, record: AttendanceRecord, **overrides) -> "AttendanceDraft":
        values = {
            "work_date": format_iso_date(record.work_date),
            "clock_in": record.clock_in or "",
            "clock_out": record.clock_out or "",
            "break_minutes": record.break_minutes,
            "wfh": record.wfh,
            "leave_type": record.leave_type,
            "notes": record.notes or "",
            "editing": format_iso_date(record.work_date),
        }
        values.update(overrides)
        return cls(**values)

    def as_dict(self) -> dict:
        return {
            "date": self.work_date,
            "clock_in": self.clock_in,
            "clock_out": self.clock_out,
            "break_minutes": self.break_minutes,
            "wfh": self.wfh,
            "leave_type": self.leave_type,
            "notes": self.notes,
            "editing": self.editing,
        }
