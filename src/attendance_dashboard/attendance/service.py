from __future__ import annotations

import csv
import io
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ..api.repository import AttendanceApi
from ..common.datetime_utils import format_hhmm, format_iso_date, format_time, last_n_days, parse_iso_date
from ..common.validators import parse_flag, parse_int_or_default, require_non_empty
from ..core.constants import HOURS_CHART_DAYS, HOURS_CHART_MAX, LONG_DAY_HOURS
from ..core.enums import LeaveType
from ..core.exceptions import ValidationError
from .hours import is_valid_time
from .model import AttendanceDraft, AttendanceRecord

CSV_HEADER = ["Date", "Clock In", "Clock Out", "Break (min)", "Total Hours", "WFH", "Leave Type", "Notes"]

_LEAVE_TYPES = {t.value for t in LeaveType}


def find_by_date(records: Sequence[AttendanceRecord], work_date: date) -> Optional[AttendanceRecord]:
    for r in records:
        if r.work_date == work_date:
            return r
    return None


class AttendanceService:
    """Attendance entry use-cases and the read-models shown on the dashboard.

    Input validation happens here, before anything reaches the API.
    """

    def __init__(self, api: AttendanceApi):
        self._api = api

    @staticmethod
    def _parse_date(value: str) -> date:
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError("Invalid date (YYYY-MM-DD)")

    def build_record(self, employee_id: str, form: Mapping[str, Any]) -> AttendanceRecord:
        work_date_s = str(form.get("date") or "").strip()
        clock_in = str(form.get("clock_in") or "").strip()
        clock_out = str(form.get("clock_out") or "").strip()
        break_minutes = parse_int_or_default(form.get("break_minutes"))
        leave_type = str(form.get("leave_type") or LeaveType.NONE.value).strip()
        notes = str(form.get("notes") or "").strip()

        if not work_date_s or not clock_in or not clock_out:
            raise ValidationError("Please fill all required fields")
        if not is_valid_time(clock_in) or not is_valid_time(clock_out):
            raise ValidationError("Invalid time format")
        if break_minutes < 0:
            raise ValidationError("Break minutes cannot be negative")
        if leave_type not in _LEAVE_TYPES:
            raise ValidationError("Invalid leave type")

        return AttendanceRecord(
            work_date=self._parse_date(work_date_s),
            clock_in=clock_in,
            clock_out=clock_out,
            break_minutes=break_minutes,
            wfh=parse_flag(form.get("wfh")) if leave_type == LeaveType.NONE.value else False,
            leave_type=leave_type,
            notes=notes or None,
            employee_id=employee_id,
        )

    def save(self, employee_id: str, form: Mapping[str, Any]) -> AttendanceRecord:
        record = self.build_record(employee_id, form)
        self._api.save_attendance(record)
        return record

    def build_leave_record(self, employee_id: str, form: Mapping[str, Any]) -> AttendanceRecord:
        leave_type = str(form.get("leave_type") or "").strip()
        work_date_s = str(form.get("date") or "").strip()
        reason = str(form.get("reason") or "").strip()

        if not leave_type or not work_date_s or not reason:
            raise ValidationError("Please fill all fields")
        if leave_type == LeaveType.NONE.value or leave_type not in _LEAVE_TYPES:
            raise ValidationError("Invalid leave type")

        # Leave days are stored as zero-length placeholder shifts.
        return AttendanceRecord(
            work_date=self._parse_date(work_date_s),
            clock_in="00:00",
            clock_out="00:00",
            break_minutes=0,
            wfh=False,
            leave_type=leave_type,
            notes=reason,
            employee_id=employee_id,
        )

    def request_leave(self, employee_id: str, form: Mapping[str, Any]) -> AttendanceRecord:
        record = self.build_leave_record(employee_id, form)
        self._api.save_attendance(record)
        return record

    def delete(self, employee_id: str, work_date: str) -> None:
        self._api.delete_attendance(self._parse_date(require_non_empty(work_date, "Date is required")), employee_id)

    # Drafts for the attendance form
    def new_draft(self, *, today: date) -> AttendanceDraft:
        return AttendanceDraft(work_date=format_iso_date(today))

    def clock_in_draft(self, *, now: datetime) -> AttendanceDraft:
        today = format_iso_date(now.date())
        return AttendanceDraft(work_date=today, clock_in=format_hhmm(now), clock_out="", editing=today)

    def clock_out_draft(self, records: Sequence[AttendanceRecord], *, now: datetime) -> Optional[AttendanceDraft]:
        """None when there is no record for today yet (nothing to clock out of)."""
        record = find_by_date(records, now.date())
        if record is None:
            return None
        return AttendanceDraft.from_record(record, clock_out=format_hhmm(now))

    def edit_draft(self, records: Sequence[AttendanceRecord], work_date: str) -> Optional[AttendanceDraft]:
        record = find_by_date(records, self._parse_date(work_date))
        if record is None:
            return None
        return AttendanceDraft.from_record(record)

    # Read-models
    def today_status(self, records: Sequence[AttendanceRecord], *, today: date) -> dict:
        record = find_by_date(records, today)
        if record is None:
            return {"clock_in": "--:--", "clock_out": "--:--", "hours": "0.00h", "wfh": "No"}
        return {
            "clock_in": format_time(record.clock_in),
            "clock_out": format_time(record.clock_out),
            "hours": f"{record.hours:.2f}h",
            "wfh": "Yes" if record.wfh else "No",
        }

    def hours_chart(self, records: Sequence[AttendanceRecord], *, today: date) -> dict:
        by_date = {r.work_date: r for r in records}
        labels: list[str] = []
        values: list[float] = []
        for day in last_n_days(today, HOURS_CHART_DAYS):
            labels.append(day.strftime("%m-%d"))
            record = by_date.get(day)
            values.append(record.hours if record and not record.is_leave else 0.0)
        return {"labels": labels, "values": values, "y_max": HOURS_CHART_MAX}

    def leave_history(self, records: Sequence[AttendanceRecord]) -> list[dict]:
        return [
            {"date": format_iso_date(r.work_date), "leave_type": r.leave_type, "notes": r.notes or "-"}
            for r in records
            if r.is_leave
        ]

    def table_row(self, record: AttendanceRecord) -> dict:
        hours = record.hours
        return {
            "date": format_iso_date(record.work_date),
            "clock_in": format_time(record.clock_in),
            "clock_out": format_time(record.clock_out),
            "break_minutes": record.break_minutes,
            "hours": f"{hours:.2f}",
            "long_day": hours > LONG_DAY_HOURS,
            "wfh": record.wfh,
            "leave_type": record.leave_type,
            "notes": record.notes or "-",
        }

    def export_csv(self, records: Sequence[AttendanceRecord]) -> str:
        out = io.StringIO()
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for r in records:
            writer.writerow(
                [
                    format_iso_date(r.work_date),
                    r.clock_in or "",
                    r.clock_out or "",
                    r.break_minutes,
                    f"{r.hours:.2f}",
                    "Yes" if r.wfh else "No",
                    r.leave_type,
                    r.notes or "",
                ]
            )
        return out.getvalue()

    @staticmethod
    def export_filename(employee_id: str, *, now: datetime) -> str:
        return f"attendance_{employee_id}_{int(now.timestamp() * 1000)}.csv"
