"""Filter and sort pipeline for the attendance history table."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..common.validators import parse_optional_float
from ..core.enums import SortColumn, SortDirection, WfhFilter
from ..core.exceptions import ValidationError
from .model import AttendanceRecord


def _parse_form_date(value: Any, field_name: str) -> Optional[date]:
    text = str(value).strip() if value is not None else ""
    if not text:
        return None
    try:
        return parse_iso_date(text)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


@dataclass(frozen=True)
class FilterCriteria:
    """Conjunctive filter set; a None field places no constraint."""

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    wfh: WfhFilter = WfhFilter.ANY
    leave_type: Optional[str] = None
    min_hours: Optional[float] = None
    max_hours: Optional[float] = None

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "FilterCriteria":
        """Build criteria from filter form values (camelCase keys, ``""`` = unset)."""

        raw = form.get("wfh")
        # JSON clients send a real boolean
        if isinstance(raw, bool):
            wfh_raw = WfhFilter.YES.value if raw else WfhFilter.NO.value
        else:
            wfh_raw = str(raw or "").strip().lower()
        try:
            wfh = WfhFilter(wfh_raw)
        except ValueError:
            raise ValidationError("WFH filter must be empty, 'true' or 'false'")

        leave_type = str(form.get("leaveType") or "").strip() or None

        return cls(
            date_from=_parse_form_date(form.get("dateFrom"), "Date from"),
            date_to=_parse_form_date(form.get("dateTo"), "Date to"),
            wfh=wfh,
            leave_type=leave_type,
            min_hours=parse_optional_float(form.get("minHours"), "Min hours"),
            max_hours=parse_optional_float(form.get("maxHours"), "Max hours"),
        )

    def to_form(self) -> dict:
        return {
            "dateFrom": format_iso_date(self.date_from) if self.date_from else "",
            "dateTo": format_iso_date(self.date_to) if self.date_to else "",
            "wfh": self.wfh.value,
            "leaveType": self.leave_type or "",
            "minHours": "" if self.min_hours is None else str(self.min_hours),
            "maxHours": "" if self.max_hours is None else str(self.max_hours),
        }

    def matches(self, record: AttendanceRecord) -> bool:
        if self.date_from is not None and record.work_date < self.date_from:
            return False
        if self.date_to is not None and record.work_date > self.date_to:
            return False
        if self.wfh is not WfhFilter.ANY and record.wfh != (self.wfh is WfhFilter.YES):
            return False
        if self.leave_type and record.leave_type != self.leave_type:
            return False
        if self.min_hours is not None or self.max_hours is not None:
            hours = record.hours
            if self.min_hours is not None and hours < self.min_hours:
                return False
            if self.max_hours is not None and hours > self.max_hours:
                return False
        return True


@dataclass(frozen=True)
class SortSpec:
    column: SortColumn = SortColumn.DATE
    direction: SortDirection = SortDirection.DESC

    def toggled(self, column: SortColumn) -> "SortSpec":
        """Header click: same column flips direction, a new column starts descending."""
        if column == self.column:
            flipped = SortDirection.ASC if self.direction == SortDirection.DESC else SortDirection.DESC
            return replace(self, direction=flipped)
        return SortSpec(column=column, direction=SortDirection.DESC)


def apply_filters(records: Iterable[AttendanceRecord], criteria: FilterCriteria) -> list[AttendanceRecord]:
    """Keep records matching every criterion; input order is preserved."""
    return [r for r in records if criteria.matches(r)]


def _sort_value(record: AttendanceRecord, column: SortColumn):
    if column == SortColumn.HOURS:
        return record.hours
    if column == SortColumn.CLOCK_IN:
        return record.clock_in or ""
    if column == SortColumn.CLOCK_OUT:
        return record.clock_out or ""
    if column == SortColumn.BREAK_MINUTES:
        return record.break_minutes
    if column == SortColumn.LEAVE_TYPE:
        return record.leave_type
    return record.work_date


def sort_records(records: Sequence[AttendanceRecord], spec: SortSpec) -> list[AttendanceRecord]:
    """Sort by ``spec.column``; equal keys fall back to the date in the same direction."""
    return sorted(
        records,
        key=lambda r: (_sort_value(r, spec.column), r.work_date),
        reverse=spec.direction == SortDirection.DESC,
    )


def filter_and_sort(
    records: Iterable[AttendanceRecord],
    criteria: FilterCriteria,
    spec: SortSpec,
) -> list[AttendanceRecord]:
    return sort_records(apply_filters(records, criteria), spec)
