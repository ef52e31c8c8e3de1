from __future__ import annotations

from typing import Any, Mapping, Optional

from ..api.repository import AttendanceApi
from ..common.datetime_utils import parse_iso_date
from ..common.validators import parse_required_int
from ..core.enums import LeaveKind
from ..core.exceptions import ValidationError
from .balance import resolve_allocated
from .model import LeaveQuota


def default_year_start(year: int) -> str:
    return f"{year}-01-01"


class LeaveService:
    """Quota administration: allocations, year start date, yearly reset."""

    def __init__(self, api: AttendanceApi):
        self._api = api

    @staticmethod
    def _require_date(value: Any) -> str:
        text = str(value or "").strip()
        try:
            parse_iso_date(text)
        except ValueError:
            raise ValidationError("Year start date must be a date (YYYY-MM-DD)")
        return text

    @staticmethod
    def _allocation(form: Mapping[str, Any], key: str, label: str) -> int:
        value = parse_required_int(form.get(key), label)
        if value < 0:
            raise ValidationError(f"{label} cannot be negative")
        return value

    def build_quota(self, year: int, form: Mapping[str, Any]) -> LeaveQuota:
        return LeaveQuota(
            year=int(year),
            annual_allocated=self._allocation(form, "annual", "Annual leave"),
            casual_allocated=self._allocation(form, "casual", "Casual leave"),
            sick_allocated=self._allocation(form, "sick", "Sick leave"),
            year_start_date=self._require_date(form.get("year_start_date") or default_year_start(year)),
        )

    def save_quotas(self, year: int, form: Mapping[str, Any]) -> LeaveQuota:
        quota = self.build_quota(year, form)
        self._api.save_leave_quotas(quota)
        return quota

    def update_year_start(self, year: int, current: Optional[LeaveQuota], year_start_date: str) -> LeaveQuota:
        """Change only the start date; allocations keep their current (or default) values."""
        quota = LeaveQuota(
            year=int(year),
            annual_allocated=resolve_allocated(current, LeaveKind.ANNUAL),
            casual_allocated=resolve_allocated(current, LeaveKind.CASUAL),
            sick_allocated=resolve_allocated(current, LeaveKind.SICK),
            year_start_date=self._require_date(year_start_date),
        )
        self._api.save_leave_quotas(quota)
        return quota

    def yearly_reset(self, current_year: int) -> int:
        next_year = int(current_year) + 1
        self._api.perform_yearly_reset(next_year)
        return next_year

    def settings_view(self, year: int, quota: Optional[LeaveQuota]) -> dict:
        return {
            "year": year,
            "annual": resolve_allocated(quota, LeaveKind.ANNUAL),
            "casual": resolve_allocated(quota, LeaveKind.CASUAL),
            "sick": resolve_allocated(quota, LeaveKind.SICK),
            "year_start_date": (quota.year_start_date if quota and quota.year_start_date else default_year_start(year)),
        }
