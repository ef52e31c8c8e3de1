from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.validators import parse_int_or_default


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class LeaveQuota:
    """Yearly leave allocation. A None field means "use the system default"."""

    year: int
    annual_allocated: Optional[int] = None
    casual_allocated: Optional[int] = None
    sick_allocated: Optional[int] = None
    year_start_date: Optional[str] = None

    @classmethod
    def from_api(cls, row: Mapping[str, Any], *, year: int) -> "LeaveQuota":
        return cls(
            year=_optional_int(row.get("Year")) or year,
            annual_allocated=_optional_int(row.get("AnnualAllocated")),
            casual_allocated=_optional_int(row.get("CasualAllocated")),
            sick_allocated=_optional_int(row.get("SickAllocated")),
            year_start_date=(str(row["YearStartDate"])[:10] if row.get("YearStartDate") else None),
        )

    def to_api(self) -> dict:
        return {
            "Year": self.year,
            "AnnualAllocated": self.annual_allocated,
            "CasualAllocated": self.casual_allocated,
            "SickAllocated": self.sick_allocated,
            "YearStartDate": self.year_start_date,
        }


@dataclass(frozen=True)
class LeaveUsage:
    """Read-side aggregate of an employee's leave days in one year."""

    annual_used: int = 0
    casual_used: int = 0
    sick_used: int = 0
    wfh_count: int = 0

    @classmethod
    def from_api(cls, row: Mapping[str, Any]) -> "LeaveUsage":
        return cls(
            annual_used=parse_int_or_default(row.get("AnnualUsed")),
            casual_used=parse_int_or_default(row.get("CasualUsed")),
            sick_used=parse_int_or_default(row.get("SickUsed")),
            wfh_count=parse_int_or_default(row.get("WFHCount")),
        )
