"""Leave quota / usage reconciliation.

Allocation for a kind resolves in this order: the quota record's field, then
the system default. Usage falls back to zero. Remaining balance is NOT clamped:
over-use shows as a negative number.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.constants import DEFAULT_ANNUAL_QUOTA, DEFAULT_CASUAL_QUOTA, DEFAULT_SICK_QUOTA
from ..core.enums import LeaveKind
from ..attendance.model import AttendanceRecord
from .model import LeaveQuota, LeaveUsage

DEFAULT_QUOTAS: dict[LeaveKind, int] = {
    LeaveKind.ANNUAL: DEFAULT_ANNUAL_QUOTA,
    LeaveKind.CASUAL: DEFAULT_CASUAL_QUOTA,
    LeaveKind.SICK: DEFAULT_SICK_QUOTA,
}


def resolve_allocated(quota: Optional[LeaveQuota], kind: LeaveKind) -> int:
    if quota is not None:
        value = {
            LeaveKind.ANNUAL: quota.annual_allocated,
            LeaveKind.CASUAL: quota.casual_allocated,
            LeaveKind.SICK: quota.sick_allocated,
        }[kind]
        if value is not None:
            return int(value)
    return DEFAULT_QUOTAS[kind]


def resolve_used(usage: Optional[LeaveUsage], kind: LeaveKind) -> int:
    if usage is None:
        return 0
    return {
        LeaveKind.ANNUAL: usage.annual_used,
        LeaveKind.CASUAL: usage.casual_used,
        LeaveKind.SICK: usage.sick_used,
    }[kind]


@dataclass(frozen=True)
class LeaveBalance:
    kind: LeaveKind
    allocated: int
    used: int

    @property
    def remaining(self) -> int:
        return self.allocated - self.used

    @property
    def progress(self) -> float:
        """Fraction of the allocation consumed; may exceed 1.0 on over-use."""
        if self.allocated <= 0:
            return 1.0 if self.used > 0 else 0.0
        return self.used / self.allocated

    def as_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "allocated": self.allocated,
            "used": self.used,
            "remaining": self.remaining,
            "progress_percent": round(self.progress * 100, 2),
        }


def reconcile_balances(quota: Optional[LeaveQuota], usage: Optional[LeaveUsage]) -> list[LeaveBalance]:
    return [
        LeaveBalance(kind=kind, allocated=resolve_allocated(quota, kind), used=resolve_used(usage, kind))
        for kind in LeaveKind
    ]


def wfh_count(usage: Optional[LeaveUsage]) -> int:
    return usage.wfh_count if usage is not None else 0


def summarize_usage(records: Iterable[AttendanceRecord]) -> LeaveUsage:
    """Derive the usage aggregate from one employee-year of records."""
    counts = {kind: 0 for kind in LeaveKind}
    wfh = 0
    for r in records:
        if r.is_leave:
            for kind in LeaveKind:
                if r.leave_type == kind.value:
                    counts[kind] += 1
        elif r.wfh:
            wfh += 1
    return LeaveUsage(
        annual_used=counts[LeaveKind.ANNUAL],
        casual_used=counts[LeaveKind.CASUAL],
        sick_used=counts[LeaveKind.SICK],
        wfh_count=wfh,
    )
