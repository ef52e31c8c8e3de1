from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import quote

from ..core.constants import AVATAR_URL_TEMPLATE


@dataclass(frozen=True)
class Employee:
    """Thực thể miền (domain): Nhân viên (chỉ đọc, do API quản lý)."""

    employee_id: str
    name: str
    department: Optional[str] = None
    role: Optional[str] = None
    photo_url: Optional[str] = None

    @classmethod
    def from_api(cls, row: Mapping[str, Any]) -> "Employee":
        return cls(
            employee_id=str(row["EmployeeID"]),
            name=str(row.get("Name") or ""),
            department=row.get("Department") or None,
            role=row.get("Role") or None,
            photo_url=row.get("PhotoURL") or None,
        )

    @property
    def avatar_url(self) -> str:
        if self.photo_url:
            return self.photo_url
        return AVATAR_URL_TEMPLATE.format(name=quote(self.name, safe=""))

    @property
    def label(self) -> str:
        return f"{self.name} ({self.employee_id})"

    def as_profile(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "name": self.name,
            "department": self.department,
            "role": self.role,
            "photo_url": self.avatar_url,
            "photo_alt": f"{self.name}'s photo",
        }
