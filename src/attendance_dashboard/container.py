from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .api.http_client import HttpAttendanceApi
from .api.repository import AttendanceApi
from .attendance.service import AttendanceService
from .common.preferences import InMemoryPreferenceStore, JsonFilePreferenceStore, PreferenceStore
from .core.constants import (
    DEFAULT_API_TIMEOUT_SECONDS,
    DEFAULT_ITEMS_PER_PAGE,
    DEFAULT_TIMEZONE,
    UNCONFIGURED_API_URL,
)
from .dashboard.service import DashboardService
from .leave.service import LeaveService


@dataclass(frozen=True)
class Container:
    api: AttendanceApi
    preferences: PreferenceStore

    attendance_service: AttendanceService
    leave_service: LeaveService
    dashboard_service: DashboardService


def build_container(*, settings, api: AttendanceApi | None = None, preferences: PreferenceStore | None = None) -> Container:
    base_url = str(getattr(settings, "API_BASE_URL", UNCONFIGURED_API_URL))
    api_configured = bool(base_url) and base_url != UNCONFIGURED_API_URL

    if api is None:
        api = HttpAttendanceApi(
            base_url,
            timeout=float(getattr(settings, "API_TIMEOUT_SECONDS", DEFAULT_API_TIMEOUT_SECONDS)),
        )

    if preferences is None:
        prefs_path = getattr(settings, "PREFERENCES_PATH", "")
        preferences = JsonFilePreferenceStore(Path(prefs_path)) if prefs_path else InMemoryPreferenceStore()

    attendance_service = AttendanceService(api)
    leave_service = LeaveService(api)
    dashboard_service = DashboardService(
        api,
        attendance_service,
        leave_service,
        preferences,
        items_per_page=int(getattr(settings, "ITEMS_PER_PAGE", DEFAULT_ITEMS_PER_PAGE)),
        tz_name=str(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)),
        api_configured=api_configured,
    )

    return Container(
        api=api,
        preferences=preferences,
        attendance_service=attendance_service,
        leave_service=leave_service,
        dashboard_service=dashboard_service,
    )
