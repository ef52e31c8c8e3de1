from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Iterator, Mapping, Optional

from ..api.repository import AttendanceApi
from ..attendance.filters import FilterCriteria, SortSpec, filter_and_sort
from ..attendance.model import AttendanceDraft, AttendanceRecord
from ..attendance.pagination import Page, paginate, total_pages
from ..attendance.service import AttendanceService
from ..common.datetime_utils import format_clock, now_local, year_bounds
from ..common.preferences import PreferenceStore
from ..core.constants import DEFAULT_ITEMS_PER_PAGE, DEFAULT_TIMEZONE, PREF_EMPLOYEE_ID, PREF_FILTERS
from ..core.enums import LeaveKind, NoticeLevel, SortColumn
from ..core.exceptions import ApiError, ValidationError
from ..leave.balance import reconcile_balances, resolve_allocated, summarize_usage, wfh_count
from ..leave.model import LeaveQuota, LeaveUsage
from ..leave.service import LeaveService
from .state import DashboardState, Notice

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Loaded:
    employee_id: str
    year: int
    records: list[AttendanceRecord]
    quota: Optional[LeaveQuota]
    usage: Optional[LeaveUsage]


class DashboardService:
    """Owns the dashboard snapshot; every state change goes through here.

    Refreshes fetch records, quotas and usage together and commit them in one
    step. Each refresh is tagged with a request id and a response that is no
    longer the latest is dropped, so a slow old request cannot overwrite newer
    data. A failed refresh leaves the previous snapshot untouched.
    """

    def __init__(
        self,
        api: AttendanceApi,
        attendance: AttendanceService,
        leave: LeaveService,
        preferences: PreferenceStore,
        *,
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
        tz_name: str = DEFAULT_TIMEZONE,
        api_configured: bool = True,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._api = api
        self._attendance = attendance
        self._leave = leave
        self._preferences = preferences
        self._items_per_page = int(items_per_page)
        self._api_configured = api_configured
        self._clock = clock or (lambda: now_local(tz_name))

        self._lock = threading.RLock()
        self._latest_request_id = 0
        self._state = DashboardState(year=self._clock().year)
        self._restore_filters()

    @property
    def state(self) -> DashboardState:
        return self._state

    # Internal helpers
    def _restore_filters(self) -> None:
        saved = self._preferences.load(PREF_FILTERS)
        if not isinstance(saved, dict):
            return
        try:
            self._state.filters = FilterCriteria.from_form(saved)
        except ValidationError:
            logger.warning("ignoring unreadable saved filters", extra={"saved": saved})

    def _recompute_view(self) -> None:
        s = self._state
        s.view = filter_and_sort(s.records, s.filters, s.sort)
        s.page = 1

    @contextmanager
    def _busy(self) -> Iterator[None]:
        with self._lock:
            self._state.pending_requests += 1
        try:
            yield
        finally:
            with self._lock:
                self._state.pending_requests -= 1

    def _fetch(self, employee_id: str, year: int) -> _Loaded:
        start, end = year_bounds(year)
        records = list(self._api.get_attendance(employee_id, start, end))
        quota = self._api.get_leave_quotas(year)
        usage = self._api.get_leave_usage(employee_id, year)
        return _Loaded(employee_id=employee_id, year=year, records=records, quota=quota, usage=usage)

    def _refresh(self, employee_id: str, year: int) -> bool:
        """Fetch and commit; False when a newer refresh superseded this one."""
        with self._lock:
            self._latest_request_id += 1
            request_id = self._latest_request_id

        logger.info("refreshing employee data", extra={"employee_id": employee_id, "year": year, "request_id": request_id})
        with self._busy():
            loaded = self._fetch(employee_id, year)

        with self._lock:
            if request_id != self._latest_request_id:
                logger.info("dropping stale response", extra={"request_id": request_id})
                return False
            s = self._state
            s.employee_id = loaded.employee_id
            s.year = loaded.year
            s.records = loaded.records
            s.quota = loaded.quota
            s.usage = loaded.usage if loaded.usage is not None else summarize_usage(loaded.records)
            self._recompute_view()
        return True

    def _require_employee(self) -> Optional[Notice]:
        if not self._state.employee_id:
            return Notice(NoticeLevel.WARNING, "Please select an employee first")
        return None

    # Loading
    def start(self) -> list[Notice]:
        notices: list[Notice] = []
        if not self._api_configured:
            notices.append(Notice(NoticeLevel.WARNING, "Please configure your Google Apps Script URL (API_BASE_URL)"))
        failure = self.load_employees()
        if failure:
            notices.append(failure)
        return notices

    def load_employees(self) -> Optional[Notice]:
        try:
            with self._busy():
                employees = list(self._api.list_employees() or [])
        except ApiError as e:
            logger.warning("employee list failed", extra={"error": str(e)})
            return Notice(NoticeLevel.ERROR, f"Failed to load employees: {e}", from_api=True)

        with self._lock:
            self._state.employees = employees

        known = {e.employee_id for e in employees}
        saved = self._preferences.load(PREF_EMPLOYEE_ID)
        if saved in known:
            chosen = saved
        elif employees:
            chosen = employees[0].employee_id
        else:
            return None
        return self.reload(employee_id=chosen)

    def reload(self, *, employee_id: Optional[str] = None, year: Optional[int] = None) -> Optional[Notice]:
        employee_id = employee_id or self._state.employee_id
        year = year or self._state.year
        if not employee_id:
            return None
        try:
            committed = self._refresh(employee_id, year)
        except ApiError as e:
            logger.warning("refresh failed", extra={"employee_id": employee_id, "year": year, "error": str(e)})
            return Notice(NoticeLevel.ERROR, f"Failed to load employee data: {e}", from_api=True)
        if committed:
            self._preferences.save(PREF_EMPLOYEE_ID, employee_id)
        return None

    def select_employee(self, employee_id: str) -> Optional[Notice]:
        if employee_id not in {e.employee_id for e in self._state.employees}:
            return Notice(NoticeLevel.ERROR, f"Unknown employee: {employee_id}")
        return self.reload(employee_id=employee_id)

    def select_year(self, year: int) -> Optional[Notice]:
        if not date.min.year <= int(year) <= date.max.year:
            return Notice(NoticeLevel.ERROR, "Invalid year")
        if not self._state.employee_id:
            with self._lock:
                self._state.year = int(year)
            return None
        return self.reload(year=int(year))

    # Filters, sort, pages
    def set_filters(self, form: Mapping[str, Any]) -> Optional[Notice]:
        try:
            criteria = FilterCriteria.from_form(form)
        except ValidationError as e:
            return Notice(NoticeLevel.ERROR, str(e))
        with self._lock:
            self._state.filters = criteria
            self._recompute_view()
        self._preferences.save(PREF_FILTERS, criteria.to_form())
        return None

    def clear_filters(self) -> None:
        criteria = FilterCriteria()
        with self._lock:
            self._state.filters = criteria
            self._recompute_view()
        self._preferences.save(PREF_FILTERS, criteria.to_form())

    def sort_by(self, column: str) -> Optional[Notice]:
        try:
            col = SortColumn(column)
        except ValueError:
            return Notice(NoticeLevel.ERROR, f"Unknown sort column: {column}")
        with self._lock:
            self._state.sort = self._state.sort.toggled(col)
            self._recompute_view()
        return None

    def set_sort(self, spec: SortSpec) -> None:
        with self._lock:
            self._state.sort = spec
            self._recompute_view()

    def total_pages(self) -> int:
        return total_pages(len(self._state.view), self._items_per_page)

    def go_to_page(self, page: int) -> bool:
        """Move within ``1..total_pages``; out-of-range requests are ignored."""
        with self._lock:
            if 1 <= page <= self.total_pages():
                self._state.page = page
                return True
        return False

    def next_page(self) -> bool:
        with self._lock:
            return self.go_to_page(self._state.page + 1)

    def prev_page(self) -> bool:
        with self._lock:
            return self.go_to_page(self._state.page - 1)

    def current_page(self) -> Page[AttendanceRecord]:
        with self._lock:
            return paginate(self._state.view, self._items_per_page, self._state.page)

    # Attendance mutations
    def save_attendance(self, form: Mapping[str, Any]) -> Notice:
        missing = self._require_employee()
        if missing:
            return missing
        try:
            with self._busy():
                self._attendance.save(self._state.employee_id, form)
        except ValidationError as e:
            return Notice(NoticeLevel.ERROR, str(e))
        except ApiError as e:
            return Notice(NoticeLevel.ERROR, f"Failed to save attendance: {e}", from_api=True)
        return self.reload() or Notice(NoticeLevel.SUCCESS, "Attendance saved successfully!")

    def delete_attendance(self, work_date: str) -> Notice:
        missing = self._require_employee()
        if missing:
            return missing
        try:
            with self._busy():
                self._attendance.delete(self._state.employee_id, work_date)
        except ValidationError as e:
            return Notice(NoticeLevel.ERROR, str(e))
        except ApiError as e:
            return Notice(NoticeLevel.ERROR, f"Failed to delete attendance: {e}", from_api=True)
        return self.reload() or Notice(NoticeLevel.SUCCESS, "Attendance deleted successfully!")

    def request_leave(self, form: Mapping[str, Any]) -> Notice:
        missing = self._require_employee()
        if missing:
            return missing
        try:
            with self._busy():
                self._attendance.request_leave(self._state.employee_id, form)
        except ValidationError as e:
            return Notice(NoticeLevel.ERROR, str(e))
        except ApiError as e:
            return Notice(NoticeLevel.ERROR, f"Failed to request leave: {e}", from_api=True)
        return self.reload() or Notice(NoticeLevel.SUCCESS, "Leave request submitted successfully!")

    def draft(self, action: str, work_date: Optional[str] = None) -> tuple[Optional[AttendanceDraft], Optional[Notice]]:
        now = self._clock()
        records = self._state.records
        if action == "new":
            return self._attendance.new_draft(today=now.date()), None
        if action == "clock-in":
            return self._attendance.clock_in_draft(now=now), None
        if action == "clock-out":
            draft = self._attendance.clock_out_draft(records, now=now)
            if draft is None:
                return None, Notice(NoticeLevel.WARNING, "Please clock in first!")
            return draft, None
        if action == "edit":
            try:
                draft = self._attendance.edit_draft(records, work_date or "")
            except ValidationError as e:
                return None, Notice(NoticeLevel.ERROR, str(e))
            if draft is None:
                return None, Notice(NoticeLevel.WARNING, f"No attendance record for {work_date}")
            return draft, None
        return None, Notice(NoticeLevel.ERROR, f"Unknown action: {action}")

    def export(self) -> tuple[Optional[tuple[str, str]], Notice]:
        """(filename, csv text) of the whole filtered view, not just the current page."""
        records = list(self._state.view)
        if not records:
            return None, Notice(NoticeLevel.WARNING, "No records to export")
        filename = self._attendance.export_filename(self._state.employee_id or "all", now=self._clock())
        return (filename, self._attendance.export_csv(records)), Notice(NoticeLevel.SUCCESS, "CSV exported successfully!")

    # Settings
    def save_quotas(self, form: Mapping[str, Any]) -> Notice:
        try:
            with self._busy():
                self._leave.save_quotas(self._state.year, form)
        except ValidationError as e:
            return Notice(NoticeLevel.ERROR, str(e))
        except ApiError as e:
            return Notice(NoticeLevel.ERROR, f"Failed to save quotas: {e}", from_api=True)
        return self.reload() or Notice(NoticeLevel.SUCCESS, "Quotas saved successfully!")

    def update_year_start(self, year_start_date: str) -> Notice:
        try:
            with self._busy():
                quota = self._leave.update_year_start(self._state.year, self._state.quota, year_start_date)
        except ValidationError as e:
            return Notice(NoticeLevel.ERROR, str(e))
        except ApiError as e:
            return Notice(NoticeLevel.ERROR, f"Failed to update year start date: {e}", from_api=True)
        with self._lock:
            self._state.quota = quota
        return Notice(NoticeLevel.SUCCESS, "Year start date updated!")

    def yearly_reset(self) -> Notice:
        try:
            with self._busy():
                next_year = self._leave.yearly_reset(self._state.year)
        except ApiError as e:
            return Notice(NoticeLevel.ERROR, f"Failed to perform yearly reset: {e}", from_api=True)
        return self.select_year(next_year) or Notice(NoticeLevel.SUCCESS, "Yearly reset completed successfully!")

    def test_connection(self) -> Notice:
        try:
            with self._busy():
                employees = self._api.list_employees()
        except ApiError as e:
            return Notice(NoticeLevel.ERROR, f"Connection failed: {e}", from_api=True)
        if employees is None:
            return Notice(NoticeLevel.ERROR, "Connection failed: No data returned", from_api=True)
        return Notice(NoticeLevel.SUCCESS, "Connection successful!")

    # Read-models
    def clock_view(self) -> dict:
        return format_clock(self._clock())

    def leave_summary(self) -> dict:
        s = self._state
        return {
            "year": s.year,
            "balances": [b.as_dict() for b in reconcile_balances(s.quota, s.usage)],
            "wfh_count": wfh_count(s.usage),
        }

    def leave_chart(self) -> dict:
        usage = self._state.usage
        return {
            "labels": ["Annual Used", "Casual Used", "Sick Used", "WFH Days"],
            "values": [
                usage.annual_used if usage else 0,
                usage.casual_used if usage else 0,
                usage.sick_used if usage else 0,
                wfh_count(usage),
            ],
        }

    def dashboard_view(self) -> dict:
        with self._lock:
            s = self._state
            today = self._clock().date()
            employee = s.employee
            return {
                "employees": [{"employee_id": e.employee_id, "label": e.label} for e in s.employees],
                "employee_id": s.employee_id,
                "profile": employee.as_profile() if employee else None,
                "year": s.year,
                "busy": s.busy,
                "today": self._attendance.today_status(s.records, today=today),
                "leave_summary": self.leave_summary(),
                "charts": {
                    "leave": self.leave_chart(),
                    "hours": self._attendance.hours_chart(s.records, today=today),
                },
            }

    def attendance_view(self) -> dict:
        with self._lock:
            page = self.current_page()
            return {
                "rows": [self._attendance.table_row(r) for r in page.items],
                "page": page.page_number,
                "total_pages": page.total_pages,
                "total_items": page.total_items,
                "page_info": page.info,
                "has_prev": page.has_prev,
                "has_next": page.has_next,
                "filters": self._state.filters.to_form(),
                "sort": {"column": self._state.sort.column.value, "direction": self._state.sort.direction.value},
            }

    def leaves_view(self) -> dict:
        with self._lock:
            quota = self._state.quota
            return {
                "year": self._state.year,
                "quotas": {kind.value: f"{resolve_allocated(quota, kind)} days" for kind in LeaveKind},
                "history": self._attendance.leave_history(self._state.records),
            }

    def settings_view(self) -> dict:
        with self._lock:
            return self._leave.settings_view(self._state.year, self._state.quota)
