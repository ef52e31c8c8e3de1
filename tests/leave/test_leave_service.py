import pytest

from attendance_dashboard.core.exceptions import ValidationError
from attendance_dashboard.leave.model import LeaveQuota, LeaveUsage
from attendance_dashboard.leave.service import LeaveService


@pytest.fixture
def svc(api):
    return LeaveService(api)


def test_save_quotas(svc, api):
    quota = svc.save_quotas(2025, {"annual": "18", "casual": 8, "sick": "12", "year_start_date": "2025-04-01"})

    assert api.quotas[2025] == quota
    assert (quota.annual_allocated, quota.casual_allocated, quota.sick_allocated) == (18, 8, 12)
    assert quota.year_start_date == "2025-04-01"


def test_missing_start_date_defaults_to_january_first(svc):
    quota = svc.build_quota(2026, {"annual": 1, "casual": 1, "sick": 1})
    assert quota.year_start_date == "2026-01-01"


@pytest.mark.parametrize(
    "form, message",
    [
        ({"annual": "x", "casual": 1, "sick": 1}, "Annual leave must be a whole number"),
        ({"annual": 1, "casual": -1, "sick": 1}, "Casual leave cannot be negative"),
        ({"annual": 1, "casual": 1}, "Sick leave must be a whole number"),
        ({"annual": 1, "casual": 1, "sick": 1, "year_start_date": "April"}, "Year start date must be a date (YYYY-MM-DD)"),
    ],
)
def test_invalid_quota_form(svc, api, form, message):
    with pytest.raises(ValidationError) as exc:
        svc.save_quotas(2025, form)
    assert str(exc.value) == message
    assert api.quotas == {}


def test_update_year_start_keeps_allocations(svc, api):
    current = LeaveQuota(year=2025, annual_allocated=20, year_start_date="2025-01-01")
    quota = svc.update_year_start(2025, current, "2025-07-01")

    assert api.quotas[2025] == quota
    assert (quota.annual_allocated, quota.casual_allocated, quota.sick_allocated) == (20, 10, 14)
    assert quota.year_start_date == "2025-07-01"


def test_yearly_reset_targets_next_year(svc, api):
    assert svc.yearly_reset(2025) == 2026
    assert api.reset_years == [2026]


def test_settings_view_defaults(svc):
    assert svc.settings_view(2025, None) == {
        "year": 2025,
        "annual": 15,
        "casual": 10,
        "sick": 14,
        "year_start_date": "2025-01-01",
    }


def test_quota_and_usage_from_api():
    quota = LeaveQuota.from_api({"AnnualAllocated": "12", "CasualAllocated": "", "YearStartDate": "2025-02-01T00:00:00Z"}, year=2025)
    assert quota == LeaveQuota(year=2025, annual_allocated=12, year_start_date="2025-02-01")

    usage = LeaveUsage.from_api({"AnnualUsed": 3, "SickUsed": "1", "WFHCount": "4"})
    assert usage == LeaveUsage(annual_used=3, casual_used=0, sick_used=1, wfh_count=4)
