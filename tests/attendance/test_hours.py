import pytest

from attendance_dashboard.attendance.hours import compute_hours, is_valid_time, normalize_clock, to_minutes
from attendance_dashboard.core.exceptions import ValidationError


def test_day_shift_subtracts_break():
    assert compute_hours("09:00", "17:00", 60) == 7.0


def test_overnight_shift_wraps_midnight():
    assert compute_hours("22:00", "06:00", 0) == 8.0


def test_equal_times_count_as_full_day():
    assert compute_hours("09:00", "09:00", 0) == 24.0
    assert compute_hours("00:00", "00:00", 60) == 23.0


@pytest.mark.parametrize("clock_in, clock_out", [(None, "17:00"), ("09:00", None), ("", "17:00"), (None, None)])
def test_missing_clock_time_gives_zero(clock_in, clock_out):
    assert compute_hours(clock_in, clock_out, 0) == 0


def test_break_longer_than_shift_never_negative():
    assert compute_hours("09:00", "10:00", 120) == 0.0
    assert compute_hours("09:00", "09:30", 30) == 0.0


def test_fractional_hours():
    assert compute_hours("08:15", "17:00", 45) == pytest.approx(8.0)
    assert compute_hours("09:00", "09:20", 0) == pytest.approx(1 / 3)


@pytest.mark.parametrize("value", ["00:00", "09:05", "23:59", "12:30"])
def test_valid_times(value):
    assert is_valid_time(value)


@pytest.mark.parametrize("value", ["24:00", "9:00", "12:60", "1200", "12:00:00", "", None, "23:59\n", " 09:00"])
def test_invalid_times(value):
    assert not is_valid_time(value)


def test_to_minutes():
    assert to_minutes("00:00") == 0
    assert to_minutes("23:59") == 1439
    with pytest.raises(ValidationError):
        to_minutes("noon")


def test_normalize_clock_from_spreadsheet_values():
    assert normalize_clock("9:05") == "09:05"
    assert normalize_clock("09:05:00") == "09:05"
    assert normalize_clock("17:30") == "17:30"
    assert normalize_clock("") is None
    assert normalize_clock(None) is None
    assert normalize_clock("25:00") is None
    assert normalize_clock("later") is None
