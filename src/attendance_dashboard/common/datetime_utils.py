from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def now_local(tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Current wall-clock time in the dashboard time zone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(ZoneInfo(tz_name))


def year_bounds(year: int) -> tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def last_n_days(today: date, n: int) -> list[date]:
    """Oldest first, ending with ``today``."""
    return [today - timedelta(days=i) for i in range(n - 1, -1, -1)]


def format_time(value: Optional[str]) -> str:
    if not value:
        return "--:--"
    hours, minutes = value.split(":")[:2]
    return f"{hours}:{minutes}"


def format_hhmm(moment: datetime) -> str:
    return moment.strftime("%H:%M")


def _gmt_label(moment: datetime) -> str:
    offset = moment.utcoffset() or timedelta(0)
    total_minutes = int(offset.total_seconds() // 60)
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    if minutes:
        return f"GMT{sign}{hours}:{minutes:02d}"
    return f"GMT{sign}{hours}"


def format_clock(moment: datetime) -> dict:
    """Header clock: long date plus 24h time with the zone offset."""
    return {
        "date": f"{moment.strftime('%A, %B')} {moment.day}, {moment.year}",
        "time": f"{moment.strftime('%H:%M:%S')} {_gmt_label(moment)}",
    }
