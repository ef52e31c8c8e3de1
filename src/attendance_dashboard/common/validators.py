from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], message: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(message)
    return str(value).strip()


def parse_int_or_default(value, default: int = 0) -> int:
    """Lenient integer parsing for form fields (``"30.0"`` -> 30, ``"abc"`` -> default)."""
    if value is None or value == "":
        return default
    try:
        number = value if isinstance(value, (int, float)) else float(str(value).strip())
        return int(number)
    except (ValueError, OverflowError):
        return default


def parse_optional_float(value, field_name: str) -> Optional[float]:
    if value is None or str(value).strip() == "":
        return None
    try:
        return float(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a number")


def parse_required_int(value, field_name: str) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")


def parse_flag(value) -> bool:
    """Checkbox / spreadsheet boolean (``True``, ``"TRUE"``, ``"on"``, ``1``)."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {"true", "yes", "on", "1"}
