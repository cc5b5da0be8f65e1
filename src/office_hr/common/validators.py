from __future__ import annotations

from decimal import Decimal, InvalidOperation

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_month(month: int, year: int) -> tuple[int, int]:
    month, year = int(month), int(year)
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if year < 1900:
        raise ValidationError("Year is not valid")
    return month, year


def require_percentage(value: int, field_name: str) -> int:
    value = int(value)
    if not 0 <= value <= 100:
        raise ValidationError(f"{field_name} must be between 0 and 100")
    return value


def to_decimal(value, field_name: str) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} is not a valid number")


def parse_enum(enum_cls, value, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"{field_name} is not valid: {value}")
