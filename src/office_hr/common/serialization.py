"""Helpers shared by the records' to_dict/from_dict methods."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional


def iso(value: Optional[date | datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def parse_date(value: Any) -> Optional[date]:
    if value is None or isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, datetime):
        return value.date()
    return date.fromisoformat(str(value))


def parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def dec(value: Optional[Decimal]) -> Optional[str]:
    return str(value) if value is not None else None


def parse_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))
