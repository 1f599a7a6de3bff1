# src/core/finance/day_count.py
"""
Calendar dates → integer day numbers for XIRR schedules.

Spreadsheets store dates as serial numbers counted from 1899-12-30, so that
2008-01-01 is serial 39448. Any epoch works for XIRR since only differences
from the first flow matter; the spreadsheet one is the default.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime

DateLike = date | datetime | str

SPREADSHEET_EPOCH = date(1899, 12, 30)


def as_date(value: DateLike) -> date:
    """Coerce a date, datetime or ISO-8601 string to a date (time of day is dropped)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError as e:
            raise ValueError(f"Invalid ISO date: {value!r}") from e
    raise TypeError(f"Unsupported date value: {type(value).__name__}")


def days_between(start: DateLike, end: DateLike, *, signed: bool = True) -> int:
    """
    Whole days from start to end.

    Signed: swapping the dates flips the sign. Unsigned: the magnitude only.
    """
    days = (as_date(end) - as_date(start)).days
    return days if signed else abs(days)


def to_serial(value: DateLike, epoch: DateLike = SPREADSHEET_EPOCH) -> int:
    """Spreadsheet-style serial number of a date."""
    return days_between(epoch, value)


def to_day_offsets(dates: Iterable[DateLike], epoch: DateLike = SPREADSHEET_EPOCH) -> list[int]:
    """Serial numbers for a sequence of dates, in input order (no sorting)."""
    base = as_date(epoch)
    return [(as_date(d) - base).days for d in dates]


__all__ = [
    "DateLike",
    "SPREADSHEET_EPOCH",
    "as_date",
    "days_between",
    "to_serial",
    "to_day_offsets",
]
