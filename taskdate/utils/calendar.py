"""Calendar Arithmetic
-------------------

Pure calendar helpers shared by the expression calculator.

Month arithmetic is done here rather than delegated to a date library so that
overflow behaviour is fixed: the day of month is clamped to the last valid day
of the target month.

Examples:
  >>> add_months(date(2026, 1, 31), 1)
  datetime.date(2026, 2, 28)

  >>> add_months(date(2024, 1, 31), 1)
  datetime.date(2024, 2, 29)

  >>> quarter_bounds(date(2026, 6, 15))
  (datetime.date(2026, 4, 1), datetime.date(2026, 6, 30))
"""

from __future__ import annotations
from datetime import date, datetime, timedelta


def days_in_month(year: int, month: int) -> int:
    """
    Number of days in a calendar month.

    Args:
        year: 4-digit year
        month: 1-12

    Returns:
        28, 29, 30 or 31

    Examples:
        >>> days_in_month(2024, 2)
        29

        >>> days_in_month(2026, 6)
        30
    """
    # Last day of month = first day of next month - 1 day
    if month == 12:
        next_month = date(year + 1, 1, 1)
    else:
        next_month = date(year, month + 1, 1)
    return (next_month - timedelta(days=1)).day


def shift_month(year: int, month: int, months: int) -> tuple[int, int]:
    """Return (year, month) shifted by a signed number of months."""
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def add_months(d: date, months: int) -> date:
    """
    Shift a date by N months, clamping the day to the target month.

    Works on ``datetime`` as well; the time of day and tzinfo are preserved
    because only year/month/day are replaced.

    Args:
        d: Date or datetime to shift
        months: Signed number of months

    Returns:
        Shifted value of the same type as ``d``

    Examples:
        >>> add_months(date(2026, 3, 31), -1)
        datetime.date(2026, 2, 28)

        >>> add_months(date(2026, 11, 30), 3)
        datetime.date(2027, 2, 28)
    """
    year, month = shift_month(d.year, d.month, months)
    day = min(d.day, days_in_month(year, month))
    return d.replace(year=year, month=month, day=day)


def next_month(year: int, month: int) -> tuple[int, int]:
    return shift_month(year, month, 1)


def quarter_of(month: int) -> int:
    """Quarter number (1-4) of a month (1-12)."""
    return ((month - 1) // 3) + 1


def quarter_bounds(d: date) -> tuple[date, date]:
    """
    First and last day of the fixed calendar quarter containing ``d``.

    Q1 = Jan-Mar, Q2 = Apr-Jun, Q3 = Jul-Sep, Q4 = Oct-Dec
    """
    quarter = quarter_of(d.month)
    start_month = (quarter - 1) * 3 + 1
    end_month = start_month + 2
    start = date(d.year, start_month, 1)
    end = date(d.year, end_month, days_in_month(d.year, end_month))
    return start, end


# ---- Helper: Create timestamp at start/end of day ----

def start_of_day(dt: datetime) -> datetime:
    """Return datetime at start of day (00:00:00), keeping tzinfo."""
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(dt: datetime) -> datetime:
    """Return datetime at end of day (23:59:59), keeping tzinfo."""
    return dt.replace(hour=23, minute=59, second=59, microsecond=0)


def at_start_of_day(d: date, like: datetime) -> datetime:
    """Midnight of date ``d`` in the zone of ``like``."""
    return datetime(d.year, d.month, d.day, tzinfo=like.tzinfo)


def at_end_of_day(d: date, like: datetime) -> datetime:
    """23:59:59 of date ``d`` in the zone of ``like``."""
    return datetime(d.year, d.month, d.day, 23, 59, 59, tzinfo=like.tzinfo)


__all__ = [
    "days_in_month",
    "shift_month",
    "add_months",
    "next_month",
    "quarter_of",
    "quarter_bounds",
    "start_of_day",
    "end_of_day",
    "at_start_of_day",
    "at_end_of_day",
]
