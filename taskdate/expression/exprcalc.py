"""Date Expression Calculator
--------------------------

Evaluates a parsed expression against a reference instant.

Handles:
  - Duration offsets (fixed elapsed time for s/min/h/d/w, calendar months/years)
  - Chained durations, applied left to right
  - Synonyms (now, today, yesterday, tomorrow)
  - Next weekday / month name / ordinal day of month
  - Period boundaries (week, month, quarter, year, end of day)
  - ISO-8601 durations

Key Design Principles:
  1. Pure: result depends only on (node, reference, week_start)
  2. The reference's zone is kept through all arithmetic
  3. "end of" boundaries are 23:59:59 exactly, "start of" boundaries 00:00:00
  4. Month arithmetic clamps the day to the target month (Jan 31 + 1m = Feb 28)
"""

from __future__ import annotations
from datetime import date, datetime, timedelta, timezone
from typing import Union
import logging

try:
    from dateutil import parser as dateutil_parser
except ImportError as e:
    raise ImportError("python-dateutil not installed. pip install python-dateutil") from e

try:
    from isoweek import Week
except ImportError as e:
    raise ImportError("isoweek not installed. pip install isoweek") from e

from taskdate.expression.exprast import (
    ISO_UNIT_ORDER,
    Boundary,
    ChainedDuration,
    Duration,
    IsoDuration,
    Month,
    Node,
    Ordinal,
    PeriodBoundary,
    Synonym,
    SynonymKind,
    Unit,
    Weekday,
)
from taskdate.expression.exprerrors import CalcError
from taskdate.utils.calendar import (
    add_months,
    at_end_of_day,
    at_start_of_day,
    days_in_month,
    end_of_day,
    next_month,
    quarter_bounds,
    start_of_day,
)

logger = logging.getLogger(__name__)

ReferenceLike = Union[datetime, date, str, None]

# Fixed-length units, in seconds
_UNIT_SECONDS = {
    Unit.SECONDS: 1,
    Unit.MINUTES: 60,
    Unit.HOURS: 3600,
    Unit.DAYS: 86400,
    Unit.WEEKS: 7 * 86400,
}


# ---- Reference handling ----

def coerce_reference(reference: ReferenceLike = None) -> datetime:
    """
    Turn a user-supplied reference into an aware datetime.

    Args:
        reference: datetime, date, ISO-8601 string, or None for now (UTC)

    Returns:
        Timezone-aware datetime; naive values are assumed to be UTC

    Raises:
        CalcError: If the value cannot be interpreted as an instant

    Examples:
        >>> coerce_reference("2026-06-15T10:30:00Z")
        datetime.datetime(2026, 6, 15, 10, 30, tzinfo=tzutc())

        >>> coerce_reference(date(2026, 6, 15))
        datetime.datetime(2026, 6, 15, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if reference is None:
        return datetime.now(timezone.utc)

    if isinstance(reference, str):
        try:
            reference = dateutil_parser.isoparse(reference.strip())
        except (ValueError, OverflowError) as e:
            raise CalcError(f"invalid reference time {reference!r}: {e}") from e

    if isinstance(reference, datetime):
        if reference.tzinfo is None:
            # Assume UTC if no timezone
            reference = reference.replace(tzinfo=timezone.utc)
        return reference

    if isinstance(reference, date):
        return datetime(reference.year, reference.month, reference.day, tzinfo=timezone.utc)

    raise CalcError(f"invalid reference time: {reference!r}")


def _check_week_start(week_start: int) -> int:
    if isinstance(week_start, bool) or not isinstance(week_start, int) or not 1 <= week_start <= 7:
        raise CalcError(f"week_start must be an integer in [1, 7], got {week_start!r}")
    return week_start


# ---- Arithmetic ----

def _add_elapsed(dt: datetime, seconds: int) -> datetime:
    """Exact elapsed-time addition, independent of wall-clock shifts."""
    shifted = dt.astimezone(timezone.utc) + timedelta(seconds=seconds)
    return shifted.astimezone(dt.tzinfo)


def add_amount(dt: datetime, unit: Unit, amount: int) -> datetime:
    """
    Add a signed amount of one unit.

    Fixed units are elapsed seconds; months and years move the calendar date
    and keep the time of day.
    """
    if unit is Unit.MONTHS:
        return add_months(dt, amount)
    if unit is Unit.YEARS:
        return add_months(dt, amount * 12)
    return _add_elapsed(dt, amount * _UNIT_SECONDS[unit])


# ---- Synonyms ----

def _calc_synonym(node: Synonym, reference: datetime) -> datetime:
    if node.kind is SynonymKind.NOW:
        return reference
    if node.kind is SynonymKind.TODAY:
        return start_of_day(reference)

    offset = -1 if node.kind is SynonymKind.YESTERDAY else 1
    return at_start_of_day(reference.date() + timedelta(days=offset), reference)


# ---- Weekdays, months, ordinals ----

def _calc_weekday(node: Weekday, reference: datetime) -> datetime:
    """Next occurrence of the weekday, always strictly after today."""
    today = reference.date()
    week = Week.withdate(today)
    if node.day <= today.isoweekday():
        week = week + 1
    return at_start_of_day(week.day(node.day - 1), reference)


def _calc_month(node: Month, reference: datetime) -> datetime:
    """First day of the next occurrence of the month (this month counts as passed)."""
    year = reference.year if node.month > reference.month else reference.year + 1
    return at_start_of_day(date(year, node.month, 1), reference)


def _calc_ordinal(node: Ordinal, reference: datetime) -> datetime:
    """
    Day of month in the current month, or the next one if already reached.

    The day is clamped to the target month's length (31st in June = 30th).
    """
    if node.day <= reference.day:
        year, month = next_month(reference.year, reference.month)
    else:
        year, month = reference.year, reference.month

    day = min(node.day, days_in_month(year, month))
    return at_start_of_day(date(year, month, day), reference)


# ---- Period boundaries ----

def _start_of_week(reference: datetime, week_start: int) -> date:
    today = reference.date()
    return today - timedelta(days=(today.isoweekday() - week_start) % 7)


def _calc_boundary(node: PeriodBoundary, reference: datetime, week_start: int) -> datetime:
    boundary = node.boundary
    today = reference.date()

    if boundary is Boundary.START_OF_WEEK:
        return at_start_of_day(_start_of_week(reference, week_start), reference)
    if boundary is Boundary.END_OF_WEEK:
        last = _start_of_week(reference, week_start) + timedelta(days=6)
        return at_end_of_day(last, reference)

    if boundary is Boundary.START_OF_MONTH:
        return at_start_of_day(today.replace(day=1), reference)
    if boundary is Boundary.END_OF_MONTH:
        last = today.replace(day=days_in_month(today.year, today.month))
        return at_end_of_day(last, reference)

    if boundary is Boundary.START_OF_YEAR:
        return at_start_of_day(date(today.year, 1, 1), reference)
    if boundary is Boundary.END_OF_YEAR:
        return at_end_of_day(date(today.year, 12, 31), reference)

    if boundary is Boundary.START_OF_QUARTER:
        first, _ = quarter_bounds(today)
        return at_start_of_day(first, reference)
    if boundary is Boundary.END_OF_QUARTER:
        _, last = quarter_bounds(today)
        return at_end_of_day(last, reference)

    if boundary is Boundary.END_OF_DAY:
        return end_of_day(reference)

    raise CalcError(f"unknown period boundary: {boundary!r}")


# ---- Durations ----

def _calc_chain(node: ChainedDuration, reference: datetime) -> datetime:
    result = reference
    for duration in node.durations:
        result = add_amount(result, duration.unit, duration.signed_amount)
        logger.debug(f"Applied {duration.sign.value}{duration.amount} {duration.unit.value} -> {result.isoformat()}")
    return result


def _calc_iso_duration(node: IsoDuration, reference: datetime) -> datetime:
    result = reference
    for unit in ISO_UNIT_ORDER:
        amount = node.get(unit)
        if amount is None:
            continue
        result = add_amount(result, unit, amount)
    return result


# ---- Main Evaluation Function ----

def _dispatch(node: Node, reference: datetime, week_start: int) -> datetime:
    if isinstance(node, Synonym):
        return _calc_synonym(node, reference)
    if isinstance(node, Duration):
        return add_amount(reference, node.unit, node.signed_amount)
    if isinstance(node, ChainedDuration):
        return _calc_chain(node, reference)
    if isinstance(node, Weekday):
        return _calc_weekday(node, reference)
    if isinstance(node, Month):
        return _calc_month(node, reference)
    if isinstance(node, Ordinal):
        return _calc_ordinal(node, reference)
    if isinstance(node, PeriodBoundary):
        return _calc_boundary(node, reference, week_start)
    if isinstance(node, IsoDuration):
        return _calc_iso_duration(node, reference)
    raise CalcError(f"unknown expression: {node!r}")


def evaluate(
    node: Node,
    reference: ReferenceLike = None,
    week_start: int = 1,
) -> datetime:
    """
    Evaluate an AST node to a concrete datetime.

    Args:
        node: AST node from parse_expression()
        reference: Reference instant (default: now UTC); see coerce_reference()
        week_start: First day of the week, 1 (Monday) .. 7 (Sunday)

    Returns:
        Aware datetime in the reference's zone

    Raises:
        CalcError: Invalid calendar date, invalid reference or week_start

    Examples:
        >>> ref = datetime(2026, 6, 15, 10, 30, tzinfo=timezone.utc)
        >>> evaluate(PeriodBoundary(Boundary.END_OF_MONTH), ref)
        datetime.datetime(2026, 6, 30, 23, 59, 59, tzinfo=datetime.timezone.utc)

        >>> evaluate(Weekday(1), ref)  # ref is a Monday
        datetime.datetime(2026, 6, 22, 0, 0, tzinfo=datetime.timezone.utc)
    """
    reference = coerce_reference(reference)
    week_start = _check_week_start(week_start)

    try:
        return _dispatch(node, reference, week_start)
    except CalcError:
        raise
    except (ValueError, OverflowError) as e:
        raise CalcError(f"invalid date: {e}") from e


__all__ = [
    "coerce_reference",
    "add_amount",
    "evaluate",
]
