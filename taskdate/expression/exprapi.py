"""Date expression API.

Public API for turning Taskwarrior-style date expressions into datetimes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, Optional, Type, TypeVar

from taskdate.config import default_week_start
from taskdate.expression.exprast import (
    ChainedDuration,
    Duration,
    IsoDuration,
    Month,
    Node,
    Ordinal,
    PeriodBoundary,
    Synonym,
    Unit,
    Weekday,
)
from taskdate.expression.exprcalc import ReferenceLike, evaluate
from taskdate.expression.exprerrors import ExpressionError, TaskdateError
from taskdate.expression.exprgrammar import parse_expression
from taskdate.expression.exprnormalize import MONTH_TOKENS, WEEKDAY_TOKENS

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a parse: either ``value`` or ``error`` is set, never both.

    Examples:
        >>> result = parse("eom", reference="2026-06-15T10:30:00Z")
        >>> result.ok
        True
        >>> parse("invalid").error
        "unrecognized expression: 'invalid'"
    """

    value: Optional[T] = None
    error: Optional[str] = None
    error_type: Type[TaskdateError] = field(default=TaskdateError, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or re-raise the original error type (ParseError, CalcError)."""
        if self.error is not None:
            raise self.error_type(self.error)
        return self.value


DateResult = Result[datetime]
AstResult = Result[Node]


def _resolve_week_start(week_start: Optional[int]) -> int:
    return default_week_start() if week_start is None else week_start


def parse(
    text: str,
    *,
    reference: ReferenceLike = None,
    week_start: Optional[int] = None,
) -> DateResult:
    """
    Parse a date expression and evaluate it.

    Supports:
      - Durations: "+7d", "-3d", "+2w", "+3m" (months), "30min", "+1y", "90s"
      - Chained durations: "+1d+9h", "-2w+3d"
      - Synonyms: "now", "today", "yesterday", "tomorrow"
      - Weekdays: "monday", "fri" (next occurrence, never today)
      - Months: "december", "jan" (1st of the next occurrence)
      - Boundaries: "sow", "eow", "som", "eom", "soq", "eoq", "soy", "eoy", "eod"
      - Ordinals: "1st", "15th", "31st" (day of this or next month, clamped)
      - ISO-8601 durations: "P3D", "P2W", "PT1H", "P1Y2M3DT12H40M50S"

    Args:
        text: Expression text (case-insensitive, edge whitespace ignored)
        reference: Reference instant (default: now UTC). datetime, date or
            ISO-8601 string; naive values are treated as UTC
        week_start: First day of the week, 1 (Monday) .. 7 (Sunday);
            default from configuration

    Returns:
        DateResult with ``value`` set on success or ``error`` set on failure.
        Errors are returned, never raised.

    Examples:
        >>> ref = datetime(2026, 6, 15, 10, 30, tzinfo=timezone.utc)
        >>> parse("+7d", reference=ref).value
        datetime.datetime(2026, 6, 22, 10, 30, tzinfo=datetime.timezone.utc)

        >>> parse("31st", reference=ref).value
        datetime.datetime(2026, 6, 30, 0, 0, tzinfo=datetime.timezone.utc)

        >>> parse("").ok
        False
    """
    try:
        node = parse_expression(text)
        value = evaluate(node, reference, _resolve_week_start(week_start))
    except TaskdateError as e:
        return Result(error=str(e), error_type=type(e))
    return Result(value=value)


def parse_strict(
    text: str,
    *,
    reference: ReferenceLike = None,
    week_start: Optional[int] = None,
) -> datetime:
    """
    Same as parse() but raises on failure.

    Raises:
        ExpressionError: With the original text and the underlying reason,
            e.g. "Failed to parse 'invalid': unrecognized expression: 'invalid'"
    """
    result = parse(text, reference=reference, week_start=week_start)
    if not result.ok:
        raise ExpressionError(text, result.error)
    return result.value


def parse_ast(text: str) -> AstResult:
    """
    Parse an expression without evaluating it.

    Useful for debugging or inspecting the structure of an expression.

    Examples:
        >>> parse_ast("+7d").value.to_dict()
        {'type': 'chained_duration', 'durations': [{'type': 'duration', 'sign': '+', 'amount': 7, 'unit': 'days'}]}
    """
    try:
        return Result(value=parse_expression(text))
    except TaskdateError as e:
        return Result(error=str(e), error_type=type(e))


def calculate(
    node: Node,
    *,
    reference: ReferenceLike = None,
    week_start: Optional[int] = None,
) -> DateResult:
    """Evaluate an already-parsed node (see parse_ast())."""
    try:
        return Result(value=evaluate(node, reference, _resolve_week_start(week_start)))
    except TaskdateError as e:
        return Result(error=str(e), error_type=type(e))


# ---- Display ----

_WEEKDAY_NAMES = {day: token for token, day in reversed(WEEKDAY_TOKENS)}
_MONTH_NAMES = {month: token for token, month in reversed(MONTH_TOKENS)}

_ISO_DATE_LETTERS = ((Unit.YEARS, "Y"), (Unit.MONTHS, "M"), (Unit.WEEKS, "W"), (Unit.DAYS, "D"))
_ISO_TIME_LETTERS = ((Unit.HOURS, "H"), (Unit.MINUTES, "M"), (Unit.SECONDS, "S"))


def _ordinal_suffix(day: int) -> str:
    if 10 <= day % 100 <= 20:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def _format_duration(duration: Duration) -> str:
    unit = duration.unit.value
    if duration.amount == 1:
        unit = unit[:-1]
    return f"{duration.sign.value}{duration.amount} {unit}"


def _format_iso(node: IsoDuration) -> str:
    date_part = "".join(
        f"{node.get(unit)}{letter}" for unit, letter in _ISO_DATE_LETTERS if node.get(unit) is not None
    )
    time_part = "".join(
        f"{node.get(unit)}{letter}" for unit, letter in _ISO_TIME_LETTERS if node.get(unit) is not None
    )
    return f"P{date_part}" + (f"T{time_part}" if time_part else "")


def format_expression_display(node: Any) -> str:
    """
    Format a parsed node for human-readable display.

    Args:
        node: AST node from parse_ast()

    Returns:
        Display string ("" for None)

    Examples:
        >>> format_expression_display(parse_ast("+1d+9h").value)
        '+1 day +9 hours'

        >>> format_expression_display(parse_ast("eocm").value)
        'end of month'

        >>> format_expression_display(parse_ast("fri").value)
        'next friday'

        >>> format_expression_display(parse_ast("p1y2m3dt12h").value)
        'P1Y2M3DT12H'
    """
    if node is None:
        return ""

    if isinstance(node, Duration):
        return _format_duration(node)
    elif isinstance(node, ChainedDuration):
        return " ".join(_format_duration(d) for d in node.durations)
    elif isinstance(node, Synonym):
        return node.kind.value
    elif isinstance(node, Weekday):
        return f"next {_WEEKDAY_NAMES[node.day]}"
    elif isinstance(node, Month):
        return f"1st of {_MONTH_NAMES[node.month]}"
    elif isinstance(node, Ordinal):
        return f"{node.day}{_ordinal_suffix(node.day)}"
    elif isinstance(node, PeriodBoundary):
        edge, _, period = node.boundary.value.split("_", 2)
        return f"{edge} of {period}"
    elif isinstance(node, IsoDuration):
        return _format_iso(node)

    return str(node)


__all__ = [
    "Result",
    "DateResult",
    "AstResult",
    "parse",
    "parse_strict",
    "parse_ast",
    "calculate",
    "format_expression_display",
]
