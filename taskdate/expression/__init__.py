"""Expression module for Taskwarrior-style date expressions.

This module turns short date expressions into concrete datetimes relative
to a reference instant.

Public API:
    parse(text, reference=None, week_start=None) -> Result
        Parse and evaluate an expression; errors are returned, not raised

    parse_strict(text, reference=None, week_start=None) -> datetime
        Same as parse() but raises ExpressionError

    parse_ast(text) -> Result
        Parse only, returning the AST node

    calculate(node, reference=None, week_start=None) -> Result
        Evaluate an AST node

    format_expression_display(node) -> str
        Format a node for human-readable display

Examples:
    >>> from datetime import datetime, timezone
    >>> from taskdate.expression import parse, parse_ast
    >>>
    >>> ref = datetime(2026, 6, 15, 10, 30, tzinfo=timezone.utc)  # a Monday
    >>> parse("+7d", reference=ref).value
    datetime.datetime(2026, 6, 22, 10, 30, tzinfo=datetime.timezone.utc)
    >>>
    >>> # Next Monday, never today
    >>> parse("monday", reference=ref).value
    datetime.datetime(2026, 6, 22, 0, 0, tzinfo=datetime.timezone.utc)
    >>>
    >>> # "m" is months, "min" is minutes
    >>> parse_ast("3m").value.to_dict()["durations"][0]["unit"]
    'months'
"""

from taskdate.expression.exprapi import (
    Result,
    DateResult,
    AstResult,
    parse,
    parse_strict,
    parse_ast,
    calculate,
    format_expression_display,
)
from taskdate.expression.exprerrors import (
    TaskdateError,
    ParseError,
    CalcError,
    ExpressionError,
)

__all__ = [
    "Result",
    "DateResult",
    "AstResult",
    "parse",
    "parse_strict",
    "parse_ast",
    "calculate",
    "format_expression_display",
    "TaskdateError",
    "ParseError",
    "CalcError",
    "ExpressionError",
]
