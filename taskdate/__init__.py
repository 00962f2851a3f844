"""taskdate - Taskwarrior-style date expressions

Public API for resolving date expressions such as "+7d", "eom", "monday",
"15th" or "P1Y2M3D" into concrete datetimes.

Usage:
    from taskdate import parse, parse_strict, parse_ast

    # Result value: .ok / .value / .error
    result = parse("eom")

    # Raise ExpressionError instead of returning an error
    due = parse_strict("+1d+9h", reference="2026-06-15T10:30:00Z")

    # Inspect the parsed structure
    node = parse_ast("P1Y2M3DT12H40M50S").value

    # Week boundaries relative to Sunday
    start = parse_strict("sow", week_start=7)
"""

__version__ = "0.1.0"

# ============================================================================
# Expression API
# ============================================================================

from .expression.exprapi import (
    Result,                     # Result value returned by parse/parse_ast/calculate
    DateResult,
    AstResult,
    parse,                      # Primary API - expression to datetime
    parse_strict,               # Raising variant of parse
    parse_ast,                  # Grammar only, for introspection
    calculate,                  # Evaluate an already-parsed node
    format_expression_display,  # Human-readable rendering of a node
)

# ============================================================================
# Errors
# ============================================================================

from .expression.exprerrors import (
    TaskdateError,
    ParseError,
    CalcError,
    ExpressionError,
)

# ============================================================================
# Configuration
# ============================================================================

from .config import (
    get_config,
    reload_config,
)

__all__ = [
    "__version__",
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
    "get_config",
    "reload_config",
]
