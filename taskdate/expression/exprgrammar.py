"""Date Expression Grammar
-----------------------

Parser turning normalized expression text into a single AST node.

Supports:
  - Durations: "+7d", "-2w", "3m" (months), "30min" (minutes), "90s"
  - Chained durations: "+1d+9h", "-2w+3d"
  - Synonyms: "now", "today", "yesterday", "tomorrow"
  - Weekdays: "monday", "tue", ...
  - Months: "january", "feb", "may", ...
  - Period boundaries: "sow", "socw", "eom", "soq", "eod", ...
  - Ordinals: "1st", "15th", "31st"
  - ISO-8601 durations: "P3D", "P2W", "PT1H", "P1Y2M3DT12H40M50S"

Key Design Principles:
  1. Alternatives are an ordered tuple tried top to bottom; the first one that
     matches a prefix of the input wins and is never revisited
  2. The winning alternative must consume the whole input, otherwise the
     remainder is reported as trailing input
  3. Within a vocabulary table, longer tokens come first
"""

from __future__ import annotations
import logging
import re
from typing import Callable, Optional, Tuple

from taskdate.config import fuzzy_threshold
from taskdate.expression.exprast import (
    ISO_UNIT_ORDER,
    ChainedDuration,
    Duration,
    IsoDuration,
    Month,
    Node,
    Ordinal,
    PeriodBoundary,
    Sign,
    Synonym,
    Weekday,
)
from taskdate.expression.exprerrors import ParseError
from taskdate.expression.exprnormalize import (
    BOUNDARY_TOKENS,
    MONTH_TOKENS,
    ORDINAL_SUFFIXES,
    SYNONYM_TOKENS,
    UNIT_TOKENS,
    WEEKDAY_TOKENS,
    normalize_expression_text,
    suggest_keyword,
)

logger = logging.getLogger(__name__)

Match = Optional[Tuple[Node, int]]

MIN_ORDINAL = 1
MAX_ORDINAL = 31


# ---- Compiled patterns ----

def _unit_pattern() -> str:
    # One named group per unit family; regex alternation keeps table order
    groups = [
        f"(?P<{unit.value}>{'|'.join(tokens)})"
        for unit, tokens in UNIT_TOKENS
    ]
    return "|".join(groups)


_SIMPLE_DURATION_RE = re.compile(
    rf"(?P<sign>[+-])?(?P<amount>\d+)(?:{_unit_pattern()})"
)

_ORDINAL_RE = re.compile(rf"(?P<day>\d+)(?:{'|'.join(ORDINAL_SUFFIXES)})")

# P + (weeks alone | [Y][M][D] [T[H][M][S]])
_ISO_DURATION_RE = re.compile(
    r"p(?:"
    r"(?P<weeks>\d+)w"
    r"|"
    r"(?:(?P<years>\d+)y)?(?:(?P<months>\d+)m)?(?:(?P<days>\d+)d)?"
    r"(?:t(?:(?P<hours>\d+)h)?(?:(?P<minutes>\d+)m)?(?:(?P<seconds>\d+)s)?)?"
    r")"
)


# ---- Numbers ----

def _to_int(digits: str) -> int:
    try:
        return int(digits)
    except ValueError as e:
        # Digit runs past the interpreter's int conversion limit
        raise ParseError(f"amount too large: {digits[:20]}...") from e


# ---- Keyword alternatives ----

def _match_token(text: str, table) -> Optional[Tuple[object, int]]:
    for token, value in table:
        if text.startswith(token):
            return value, len(token)
    return None


def _parse_period_boundary(text: str) -> Match:
    found = _match_token(text, BOUNDARY_TOKENS)
    if found is None:
        return None
    boundary, end = found
    return PeriodBoundary(boundary), end


def _parse_synonym(text: str) -> Match:
    found = _match_token(text, SYNONYM_TOKENS)
    if found is None:
        return None
    kind, end = found
    return Synonym(kind), end


def _parse_weekday(text: str) -> Match:
    found = _match_token(text, WEEKDAY_TOKENS)
    if found is None:
        return None
    day, end = found
    return Weekday(day), end


def _parse_month(text: str) -> Match:
    found = _match_token(text, MONTH_TOKENS)
    if found is None:
        return None
    month, end = found
    return Month(month), end


# ---- Numeric alternatives ----

def _parse_ordinal(text: str) -> Match:
    """
    Day of month with any ordinal suffix ("2st" is accepted as 2).

    Values outside 1-31 make the alternative fail rather than clamp.
    """
    match = _ORDINAL_RE.match(text)
    if not match:
        return None

    day = _to_int(match.group("day"))
    if not MIN_ORDINAL <= day <= MAX_ORDINAL:
        logger.debug(f"Rejecting ordinal {day}: outside [{MIN_ORDINAL}, {MAX_ORDINAL}]")
        return None
    return Ordinal(day), match.end()


def _match_simple_duration(text: str, pos: int) -> Optional[Tuple[Duration, int]]:
    match = _SIMPLE_DURATION_RE.match(text, pos)
    if not match:
        return None

    sign = Sign(match.group("sign")) if match.group("sign") else Sign.PLUS
    unit = next(u for u, _ in UNIT_TOKENS if match.group(u.value) is not None)
    return Duration(amount=_to_int(match.group("amount")), unit=unit, sign=sign), match.end()


def _parse_chained_duration(text: str) -> Match:
    durations = []
    pos = 0
    while pos < len(text):
        found = _match_simple_duration(text, pos)
        if found is None:
            break
        duration, pos = found
        durations.append(duration)

    if not durations:
        return None
    return ChainedDuration(tuple(durations)), pos


def _parse_iso_duration(text: str) -> Match:
    """
    ISO-8601 duration (input already lowercased).

    Once the input starts with "p" no other alternative is tried: a "p" with
    no components is an error, not a fallthrough.
    """
    if not text.startswith("p"):
        return None

    match = _ISO_DURATION_RE.match(text)
    components = tuple(
        (unit, _to_int(match.group(unit.value)))
        for unit in ISO_UNIT_ORDER
        if match.group(unit.value) is not None
    )
    if not components:
        raise ParseError("empty ISO-8601 duration")
    return IsoDuration(components), match.end()


# Order matters for disambiguation
ALTERNATIVES: Tuple[Callable[[str], Match], ...] = (
    _parse_iso_duration,
    _parse_period_boundary,
    _parse_synonym,
    _parse_weekday,
    _parse_month,
    _parse_ordinal,
    _parse_chained_duration,
)


# ---- Main Parse Function ----

def parse_expression(text: str) -> Node:
    """
    Parse expression text into an AST node.

    Args:
        text: Raw expression text; trimmed and lowercased before parsing

    Returns:
        Exactly one AST node

    Raises:
        ParseError: Unrecognized syntax, trailing input, out-of-range
            ordinal, oversized amount or empty ISO-8601 duration

    Examples:
        >>> parse_expression("+7d")
        ChainedDuration(durations=(Duration(amount=7, unit=<Unit.DAYS: 'days'>, sign=<Sign.PLUS: '+'>),))

        >>> parse_expression("EOM")
        PeriodBoundary(boundary=<Boundary.END_OF_MONTH: 'end_of_month'>)
    """
    text_norm = normalize_expression_text(text)
    if not text_norm:
        raise ParseError("empty expression")

    for alternative in ALTERNATIVES:
        found = alternative(text_norm)
        if found is None:
            continue

        node, end = found
        logger.debug(f"{alternative.__name__} matched {text_norm[:end]!r}")
        if end < len(text_norm):
            raise ParseError(f"unexpected trailing input: {text_norm[end:]}")
        return node

    message = f"unrecognized expression: '{text_norm}'"
    suggestion = suggest_keyword(text_norm, threshold=fuzzy_threshold())
    if suggestion:
        message += f"; did you mean '{suggestion}'?"
    raise ParseError(message)


__all__ = [
    "ALTERNATIVES",
    "parse_expression",
]
