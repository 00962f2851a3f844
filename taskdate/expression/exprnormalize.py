"""Expression Text Normalization
------------------------------

Normalization and keyword vocabulary for date expressions.

All vocabulary tables are ordered tuples: the grammar tries entries top to
bottom and the first match wins, so longer tokens are listed before the
shorter tokens they start with.

Examples:
  >>> normalize_expression_text("  EOM ")
  'eom'

  >>> suggest_keyword("tomorow")
  'tomorrow'
"""

from __future__ import annotations
from typing import Optional

try:
    from rapidfuzz import process, fuzz
except ImportError as e:
    raise ImportError("rapidfuzz not installed. pip install rapidfuzz") from e

from taskdate.expression.exprast import Boundary, SynonymKind, Unit


# ============================================================================
# Vocabulary
# ============================================================================

# socw/eocw etc. must precede sow/eow so the longer form is not cut short
BOUNDARY_TOKENS = (
    ("socw", Boundary.START_OF_WEEK),
    ("eocw", Boundary.END_OF_WEEK),
    ("socm", Boundary.START_OF_MONTH),
    ("eocm", Boundary.END_OF_MONTH),
    ("socy", Boundary.START_OF_YEAR),
    ("eocy", Boundary.END_OF_YEAR),
    ("sow", Boundary.START_OF_WEEK),
    ("som", Boundary.START_OF_MONTH),
    ("soq", Boundary.START_OF_QUARTER),
    ("soy", Boundary.START_OF_YEAR),
    ("eow", Boundary.END_OF_WEEK),
    ("eod", Boundary.END_OF_DAY),
    ("eom", Boundary.END_OF_MONTH),
    ("eoq", Boundary.END_OF_QUARTER),
    ("eoy", Boundary.END_OF_YEAR),
)

SYNONYM_TOKENS = (
    ("now", SynonymKind.NOW),
    ("today", SynonymKind.TODAY),
    ("yesterday", SynonymKind.YESTERDAY),
    ("tomorrow", SynonymKind.TOMORROW),
)

# Full name before abbreviation ("monday" must not stop at "mon")
WEEKDAY_TOKENS = (
    ("monday", 1), ("mon", 1),
    ("tuesday", 2), ("tue", 2),
    ("wednesday", 3), ("wed", 3),
    ("thursday", 4), ("thu", 4),
    ("friday", 5), ("fri", 5),
    ("saturday", 6), ("sat", 6),
    ("sunday", 7), ("sun", 7),
)

MONTH_TOKENS = (
    ("january", 1), ("jan", 1),
    ("february", 2), ("feb", 2),
    ("march", 3), ("mar", 3),
    ("april", 4), ("apr", 4),
    ("may", 5),
    ("june", 6), ("jun", 6),
    ("july", 7), ("jul", 7),
    ("august", 8), ("aug", 8),
    ("september", 9), ("sep", 9),
    ("october", 10), ("oct", 10),
    ("november", 11), ("nov", 11),
    ("december", 12), ("dec", 12),
)

ORDINAL_SUFFIXES = ("st", "nd", "rd", "th")

# Minutes precede months: bare "m" is months and would swallow "min"
UNIT_TOKENS = (
    (Unit.SECONDS, ("seconds", "second", "secs", "sec", "s")),
    (Unit.MINUTES, ("mins", "min")),
    (Unit.HOURS, ("hours", "hour", "hrs", "hr", "h")),
    (Unit.DAYS, ("days", "day", "d")),
    (Unit.WEEKS, ("weeks", "week", "wks", "wk", "w")),
    (Unit.MONTHS, ("months", "month", "mths", "mth", "mo", "m")),
    (Unit.YEARS, ("years", "year", "yrs", "yr", "y")),
)

KEYWORDS = tuple(
    token
    for table in (BOUNDARY_TOKENS, SYNONYM_TOKENS, WEEKDAY_TOKENS, MONTH_TOKENS)
    for token, _ in table
)


# ============================================================================
# Normalization
# ============================================================================

def normalize_expression_text(text: str) -> str:
    """
    Normalize expression text for parsing.

    Only the edges are trimmed; internal whitespace is kept so that the
    grammar rejects it.

    Args:
        text: Raw expression (e.g., " +7D ", "Monday")

    Returns:
        Lowercased text without leading/trailing whitespace

    Examples:
        >>> normalize_expression_text("P1Y2M3DT12H40M50S")
        'p1y2m3dt12h40m50s'

        >>> normalize_expression_text("+1d +9h")
        '+1d +9h'
    """
    if not text:
        return ""
    return text.strip().lower()


def suggest_keyword(text: str, *, threshold: int = 80) -> Optional[str]:
    """
    Closest keyword for a rejected expression, for error hints.

    Uses RapidFuzz WRatio against boundary, synonym, weekday and month
    keywords.

    Args:
        text: Normalized text that failed to parse
        threshold: Minimum score (0-100) to return a suggestion

    Returns:
        Best keyword or None if nothing scores above threshold

    Examples:
        >>> suggest_keyword("yesterdy")
        'yesterday'

        >>> suggest_keyword("+7q") is None
        True
    """
    if not text or not any(ch.isalpha() for ch in text):
        return None

    match = process.extractOne(
        text,
        KEYWORDS,
        scorer=fuzz.WRatio,
        score_cutoff=threshold,
    )
    if match is None:
        return None

    keyword, _score, _idx = match
    return keyword


__all__ = [
    "BOUNDARY_TOKENS",
    "SYNONYM_TOKENS",
    "WEEKDAY_TOKENS",
    "MONTH_TOKENS",
    "ORDINAL_SUFFIXES",
    "UNIT_TOKENS",
    "KEYWORDS",
    "normalize_expression_text",
    "suggest_keyword",
]
