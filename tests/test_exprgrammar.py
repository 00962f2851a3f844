"""Tests for the date expression grammar.

These tests verify parsing of every expression family into AST nodes:
- Durations and the full unit vocabulary
- Chained durations (order preserved)
- Synonyms, weekdays, months, period boundaries, ordinals
- ISO-8601 durations
- Disambiguation order and error reporting

Run with: pytest tests/test_exprgrammar.py -v
"""

import pytest

from taskdate.expression.exprast import (
    Boundary,
    ChainedDuration,
    Duration,
    IsoDuration,
    Month,
    Ordinal,
    PeriodBoundary,
    Sign,
    Synonym,
    SynonymKind,
    Unit,
    Weekday,
)
from taskdate.expression.exprerrors import ParseError
from taskdate.expression.exprgrammar import parse_expression
from taskdate.expression.exprnormalize import (
    normalize_expression_text,
    suggest_keyword,
)


def single(amount, unit, sign=Sign.PLUS):
    """A chain holding one duration, as the parser returns for '+7d'."""
    return ChainedDuration((Duration(amount=amount, unit=unit, sign=sign),))


# ============================================================================
# Duration Tests
# ============================================================================

class TestDurations:
    """Test simple durations"""

    def test_positive_days(self):
        """Test '+7d'"""
        assert parse_expression("+7d") == single(7, Unit.DAYS)

    def test_negative_days(self):
        """Test '-3d'"""
        assert parse_expression("-3d") == single(3, Unit.DAYS, Sign.MINUS)

    def test_missing_sign_defaults_to_plus(self):
        """Test '5d' has a + sign"""
        node = parse_expression("5d")
        assert node.durations[0].sign is Sign.PLUS

    def test_multi_digit_amount(self):
        """Test '365d'"""
        assert parse_expression("365d") == single(365, Unit.DAYS)

    def test_zero_amount_is_legal(self):
        """Test '0d' parses (evaluates as a no-op)"""
        assert parse_expression("0d") == single(0, Unit.DAYS)

    @pytest.mark.parametrize("token,unit", [
        ("s", Unit.SECONDS), ("sec", Unit.SECONDS), ("secs", Unit.SECONDS),
        ("second", Unit.SECONDS), ("seconds", Unit.SECONDS),
        ("min", Unit.MINUTES), ("mins", Unit.MINUTES),
        ("h", Unit.HOURS), ("hr", Unit.HOURS), ("hrs", Unit.HOURS),
        ("hour", Unit.HOURS), ("hours", Unit.HOURS),
        ("d", Unit.DAYS), ("day", Unit.DAYS), ("days", Unit.DAYS),
        ("w", Unit.WEEKS), ("wk", Unit.WEEKS), ("wks", Unit.WEEKS),
        ("week", Unit.WEEKS), ("weeks", Unit.WEEKS),
        ("m", Unit.MONTHS), ("mo", Unit.MONTHS), ("mth", Unit.MONTHS),
        ("mths", Unit.MONTHS), ("month", Unit.MONTHS), ("months", Unit.MONTHS),
        ("y", Unit.YEARS), ("yr", Unit.YEARS), ("yrs", Unit.YEARS),
        ("year", Unit.YEARS), ("years", Unit.YEARS),
    ])
    def test_unit_vocabulary(self, token, unit):
        """Test every unit token maps to its unit"""
        assert parse_expression(f"+2{token}") == single(2, unit)


class TestChainedDurations:
    """Test durations concatenated without separators"""

    def test_two_terms(self):
        """Test '+1d+9h'"""
        node = parse_expression("+1d+9h")
        assert node == ChainedDuration((
            Duration(1, Unit.DAYS),
            Duration(9, Unit.HOURS),
        ))

    def test_mixed_signs(self):
        """Test '-2w+3d'"""
        node = parse_expression("-2w+3d")
        assert node.durations == (
            Duration(2, Unit.WEEKS, Sign.MINUS),
            Duration(3, Unit.DAYS, Sign.PLUS),
        )

    def test_order_is_written_order(self):
        """Test '+1y+2m+3d' keeps left-to-right order"""
        units = [d.unit for d in parse_expression("+1y+2m+3d").durations]
        assert units == [Unit.YEARS, Unit.MONTHS, Unit.DAYS]

    def test_unsigned_terms(self):
        """Test '1d2h' (no signs at all)"""
        node = parse_expression("1d2h")
        assert node.durations == (Duration(1, Unit.DAYS), Duration(2, Unit.HOURS))

    def test_minutes_inside_chain(self):
        """Test '+1d+2h+30min'"""
        node = parse_expression("+1d+2h+30min")
        assert node.durations[-1] == Duration(30, Unit.MINUTES)


# ============================================================================
# Keyword Tests
# ============================================================================

class TestSynonyms:
    """Test date synonyms"""

    @pytest.mark.parametrize("text,kind", [
        ("now", SynonymKind.NOW),
        ("today", SynonymKind.TODAY),
        ("yesterday", SynonymKind.YESTERDAY),
        ("tomorrow", SynonymKind.TOMORROW),
    ])
    def test_synonyms(self, text, kind):
        assert parse_expression(text) == Synonym(kind)

    def test_case_insensitive(self):
        """Test 'TODAY' and 'Tomorrow'"""
        assert parse_expression("TODAY") == Synonym(SynonymKind.TODAY)
        assert parse_expression("Tomorrow") == Synonym(SynonymKind.TOMORROW)


class TestWeekdays:
    """Test weekday names"""

    @pytest.mark.parametrize("full,abbr,day", [
        ("monday", "mon", 1),
        ("tuesday", "tue", 2),
        ("wednesday", "wed", 3),
        ("thursday", "thu", 4),
        ("friday", "fri", 5),
        ("saturday", "sat", 6),
        ("sunday", "sun", 7),
    ])
    def test_full_and_abbreviated(self, full, abbr, day):
        assert parse_expression(full) == Weekday(day)
        assert parse_expression(abbr) == Weekday(day)

    def test_full_name_not_cut_short(self):
        """Test 'monday' is consumed whole, not 'mon' + trailing 'day'"""
        assert parse_expression("Monday") == Weekday(1)


class TestMonths:
    """Test month names"""

    @pytest.mark.parametrize("full,abbr,month", [
        ("january", "jan", 1),
        ("february", "feb", 2),
        ("march", "mar", 3),
        ("april", "apr", 4),
        ("june", "jun", 6),
        ("july", "jul", 7),
        ("august", "aug", 8),
        ("september", "sep", 9),
        ("october", "oct", 10),
        ("november", "nov", 11),
        ("december", "dec", 12),
    ])
    def test_full_and_abbreviated(self, full, abbr, month):
        assert parse_expression(full) == Month(month)
        assert parse_expression(abbr) == Month(month)

    def test_may(self):
        """Test 'may' has no separate abbreviation"""
        assert parse_expression("may") == Month(5)


class TestPeriodBoundaries:
    """Test period boundary tokens"""

    @pytest.mark.parametrize("text,boundary", [
        ("sow", Boundary.START_OF_WEEK),
        ("socw", Boundary.START_OF_WEEK),
        ("eow", Boundary.END_OF_WEEK),
        ("eocw", Boundary.END_OF_WEEK),
        ("som", Boundary.START_OF_MONTH),
        ("socm", Boundary.START_OF_MONTH),
        ("eom", Boundary.END_OF_MONTH),
        ("eocm", Boundary.END_OF_MONTH),
        ("soy", Boundary.START_OF_YEAR),
        ("socy", Boundary.START_OF_YEAR),
        ("eoy", Boundary.END_OF_YEAR),
        ("eocy", Boundary.END_OF_YEAR),
        ("soq", Boundary.START_OF_QUARTER),
        ("eoq", Boundary.END_OF_QUARTER),
        ("eod", Boundary.END_OF_DAY),
    ])
    def test_boundaries(self, text, boundary):
        assert parse_expression(text) == PeriodBoundary(boundary)


# ============================================================================
# Ordinal Tests
# ============================================================================

class TestOrdinals:
    """Test day-of-month ordinals"""

    @pytest.mark.parametrize("text,day", [
        ("1st", 1), ("2nd", 2), ("3rd", 3), ("4th", 4),
        ("15th", 15), ("21st", 21), ("31st", 31),
    ])
    def test_ordinals(self, text, day):
        assert parse_expression(text) == Ordinal(day)

    def test_suffix_agreement_not_checked(self):
        """Test '2st' is accepted as ordinal 2"""
        assert parse_expression("2st") == Ordinal(2)

    def test_zero_rejected(self):
        """Test '0th' is not an ordinal"""
        with pytest.raises(ParseError):
            parse_expression("0th")

    def test_out_of_range_rejected(self):
        """Test '32nd' is rejected rather than clamped"""
        with pytest.raises(ParseError):
            parse_expression("32nd")

    def test_seconds_not_confused_with_ordinal(self):
        """Test '1s' is one second and '1st' is the first"""
        assert parse_expression("1s") == single(1, Unit.SECONDS)
        assert parse_expression("1st") == Ordinal(1)


# ============================================================================
# ISO-8601 Tests
# ============================================================================

class TestIsoDurations:
    """Test ISO-8601 durations"""

    def test_days(self):
        """Test 'P3D'"""
        assert parse_expression("P3D") == IsoDuration(((Unit.DAYS, 3),))

    def test_weeks(self):
        """Test 'P2W'"""
        assert parse_expression("P2W") == IsoDuration(((Unit.WEEKS, 2),))

    def test_time_only(self):
        """Test 'PT1H'"""
        assert parse_expression("PT1H") == IsoDuration(((Unit.HOURS, 1),))

    def test_full(self):
        """Test 'P1Y2M3DT12H40M50S'"""
        node = parse_expression("P1Y2M3DT12H40M50S")
        assert node.as_dict() == {
            "years": 1,
            "months": 2,
            "days": 3,
            "hours": 12,
            "minutes": 40,
            "seconds": 50,
        }

    def test_month_vs_minute_letter(self):
        """Test M is months before T and minutes after T"""
        assert parse_expression("P2M").as_dict() == {"months": 2}
        assert parse_expression("PT2M").as_dict() == {"minutes": 2}

    def test_sparse_keys(self):
        """Test only written components are present"""
        node = parse_expression("P1YT30S")
        assert node.as_dict() == {"years": 1, "seconds": 30}
        assert node.get(Unit.MONTHS) is None

    def test_lowercase(self):
        """Test 'p1d' is accepted"""
        assert parse_expression("p1d").as_dict() == {"days": 1}

    def test_empty_p(self):
        """Test bare 'P' is an error"""
        with pytest.raises(ParseError, match="empty ISO-8601 duration"):
            parse_expression("P")

    def test_empty_pt(self):
        """Test 'PT' is an error"""
        with pytest.raises(ParseError, match="empty ISO-8601 duration"):
            parse_expression("PT")

    def test_weeks_exclusive_with_date_part(self):
        """Test 'P1Y2W' does not combine weeks with years"""
        with pytest.raises(ParseError, match="trailing input"):
            parse_expression("P1Y2W")

    def test_out_of_order_components(self):
        """Test 'P1D2Y' is rejected"""
        with pytest.raises(ParseError, match="trailing input: 2y"):
            parse_expression("P1D2Y")


# ============================================================================
# Disambiguation Tests
# ============================================================================

class TestDisambiguation:
    """Test the ordered-alternative disambiguation"""

    def test_min_is_minutes(self):
        """Test '30min' is minutes"""
        assert parse_expression("30min") == single(30, Unit.MINUTES)

    def test_m_is_months(self):
        """Test '3m' is months"""
        assert parse_expression("3m") == single(3, Unit.MONTHS)

    def test_mins_is_minutes(self):
        """Test '45mins' is minutes"""
        assert parse_expression("45mins") == single(45, Unit.MINUTES)

    def test_mo_is_months(self):
        """Test '2mo' is months"""
        assert parse_expression("2mo") == single(2, Unit.MONTHS)

    def test_socw_before_sow(self):
        """Test 'socw' matches as one token"""
        assert parse_expression("socw") == PeriodBoundary(Boundary.START_OF_WEEK)
        assert parse_expression("eocy") == PeriodBoundary(Boundary.END_OF_YEAR)

    def test_iso_before_names(self):
        """Test 'P3D' is an ISO duration"""
        assert isinstance(parse_expression("P3D"), IsoDuration)


# ============================================================================
# Error Tests
# ============================================================================

class TestErrors:
    """Test parse failures"""

    def test_empty(self):
        """Test '' and whitespace-only"""
        with pytest.raises(ParseError):
            parse_expression("")
        with pytest.raises(ParseError):
            parse_expression("   ")

    def test_invalid(self):
        """Test 'invalid' reports the offending input"""
        with pytest.raises(ParseError, match="unrecognized expression: 'invalid'"):
            parse_expression("invalid")

    def test_trailing_input(self):
        """Test 'mondayx' reports the remainder"""
        with pytest.raises(ParseError, match="unexpected trailing input: x"):
            parse_expression("mondayx")

    def test_internal_whitespace_rejected(self):
        """Test '+1d +9h' is not a chain"""
        with pytest.raises(ParseError, match="trailing input"):
            parse_expression("+1d +9h")

    def test_edge_whitespace_ignored(self):
        """Test '  eom  '"""
        assert parse_expression("  eom  ") == PeriodBoundary(Boundary.END_OF_MONTH)

    @pytest.mark.parametrize("text", [
        "1" * 5000 + "d",
        "9" * 5000 + "th",
        "p" + "2" * 5000 + "y",
    ])
    def test_oversized_amount(self, text):
        """Test digit runs too long for int() fail as ParseError"""
        with pytest.raises(ParseError, match="amount too large"):
            parse_expression(text)

    def test_missing_unit(self):
        """Test '+7' fails"""
        with pytest.raises(ParseError):
            parse_expression("+7")

    def test_unknown_unit(self):
        """Test '7x' fails"""
        with pytest.raises(ParseError):
            parse_expression("7x")

    def test_suggestion_for_typo(self):
        """Test a misspelled keyword gets a hint"""
        with pytest.raises(ParseError, match="did you mean 'tomorrow'"):
            parse_expression("tomorow")


# ============================================================================
# Normalization Tests
# ============================================================================

class TestExpressionNormalization:
    """Test normalization helpers"""

    def test_normalize_basic(self):
        assert normalize_expression_text("  EOM ") == "eom"
        assert normalize_expression_text("P1Y2M3D") == "p1y2m3d"

    def test_normalize_keeps_internal_whitespace(self):
        assert normalize_expression_text(" +1d +9h ") == "+1d +9h"

    def test_normalize_empty(self):
        assert normalize_expression_text("") == ""
        assert normalize_expression_text(None) == ""

    def test_suggest_keyword(self):
        assert suggest_keyword("yesterdy") == "yesterday"
        assert suggest_keyword("tomorow") == "tomorrow"

    def test_suggest_keyword_ignores_numbers(self):
        assert suggest_keyword("+7") is None
        assert suggest_keyword("") is None
