"""Expression AST
--------------

Closed set of node types produced by the grammar and consumed by the
calculator. Every parse returns exactly one node; nodes are frozen and
can be compared, hashed and converted to plain dicts with ``to_dict()``.

Examples:
  >>> Duration(amount=7, unit=Unit.DAYS).to_dict()
  {'type': 'duration', 'sign': '+', 'amount': 7, 'unit': 'days'}

  >>> PeriodBoundary(Boundary.END_OF_MONTH).to_dict()
  {'type': 'period_boundary', 'boundary': 'end_of_month'}
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class Sign(Enum):
    PLUS = "+"
    MINUS = "-"

    @property
    def factor(self) -> int:
        return -1 if self is Sign.MINUS else 1


class Unit(Enum):
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"


# Order in which ISO-8601 components are applied
ISO_UNIT_ORDER = (
    Unit.YEARS,
    Unit.MONTHS,
    Unit.WEEKS,
    Unit.DAYS,
    Unit.HOURS,
    Unit.MINUTES,
    Unit.SECONDS,
)


class SynonymKind(Enum):
    NOW = "now"
    TODAY = "today"
    YESTERDAY = "yesterday"
    TOMORROW = "tomorrow"


class Boundary(Enum):
    START_OF_WEEK = "start_of_week"
    END_OF_WEEK = "end_of_week"
    START_OF_MONTH = "start_of_month"
    END_OF_MONTH = "end_of_month"
    START_OF_YEAR = "start_of_year"
    END_OF_YEAR = "end_of_year"
    START_OF_QUARTER = "start_of_quarter"
    END_OF_QUARTER = "end_of_quarter"
    END_OF_DAY = "end_of_day"


@dataclass(frozen=True)
class Duration:
    amount: int
    unit: Unit
    sign: Sign = Sign.PLUS

    @property
    def signed_amount(self) -> int:
        return self.amount * self.sign.factor

    def to_dict(self) -> dict:
        return {
            "type": "duration",
            "sign": self.sign.value,
            "amount": self.amount,
            "unit": self.unit.value,
        }


@dataclass(frozen=True)
class ChainedDuration:
    """Durations applied left to right, in the order written."""

    durations: Tuple[Duration, ...]

    def to_dict(self) -> dict:
        return {
            "type": "chained_duration",
            "durations": [d.to_dict() for d in self.durations],
        }


@dataclass(frozen=True)
class Synonym:
    kind: SynonymKind

    def to_dict(self) -> dict:
        return {"type": "synonym", "kind": self.kind.value}


@dataclass(frozen=True)
class Weekday:
    """ISO weekday: 1 = Monday ... 7 = Sunday."""

    day: int

    def to_dict(self) -> dict:
        return {"type": "weekday", "day": self.day}


@dataclass(frozen=True)
class Month:
    month: int

    def to_dict(self) -> dict:
        return {"type": "month", "month": self.month}


@dataclass(frozen=True)
class Ordinal:
    """Day of month, 1-31."""

    day: int

    def to_dict(self) -> dict:
        return {"type": "ordinal", "day": self.day}


@dataclass(frozen=True)
class PeriodBoundary:
    boundary: Boundary

    def to_dict(self) -> dict:
        return {"type": "period_boundary", "boundary": self.boundary.value}


@dataclass(frozen=True)
class IsoDuration:
    """
    Sparse ISO-8601 duration.

    ``components`` holds (unit, amount) pairs for the parts actually written,
    in ISO_UNIT_ORDER.
    """

    components: Tuple[Tuple[Unit, int], ...]

    def get(self, unit: Unit) -> Optional[int]:
        for component_unit, amount in self.components:
            if component_unit is unit:
                return amount
        return None

    def as_dict(self) -> dict:
        return {unit.value: amount for unit, amount in self.components}

    def to_dict(self) -> dict:
        return {"type": "iso_duration", "components": self.as_dict()}


Node = Union[
    Duration,
    ChainedDuration,
    Synonym,
    Weekday,
    Month,
    Ordinal,
    PeriodBoundary,
    IsoDuration,
]


__all__ = [
    "Sign",
    "Unit",
    "ISO_UNIT_ORDER",
    "SynonymKind",
    "Boundary",
    "Duration",
    "ChainedDuration",
    "Synonym",
    "Weekday",
    "Month",
    "Ordinal",
    "PeriodBoundary",
    "IsoDuration",
    "Node",
]
