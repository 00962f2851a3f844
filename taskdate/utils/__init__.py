"""Shared utilities for the taskdate package."""

from taskdate.utils.calendar import (
    days_in_month,
    shift_month,
    add_months,
    next_month,
    quarter_of,
    quarter_bounds,
    start_of_day,
    end_of_day,
    at_start_of_day,
    at_end_of_day,
)

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
