"""Exceptions raised while parsing and evaluating date expressions."""


class TaskdateError(ValueError):
    """Base class for all taskdate errors."""


class ParseError(TaskdateError):
    """Expression text does not match the grammar."""


class CalcError(TaskdateError):
    """A parsed expression could not be turned into a date."""


class ExpressionError(TaskdateError):
    """Raised by parse_strict(); keeps the original input for diagnostics."""

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"Failed to parse '{text}': {reason}")


__all__ = [
    "TaskdateError",
    "ParseError",
    "CalcError",
    "ExpressionError",
]
