"""
Hevy Stats — Import errors

Structural errors (FormatError, UnsupportedUnitError, MissingColumnError) abort
the import. RowShapeError and DateParseError are raised per row and recovered
by the builder, which skips the row and records a warning.
"""


class HevyStatsError(Exception):
    """Base class for every import error."""


class FormatError(HevyStatsError):
    """Empty input, missing header or unexpected columns."""


class UnsupportedUnitError(FormatError):
    """The export uses pounds (weight_lbs) instead of kilograms."""


class MissingColumnError(FormatError):
    """A required column — weight_kg in particular — is absent."""


class RowShapeError(HevyStatsError):
    def __init__(self, line_no: int, expected: int, got: int):
        self.line_no = line_no
        self.expected = expected
        self.got = got
        super().__init__(f"Row {line_no}: expected {expected} columns, got {got}")


class DateParseError(HevyStatsError):
    def __init__(self, text: str, reason: str = ""):
        self.text = text
        self.reason = reason
        msg = f"Invalid date format: {text!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)
