"""
Type coercion for FDL.

Literal values in a listing are always strings. They become booleans,
integers, decimals or dates either through an explicit annotation

    Patient.active = ("yes" as boolean);
    Patient.birthDate = ("27/08/1967" as date => "%d/%m/%Y");

or by guessing while an assignment tries each way of setting a field.
Every failure raises CoercionError, which callers either report or treat
as "this conversion does not apply".
"""

import re
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Optional, Sequence, Union

from dateutil import parser as date_parser

from .errors import CoercionError


class DeclaredType(Enum):
    """Types that can follow 'as' in a typed literal (date is its own node)."""
    BOOLEAN = "boolean"
    INTEGER = "integer"
    DECIMAL = "decimal"


TRUE_VALUES = frozenset({"true", "yes", "y"})
FALSE_VALUES = frozenset({"false", "no", "n"})

# Tried strictly, in order, before free-form parsing when no explicit format is given
DEFAULT_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%m-%d-%Y",
    "%d-%m-%Y",
    "%Y/%m/%d",
    "%b %d, %Y",
    "%b %d %Y",
    "%B %d, %Y",
    "%B %d %Y",
    "%d %b %Y",
    "%d %B %Y",
)

_INTEGER_RE = re.compile(r"[+-]?\d+")
_DECIMAL_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")

TypedValue = Union[bool, int, float, date]


class TypeService:
    """String to typed value conversions with date format guessing."""

    def __init__(self, date_formats: Optional[Iterable[str]] = None):
        if date_formats is None:
            date_formats = DEFAULT_DATE_FORMATS
        self.date_formats: Sequence[str] = tuple(date_formats)

    def as_boolean(self, value: str) -> bool:
        """Interpret true/yes/y and false/no/n, ignoring case."""
        lowered = value.lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
        raise CoercionError(f"impossible to interpret '{value}' as 'boolean' value.")

    def as_integer(self, value: str) -> int:
        if not _INTEGER_RE.fullmatch(value.strip()):
            raise CoercionError(f"impossible to interpret '{value}' as 'integer' value.")
        return int(value)

    def as_decimal(self, value: str) -> float:
        if not _DECIMAL_RE.fullmatch(value.strip()):
            raise CoercionError(f"impossible to interpret '{value}' as 'decimal' value.")
        return float(value)

    def as_date(self, value: str, fmt: Optional[str] = None) -> date:
        """
        Parse a date string.

        Args:
            value: The date text, e.g. "Aug 27, 1967"
            fmt: A strptime format; when omitted the configured formats
                are tried in order, then free-form parsing (month first)

        Raises:
            CoercionError: If the text does not match
        """
        text = value.strip()
        if fmt is not None:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                raise CoercionError(
                    f"'{value}' does not match the date format '{fmt}'.") from None

        for candidate in self.date_formats:
            try:
                return datetime.strptime(text, candidate).date()
            except ValueError:
                continue

        try:
            return date_parser.parse(text, dayfirst=False).date()
        except (ValueError, OverflowError):
            raise CoercionError(f"unrecognized date format: '{value}'.") from None

    def coerce(self, value: str, declared_type: DeclaredType) -> TypedValue:
        """Convert a string according to an explicit type annotation."""
        if declared_type == DeclaredType.BOOLEAN:
            return self.as_boolean(value)
        if declared_type == DeclaredType.INTEGER:
            return self.as_integer(value)
        if declared_type == DeclaredType.DECIMAL:
            return self.as_decimal(value)
        raise ValueError(f"Unknown declared type: {declared_type}")
