"""
Type casting utilities for cell values.

This module provides the opportunistic type inference applied to unquoted
tokens, along with the number and boolean conversions shared by the
tokenizer and the typed row accessor.
"""

import re
from typing import Any, Optional, Union

from spreadsheet_csv.temporal import DEFAULT_DATE_TIME, DateTimeFormat, Temporal

TRUE_WORDS = frozenset({"true", "t", "y", "yes", "on", "1"})
FALSE_WORDS = frozenset({"false", "f", "n", "no", "off", "0"})

# Decimal double literal: sign, mantissa, exponent and an optional type suffix
_NUMBER_RE = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[fFdD]?)"
)

# Single-character tokens are mapped before the word table is consulted.
# '0' -> True and '1' -> False is the legacy export behaviour; it disagrees
# with TRUE_WORDS/FALSE_WORDS and is kept for compatibility.
_SINGLE_CHAR_BOOLEANS = {"0": True, "1": False}


def safe_text(value: Any) -> Optional[str]:
    """Convert value to a trimmed string.

    Args:
        value: Any value to convert to string

    Returns:
        Trimmed string, or None if value is None or blank
    """
    if value is None:
        return None
    s = str(value).strip()
    return s if s else None


def to_boolean(value: str) -> Optional[bool]:
    """Match value against the boolean word table (case-insensitive).

    Returns:
        True/False for a recognised word, otherwise None
    """
    lower_s = value.lower()
    if lower_s in TRUE_WORDS:
        return True
    if lower_s in FALSE_WORDS:
        return False
    return None


def to_number(value: str) -> Optional[float]:
    """Parse value as a double-precision number.

    Accepts the decimal literal forms of a spreadsheet export: optional sign,
    digits with an optional fraction, optional exponent, an optional
    ``f``/``d`` suffix and the words ``NaN`` and ``Infinity``. Surrounding
    whitespace is ignored.

    Returns:
        Parsed float, or None if value is not a number
    """
    s = value.strip()
    if not _NUMBER_RE.fullmatch(s):
        return None
    if s[-1] in "fFdD":
        s = s[:-1]
    return float(s)


def number_or_text(value: str) -> Union[float, str]:
    """Return value as a float when it parses, otherwise unchanged."""
    number = to_number(value)
    return value if number is None else number


def get_typed_value(value: Optional[str],
                    formatter: DateTimeFormat = DEFAULT_DATE_TIME) -> Union[None, bool, Temporal, str]:
    """Infer the type of a raw unquoted token.

    Attempts, first match wins:

    1. single character ``0`` / ``1`` (mapped to True / False)
    2. boolean words: true, t, y, yes, on, 1 / false, f, n, no, off, 0
    3. temporal value via ``formatter`` (zoned, then local date-time, then date)
    4. the trimmed token as text

    Args:
        value: Raw token
        formatter: Date/time format used for temporal values

    Returns:
        None for blank input, otherwise bool, date/datetime or str
    """
    s = safe_text(value)
    if s is None:
        return None

    if len(s) == 1 and s in _SINGLE_CHAR_BOOLEANS:
        return _SINGLE_CHAR_BOOLEANS[s]

    bval = to_boolean(s)
    if bval is not None:
        return bval

    temporal = formatter.parse(s)
    if temporal is not None:
        return temporal
    return s
