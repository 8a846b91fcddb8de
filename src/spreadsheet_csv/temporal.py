"""
Date and time formats used for type inference.

A format turns a token into the most specific temporal value it can
represent: a timezone-aware datetime, then a naive datetime, then a date.
Tokens that do not fully match return None so callers can fall back to text.
"""

import logging
import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

logger = logging.getLogger(__name__)

Temporal = Union[date, datetime]

_DATE = r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
_TIME = (
    r"(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})"
    r"(?::(?P<second>[0-9]{2})(?:\.(?P<fraction>[0-9]{1,9}))?)?"
)
_OFFSET = r"(?P<offset>Z|[+-][0-9]{2}:[0-9]{2}(?::[0-9]{2})?)"

# strptime directives grouped by the temporal fields they provide
_DATE_DIRECTIVES = frozenset("aAwdbBmyYjUWcxGuV")
_TIME_DIRECTIVES = frozenset("HIpMSfcX")
_ZONE_DIRECTIVES = frozenset("zZ")
_DIRECTIVE_RE = re.compile(r"%(.)")


class DateTimeFormat:
    """Base class for temporal formats."""

    def parse(self, text: str) -> Optional[Temporal]:
        """Parse text into the best matching temporal value.

        Args:
            text: Token to parse (already trimmed)

        Returns:
            Aware datetime, naive datetime or date; None if text does not match
        """
        raise NotImplementedError


class IsoDateTimeFormat(DateTimeFormat):
    """ISO-8601 format backed by a regular expression.

    Args:
        pattern: Regex built from the named date, time and offset groups
        name: Display name
    """

    def __init__(self, pattern: str, name: str):
        self._regex = re.compile(pattern, re.IGNORECASE)
        self.name = name

    def parse(self, text: str) -> Optional[Temporal]:
        match = self._regex.fullmatch(text)
        if not match:
            return None
        try:
            return _build_temporal(match.groupdict())
        except ValueError as e:
            logger.debug(f"'{text}' matched {self.name} but is not a valid value: {e}")
            return None

    def __repr__(self) -> str:
        return f"IsoDateTimeFormat({self.name})"


class PatternDateTimeFormat(DateTimeFormat):
    """Format defined by a ``strptime`` pattern such as ``%d/%m/%y``.

    The directives in the pattern decide which temporal value is produced:
    a zone directive gives an aware datetime, a time directive a naive
    datetime, and date directives alone a date. Patterns without any date
    directive never match.
    """

    def __init__(self, pattern: str):
        if not pattern:
            raise ValueError("pattern may not be empty")
        self.pattern = pattern
        directives = set(_DIRECTIVE_RE.findall(pattern.replace("%%", "")))
        self._has_date = bool(directives & _DATE_DIRECTIVES)
        self._has_time = bool(directives & _TIME_DIRECTIVES)
        self._has_zone = bool(directives & _ZONE_DIRECTIVES)

    def parse(self, text: str) -> Optional[Temporal]:
        if not self._has_date:
            return None
        try:
            parsed = datetime.strptime(text, self.pattern)
        except ValueError:
            return None
        if self._has_zone and parsed.tzinfo is not None:
            return parsed
        if self._has_time:
            return parsed.replace(tzinfo=None)
        return parsed.date()

    def __repr__(self) -> str:
        return f"PatternDateTimeFormat({self.pattern!r})"


def _build_temporal(parts: dict) -> Temporal:
    """Build a date or datetime from regex groups."""
    day = date(int(parts["year"]), int(parts["month"]), int(parts["day"]))
    if parts.get("hour") is None:
        return day

    fraction = parts.get("fraction") or ""
    moment = time(
        int(parts["hour"]),
        int(parts["minute"]),
        int(parts.get("second") or 0),
        int(fraction[:6].ljust(6, "0")),
    )
    value = datetime.combine(day, moment)

    offset = parts.get("offset")
    if not offset:
        return value
    if offset.upper() == "Z":
        return value.replace(tzinfo=timezone.utc)

    sign = -1 if offset[0] == "-" else 1
    fields = [int(p) for p in offset[1:].split(":")]
    delta = timedelta(hours=fields[0], minutes=fields[1],
                      seconds=fields[2] if len(fields) > 2 else 0)
    return value.replace(tzinfo=timezone(sign * delta))


DEFAULT_DATE_TIME = IsoDateTimeFormat(
    rf"{_DATE}T?[ ]?(?:{_TIME}{_OFFSET}?)?", "ISO_DATE_TIME"
)
ISO_LOCAL_DATE = IsoDateTimeFormat(_DATE, "ISO_LOCAL_DATE")
ISO_LOCAL_DATE_TIME = IsoDateTimeFormat(rf"{_DATE}T{_TIME}", "ISO_LOCAL_DATE_TIME")


def resolve_formatter(value: Union[None, str, DateTimeFormat]) -> DateTimeFormat:
    """Return a DateTimeFormat for None, a strptime pattern or a format."""
    if value is None:
        return DEFAULT_DATE_TIME
    if isinstance(value, DateTimeFormat):
        return value
    if isinstance(value, str):
        return PatternDateTimeFormat(value)
    raise TypeError(f"Cannot use {type(value).__name__} as a date/time format")
