"""
Typed access to a tokenized row.
"""

import math
from collections.abc import Sequence
from datetime import date, datetime, time
from typing import Any, Iterable, Optional

from spreadsheet_csv.casting import to_boolean, to_number
from spreadsheet_csv.temporal import (
    DEFAULT_DATE_TIME,
    ISO_LOCAL_DATE,
    ISO_LOCAL_DATE_TIME,
    PatternDateTimeFormat,
)


class CsvLine(Sequence):
    """Read-only row of cell values with coercing getters.

    Getters never raise for unexpected content: an index past the end of
    the row behaves like a null cell, and values that cannot be converted
    give the getter's default.

    Args:
        cells: Cell values in positional order
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Iterable[Any]):
        self._cells = tuple(cells)

    @property
    def cells(self) -> tuple:
        """The underlying cell values."""
        return self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, idx):
        return self._cells[idx]

    def __eq__(self, other) -> bool:
        if isinstance(other, CsvLine):
            return other._cells == self._cells
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._cells)

    def __repr__(self) -> str:
        return f"CsvLine({list(self._cells)!r})"

    def _cell(self, idx: int) -> Any:
        if 0 <= idx < len(self._cells):
            return self._cells[idx]
        return None

    def get_string(self, idx: int) -> Optional[str]:
        """Get cell as a string (formulas render with their ``=``)."""
        v = self._cell(idx)
        if v is None:
            return None
        if isinstance(v, str):
            return v
        return str(v)

    def get_int(self, idx: int, default: int = 0) -> int:
        """Get cell as an integer, truncating toward zero.

        Args:
            idx: Cell position
            default: Value for null, missing or non-numeric cells
        """
        number = self._number(idx)
        if number is None or not math.isfinite(number):
            return default
        return int(number)

    def get_float(self, idx: int, default: float = 0.0) -> float:
        """Get cell as a float.

        Args:
            idx: Cell position
            default: Value for null, missing or non-numeric cells
        """
        number = self._number(idx)
        return default if number is None else number

    def get_boolean(self, idx: int) -> bool:
        """Get cell as a boolean; False when absent or unrecognised."""
        v = self._cell(idx)
        if v is None:
            return False
        if isinstance(v, bool):
            return v
        if isinstance(v, float):
            return v != 0 and not math.isnan(v)
        s = v if isinstance(v, str) else str(v)
        if s == "1":
            return True
        return to_boolean(s) is True

    def get_date(self, idx: int, pattern: Optional[str] = None) -> Optional[date]:
        """Get cell as a date.

        Args:
            idx: Cell position
            pattern: strptime pattern for text cells (default ISO date)
        """
        v = self._cell(idx)
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, date):
            return v
        if isinstance(v, str) and v.strip():
            fmt = PatternDateTimeFormat(pattern) if pattern else ISO_LOCAL_DATE
            parsed = fmt.parse(v.strip())
            if isinstance(parsed, datetime):
                return parsed.date()
            return parsed
        return None

    def get_datetime(self, idx: int) -> Optional[datetime]:
        """Get cell as a datetime; dates are taken at midnight."""
        v = self._cell(idx)
        if isinstance(v, datetime):
            return v
        if isinstance(v, date):
            return datetime.combine(v, time())
        if isinstance(v, str) and v.strip():
            return ISO_LOCAL_DATE_TIME.parse(v.strip())
        return None

    def get_zoned_datetime(self, idx: int) -> Optional[datetime]:
        """Get cell as a timezone-aware datetime.

        Naive datetimes are placed in the system local zone; text must carry
        an ISO offset.
        """
        v = self._cell(idx)
        if isinstance(v, datetime):
            return v if v.tzinfo is not None else v.astimezone()
        if isinstance(v, str) and v.strip():
            parsed = DEFAULT_DATE_TIME.parse(v.strip())
            if isinstance(parsed, datetime) and parsed.tzinfo is not None:
                return parsed
        return None

    def _number(self, idx: int) -> Optional[float]:
        v = self._cell(idx)
        if v is None:
            return None
        if isinstance(v, bool):
            return float(v)
        if isinstance(v, float):
            return v
        if isinstance(v, str):
            return to_number(v)
        return to_number(str(v))
