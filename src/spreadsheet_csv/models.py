"""
Data models and structures for tokenized rows.
"""

import time
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from spreadsheet_csv.formula import FormulaValue


class FieldKind(str, Enum):
    """Variants a tokenized cell can take."""
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    DATE = "date"
    DATETIME = "datetime"
    ZONED_DATETIME = "zoned_datetime"
    FORMULA = "formula"
    TEXT = "text"


def field_kind(value: Any) -> FieldKind:
    """Classify a cell value produced by the tokenizer.

    Args:
        value: Cell value

    Returns:
        The FieldKind of value

    Raises:
        TypeError: When value is not a cell value type
    """
    if value is None:
        return FieldKind.NULL
    # bool before float, datetime before date: both are subclasses
    if isinstance(value, bool):
        return FieldKind.BOOLEAN
    if isinstance(value, float):
        return FieldKind.NUMBER
    if isinstance(value, datetime):
        return FieldKind.DATETIME if value.tzinfo is None else FieldKind.ZONED_DATETIME
    if isinstance(value, date):
        return FieldKind.DATE
    if isinstance(value, FormulaValue):
        return FieldKind.FORMULA
    if isinstance(value, str):
        return FieldKind.TEXT
    raise TypeError(f"Not a cell value: {type(value).__name__}")


@dataclass
class ReadStats:
    """Line reading statistics."""
    total_rows: int = 0
    blank_rows: int = 0  # Blank physical lines skipped (skip_blank_lines mode)
    total_fields: int = 0
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    @property
    def duration(self) -> float:
        """Get reading duration in seconds."""
        end = self.end_time or time.time()
        return end - self.start_time

    @property
    def rows_per_second(self) -> float:
        """Get processing throughput."""
        duration = self.duration
        return self.total_rows / duration if duration > 0 else 0
