"""
Spreadsheet CSV: typed tokenizing of spreadsheet-exported delimited text.
"""

__version__ = "1.0.0"

from spreadsheet_csv.casting import get_typed_value
from spreadsheet_csv.config_models import DEFAULT_NULL, ParseOptions, ReaderConfig
from spreadsheet_csv.csv_line import CsvLine
from spreadsheet_csv.formula import FormulaValue
from spreadsheet_csv.models import FieldKind, ReadStats, field_kind
from spreadsheet_csv.reader import CsvReader, CsvReadError, lines, lines_array, load, load_lines
from spreadsheet_csv.temporal import (
    DEFAULT_DATE_TIME,
    DateTimeFormat,
    IsoDateTimeFormat,
    PatternDateTimeFormat,
)
from spreadsheet_csv.tokenizer import ScanState, Tokenizer, parse, split

__all__ = [
    "parse",
    "split",
    "Tokenizer",
    "ScanState",
    "ParseOptions",
    "ReaderConfig",
    "DEFAULT_NULL",
    "DEFAULT_DATE_TIME",
    "DateTimeFormat",
    "IsoDateTimeFormat",
    "PatternDateTimeFormat",
    "FormulaValue",
    "FieldKind",
    "field_kind",
    "CsvLine",
    "CsvReader",
    "CsvReadError",
    "ReadStats",
    "get_typed_value",
    "lines",
    "lines_array",
    "load",
    "load_lines",
]
