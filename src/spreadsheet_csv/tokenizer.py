"""
Line tokenizer.

Splits one logical record of delimiter-separated text into typed cells the
way spreadsheet exports write them: single or double quoted fields with
doubled-quote escapes, ``=`` formula markers, and type inference for
unquoted tokens (number, boolean, date/time, null or text).

The scan is a single left-to-right pass driven by ScanState. It never
raises for malformed data; anything that cannot be typed is kept as text.
"""

import logging
import os
from enum import Enum, auto
from typing import Any, Iterable, List, Optional, Tuple

from spreadsheet_csv.casting import get_typed_value, number_or_text
from spreadsheet_csv.config_models import DEFAULT_NULL, QUOTE_CHARS, ParseOptions
from spreadsheet_csv.csv_line import CsvLine
from spreadsheet_csv.formula import FormulaValue
from spreadsheet_csv.temporal import DEFAULT_DATE_TIME, DateTimeFormat

logger = logging.getLogger(__name__)

Row = Tuple[Any, ...]


class ScanState(Enum):
    """Tokenizer states."""
    START = auto()
    IN_QUOTED_FIELD = auto()
    IN_UNQUOTED_FIELD = auto()
    IN_NUMERIC_FIELD = auto()


def _formula_marker(line: str, pos: int) -> Optional[int]:
    """Return the index of a ``=`` following pos across spaces only."""
    for x in range(pos + 1, len(line)):
        c = line[x]
        if c == "=":
            return x
        if c != " ":
            return None
    return None


class Tokenizer:
    """Tokenizes lines with one immutable set of options.

    A Tokenizer keeps no state between calls, so a single instance may be
    shared by concurrent callers.

    Args:
        options: Parse options (defaults: comma delimiter, ISO dates,
                 ``null`` as the null word)
    """

    def __init__(self, options: Optional[ParseOptions] = None):
        self.options = options or ParseOptions()

    def tokenize(self, line: str) -> Row:
        """Split line into typed cell values.

        Args:
            line: One logical record, without its line terminator

        Returns:
            Tuple of cell values in positional order
        """
        delimiter = self.options.delimiter
        fields: List[Any] = []
        length = len(line)

        state = ScanState.START
        start = 0
        quote_char = '"'
        formula = False
        # Set after a delimiter is consumed and until the next field is emitted
        awaiting_field = True

        i = 0
        while i < length:
            ch = line[i]

            if state is ScanState.START:
                start = i
                formula = False
                if ch == delimiter:
                    if awaiting_field:
                        fields.append(None)
                    awaiting_field = True
                elif ch in QUOTE_CHARS:
                    state = ScanState.IN_QUOTED_FIELD
                    start = i + 1
                    quote_char = ch
                elif ch == "=":
                    state = ScanState.IN_UNQUOTED_FIELD
                    formula = True
                elif ch == "-" or ch == "." or ch.isdecimal():
                    state = ScanState.IN_NUMERIC_FIELD
                elif not ch.isspace():
                    state = ScanState.IN_UNQUOTED_FIELD

                if state is ScanState.IN_QUOTED_FIELD or state is ScanState.IN_UNQUOTED_FIELD:
                    # A '=' after leading spaces marks the field as a formula
                    marker = _formula_marker(line, i)
                    if marker is not None:
                        formula = True
                        i = marker

            elif state is ScanState.IN_QUOTED_FIELD:
                if ch == quote_char:
                    if i + 1 < length and line[i + 1] == quote_char:
                        i += 1  # escaped quote: step over the pair
                    else:
                        text = line[start:i].replace(quote_char * 2, quote_char)
                        fields.append(self._quoted_value(text, formula))
                        awaiting_field = False
                        state = ScanState.START

            elif state is ScanState.IN_NUMERIC_FIELD:
                if ch == delimiter:
                    fields.append(number_or_text(line[start:i].strip()))
                    awaiting_field = True
                    state = ScanState.START
                elif not (ch.isdecimal() or ch.isspace() or ch == "."):
                    # Not a number after all; same character, unquoted rules
                    state = ScanState.IN_UNQUOTED_FIELD
                    continue

            elif state is ScanState.IN_UNQUOTED_FIELD:
                if ch == delimiter:
                    fields.append(self._unquoted_value(line[start:i], formula))
                    awaiting_field = True
                    state = ScanState.START

            i += 1

        # Flush whatever field the end of input interrupted
        if state is ScanState.IN_UNQUOTED_FIELD:
            fields.append(self._unquoted_value(line[start:], formula))
        elif state is ScanState.IN_NUMERIC_FIELD:
            fields.append(number_or_text(line[start:].strip()))
        elif state is ScanState.IN_QUOTED_FIELD:
            logger.debug(f"Unterminated quoted field at offset {start - 1}, keeping text")
            text = line[start:].replace(quote_char * 2, quote_char)
            fields.append(text + os.linesep)
        elif awaiting_field and fields:
            fields.append(None)

        return tuple(fields)

    def tokenize_all(self, lines: Iterable[str]) -> List[Row]:
        """Tokenize each line in order."""
        return [self.tokenize(line) for line in lines]

    def _quoted_value(self, text: str, formula: bool) -> Any:
        if formula:
            return FormulaValue(text)
        if self.options.numbered_text:
            return number_or_text(text)
        return text

    def _unquoted_value(self, raw: str, formula: bool) -> Any:
        text = raw.strip()
        if formula:
            return FormulaValue(text)
        if not text or text in self.options.null_values:
            return None
        return get_typed_value(text, self.options.formatter)


_DEFAULT_TOKENIZER = Tokenizer()


def parse(line: str,
          numbered_text: bool = False,
          delimiter: str = ",",
          formatter: DateTimeFormat = DEFAULT_DATE_TIME,
          null_values: Optional[Iterable[str]] = DEFAULT_NULL) -> Row:
    """Split a line into typed cell values.

    Args:
        line: One logical record, without its line terminator
        numbered_text: Parse quoted numeric text as numbers
        delimiter: Field delimiter character
        formatter: Date/time format (or strptime pattern) for unquoted tokens
        null_values: Unquoted tokens read as null

    Returns:
        Tuple of cell values: None, bool, float, date, datetime,
        FormulaValue or str

    Raises:
        ValidationError: If the options are invalid (e.g. a two-character delimiter)
    """
    if (not numbered_text and delimiter == "," and formatter is DEFAULT_DATE_TIME
            and null_values is DEFAULT_NULL):
        return _DEFAULT_TOKENIZER.tokenize(line)

    options = ParseOptions(
        delimiter=delimiter,
        numbered_text=numbered_text,
        formatter=formatter,
        null_values=null_values,
    )
    return Tokenizer(options).tokenize(line)


def split(line: str,
          numbered_text: bool = False,
          delimiter: str = ",",
          formatter: DateTimeFormat = DEFAULT_DATE_TIME,
          null_values: Optional[Iterable[str]] = DEFAULT_NULL) -> CsvLine:
    """Split a line and wrap the row in a typed accessor.

    Takes the same arguments as parse().
    """
    return CsvLine(parse(line, numbered_text, delimiter, formatter, null_values))
