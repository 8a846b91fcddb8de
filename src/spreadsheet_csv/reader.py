"""
Line-by-line reading of delimited files.

Files and streams are read lazily, one physical line at a time, and each
line is handed to a Tokenizer. Quoted fields are not joined across
physical lines.
"""

import io
import logging
import time
from pathlib import Path
from typing import IO, Iterable, Iterator, List, Optional, Union

from spreadsheet_csv.config_models import ParseOptions, ReaderConfig
from spreadsheet_csv.csv_line import CsvLine
from spreadsheet_csv.models import ReadStats
from spreadsheet_csv.temporal import DateTimeFormat
from spreadsheet_csv.tokenizer import Row, Tokenizer

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class CsvReadError(Exception):
    """Raised when a line cannot be read from the source."""

    def __init__(self, message: str, source: str, line_number: int):
        self.source = source
        self.line_number = line_number
        super().__init__(f"{source}, line {line_number}: {message}")


class CsvReader:
    """Reads delimited text with one configuration.

    Args:
        config: Reader configuration (defaults when None)
        options: Parse options overriding those derived from config

    Example:
        >>> reader = CsvReader(ReaderConfig(delimiter="|"))
        >>> for row in reader.read_path(Path("export.txt")):
        ...     print(row)
    """

    def __init__(self, config: Optional[ReaderConfig] = None,
                 options: Optional[ParseOptions] = None):
        self.config = config or ReaderConfig()
        self.tokenizer = Tokenizer(options or self.config.parse_options())
        self.stats = ReadStats()

    def iter_rows(self, lines: Iterable[str], source: str = "<lines>") -> Iterator[Row]:
        """Tokenize lines lazily.

        Args:
            lines: Physical lines, with or without their line terminators
            source: Name used in log and error messages

        Yields:
            One row per line (blank lines skipped if configured)
        """
        line_number = 0
        iterator = iter(lines)
        try:
            while True:
                try:
                    line = next(iterator)
                except StopIteration:
                    break
                except UnicodeDecodeError as e:
                    raise CsvReadError(f"cannot decode as {self.config.encoding}: {e}",
                                       source, line_number + 1) from e
                line_number += 1
                line = _strip_terminator(line)

                if self.config.skip_blank_lines and not line.strip():
                    logger.debug(f"Skipping blank line {line_number} in {source}")
                    self.stats.blank_rows += 1
                    continue

                row = self.tokenizer.tokenize(line)
                self.stats.total_rows += 1
                self.stats.total_fields += len(row)
                self._log_progress(source, self.stats.total_rows)
                yield row
        finally:
            self.stats.end_time = time.time()

    def read_path(self, path: PathLike) -> Iterator[Row]:
        """Read and tokenize a file.

        Raises:
            FileNotFoundError: If the file does not exist
            CsvReadError: If a line cannot be decoded
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")

        logger.info(f"Reading {path.name} (encoding={self.config.encoding}, "
                    f"delimiter={self.config.delimiter!r})")
        with open(path, "r", encoding=self.config.encoding, newline=None) as f:
            yield from self.iter_rows(f, source=str(path))

    def read_stream(self, stream: IO, source: str = "<stream>") -> Iterator[Row]:
        """Read and tokenize a text or binary stream.

        Binary streams are decoded with the configured encoding.
        """
        if isinstance(stream, io.TextIOBase):
            yield from self.iter_rows(stream, source=source)
            return

        text = io.TextIOWrapper(stream, encoding=self.config.encoding, newline=None)
        try:
            yield from self.iter_rows(text, source=source)
        finally:
            # Leave the caller's stream open
            text.detach()

    def _log_progress(self, source: str, row_num: int) -> None:
        interval = self.config.progress_interval
        if interval > 0 and row_num % interval == 0:
            logger.info(f"[{source}] Processed {row_num:,} rows")


def _strip_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n") or line.endswith("\r"):
        return line[:-1]
    return line


def _reader(encoding: str, numbered_text: bool, delimiter: str,
            formatter: Union[None, str, DateTimeFormat]) -> CsvReader:
    config = ReaderConfig(encoding=encoding, numbered_text=numbered_text, delimiter=delimiter)
    options = ParseOptions(delimiter=delimiter, numbered_text=numbered_text, formatter=formatter)
    return CsvReader(config, options=options)


def lines_array(source: Union[PathLike, IO],
                encoding: str = "utf-8",
                numbered_text: bool = False,
                delimiter: str = ",",
                formatter: Union[None, str, DateTimeFormat] = None) -> Iterator[Row]:
    """Lazily tokenize every line of a file or stream.

    Args:
        source: File path, or an open text/binary stream
        encoding: Encoding for paths and binary streams
        numbered_text: Parse quoted numeric text as numbers
        delimiter: Field delimiter character
        formatter: Date/time format or strptime pattern (default ISO)

    Returns:
        Iterator of row tuples; file errors surface on first iteration
    """
    reader = _reader(encoding, numbered_text, delimiter, formatter)
    if hasattr(source, "read"):
        return reader.read_stream(source)
    return reader.read_path(source)


def lines(source: Union[PathLike, IO],
          encoding: str = "utf-8",
          numbered_text: bool = False,
          delimiter: str = ",",
          formatter: Union[None, str, DateTimeFormat] = None) -> Iterator[CsvLine]:
    """Like lines_array(), wrapping each row in a CsvLine."""
    for row in lines_array(source, encoding, numbered_text, delimiter, formatter):
        yield CsvLine(row)


def load(path: PathLike,
         encoding: str = "utf-8",
         numbered_text: bool = False,
         delimiter: str = ",",
         formatter: Union[None, str, DateTimeFormat] = None) -> List[Row]:
    """Read a whole file into a list of row tuples."""
    return list(lines_array(path, encoding, numbered_text, delimiter, formatter))


def load_lines(path: PathLike,
               encoding: str = "utf-8",
               numbered_text: bool = False,
               delimiter: str = ",",
               formatter: Union[None, str, DateTimeFormat] = None) -> List[CsvLine]:
    """Read a whole file into a list of CsvLine rows."""
    return list(lines(path, encoding, numbered_text, delimiter, formatter))
