"""
Command-line interface for the spreadsheet CSV tokenizer.

This module handles CLI argument parsing, logging configuration,
and rendering of tokenized rows as JSON lines.
"""

import argparse
import json
import logging
import math
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from spreadsheet_csv.config_models import ReaderConfig
from spreadsheet_csv.models import FieldKind, field_kind
from spreadsheet_csv.orchestrator import FileProcessingError, read_files
from spreadsheet_csv.tokenizer import Row

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

# Delimiters that are awkward to type on a command line
DELIMITER_ALIASES = {"\\t": "\t", "tab": "\t", "space": " ", "pipe": "|"}


def render_cell(value: Any) -> Dict[str, Any]:
    """Render a cell as a JSON-ready {"type", "value"} mapping."""
    kind = field_kind(value)
    if kind in (FieldKind.DATE, FieldKind.DATETIME, FieldKind.ZONED_DATETIME):
        rendered = value.isoformat()
    elif kind == FieldKind.FORMULA:
        rendered = str(value)
    elif kind == FieldKind.NUMBER and not math.isfinite(value):
        # Strict JSON has no NaN/Infinity literals
        rendered = repr(value).replace("inf", "Infinity").replace("nan", "NaN")
    else:
        rendered = value
    return {"type": kind.value, "value": rendered}


def render_row(row: Row) -> str:
    """Render a row as one line of JSON."""
    return json.dumps([render_cell(cell) for cell in row], ensure_ascii=False, allow_nan=False)


def build_config(args: argparse.Namespace) -> ReaderConfig:
    """Merge the optional config file with command-line overrides.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValidationError: If the merged configuration is invalid
    """
    data: Dict[str, Any] = {}
    if args.config:
        data = ReaderConfig.from_json_file(args.config).model_dump()

    overrides = {
        "delimiter": DELIMITER_ALIASES.get(args.delimiter, args.delimiter),
        "encoding": args.encoding,
        "date_format": args.date_format,
        "null_values": args.null_value,
    }
    for key, value in overrides.items():
        if value is not None:
            data[key] = value
    if args.numbered_text:
        data["numbered_text"] = True
    if args.skip_blank_lines:
        data["skip_blank_lines"] = True

    return ReaderConfig.from_dict(data)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point.

    Returns:
        Exit code: 0 = success, 1 = all files failed, 2 = partial failure
    """
    parser = argparse.ArgumentParser(
        description="Tokenize spreadsheet-exported delimited text into typed cells",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print typed rows of a CSV export as JSON lines
  spreadsheet-csv export.csv

  # Tab-separated file with dd/mm/yy dates
  spreadsheet-csv --delimiter tab --date-format %d/%m/%y export.txt

  # Settings from a JSON config file, quoted numbers read as numbers
  spreadsheet-csv --config reader.json --numbered-text export.csv
        """
    )
    parser.add_argument("input_files", nargs="+", type=Path, help="Input files")
    parser.add_argument("--config", type=Path, help="Reader config JSON file")
    parser.add_argument("--delimiter", help="Field delimiter (or: tab, space, pipe)")
    parser.add_argument("--encoding", help="Input encoding (default: utf-8)")
    parser.add_argument("--date-format", help="strptime pattern for dates (default: ISO)")
    parser.add_argument("--null-value", action="append",
                        help="Unquoted token read as null (repeatable, default: null)")
    parser.add_argument("--numbered-text", action="store_true",
                        help="Parse quoted numeric text as numbers")
    parser.add_argument("--skip-blank-lines", action="store_true",
                        help="Skip blank lines instead of emitting empty rows")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level")
    parser.add_argument("--fail-fast", action="store_true",
                        help="Stop processing on first file error (default: continue)")

    args = parser.parse_args(argv)
    logging.getLogger().setLevel(args.log_level)

    def write_row(_path: Path, row: Row) -> None:
        sys.stdout.write(render_row(row) + "\n")

    try:
        config = build_config(args)
        file_stats, file_errors = read_files(config, args.input_files, write_row,
                                             fail_fast=args.fail_fast)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    except FileProcessingError as e:
        logger.error(f"File processing error: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1

    total_rows = sum(s.total_rows for s in file_stats.values())
    total_blank = sum(s.blank_rows for s in file_stats.values())
    logger.info(f"Total rows: {total_rows:,}")
    if total_blank > 0:
        logger.info(f"Blank lines skipped: {total_blank:,}")

    if file_errors:
        logger.error(f"FILE PROCESSING ERRORS ({len(file_errors)} files failed):")
        for file_path, error_msg in file_errors.items():
            logger.error(f"  {file_path}: {error_msg}")

    failed_file_count = len(file_errors)
    if failed_file_count == 0:
        return 0
    elif failed_file_count == len(args.input_files):
        return 1
    else:
        return 2


if __name__ == "__main__":
    sys.exit(main())
