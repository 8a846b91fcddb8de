"""
Orchestration logic for reading several delimited files.

This module contains the batch reading loop, independent of CLI concerns.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Dict, List, Tuple

from spreadsheet_csv.config_models import ReaderConfig
from spreadsheet_csv.models import ReadStats
from spreadsheet_csv.reader import CsvReader
from spreadsheet_csv.tokenizer import Row

logger = logging.getLogger(__name__)

RowHandler = Callable[[Path, Row], None]


class FileProcessingError(Exception):
    """Exception raised when a file fails to process."""
    pass


def read_files(
    config: ReaderConfig,
    input_files: List[Path],
    on_row: RowHandler,
    fail_fast: bool = False
) -> Tuple[Dict[str, ReadStats], Dict[str, str]]:
    """Tokenize every line of every input file.

    Args:
        config: Reader configuration shared by all files
        input_files: Files to read, in order
        on_row: Called with (file, row) for each row
        fail_fast: If True, stop on first file error (default: continue)

    Returns:
        Tuple: (stats per file, error message per failed file)

    Raises:
        FileProcessingError: On the first failing file when fail_fast is set
    """
    start_time = time.time()
    file_stats: Dict[str, ReadStats] = {}
    file_errors: Dict[str, str] = {}
    options = config.parse_options()

    for file_idx, input_file in enumerate(input_files, 1):
        file_start = time.time()
        reader = CsvReader(config, options=options)
        file_stats[str(input_file)] = reader.stats

        try:
            for row in reader.read_path(input_file):
                on_row(input_file, row)

            file_duration = time.time() - file_start
            logger.info(f"[{file_idx}/{len(input_files)}] Completed {input_file.name}: "
                        f"{reader.stats.total_rows:,} rows in {file_duration:.2f}s")

        except Exception as e:
            error_msg = f"{type(e).__name__}: {str(e)}"
            logger.error(f"[{file_idx}/{len(input_files)}] Failed {input_file.name}: {error_msg}")
            file_errors[str(input_file)] = error_msg

            if fail_fast:
                raise FileProcessingError(f"File processing failed: {error_msg}") from e
            # Otherwise continue to next file

    total_duration = time.time() - start_time
    failed = len(file_errors)
    logger.info(f"Files: {len(input_files) - failed} succeeded, {failed} failed "
                f"in {total_duration:.2f}s")

    return file_stats, file_errors
