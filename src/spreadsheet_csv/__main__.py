"""
Allow running as ``python -m spreadsheet_csv``.
"""

import sys

from spreadsheet_csv.cli import main

if __name__ == "__main__":
    sys.exit(main())
