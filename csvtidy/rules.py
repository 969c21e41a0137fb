"""
Deterministic cleaning and rendering limits.

This file exists to make downstream application ceilings explicit.
"""

EXCEL_CELL_CHAR_LIMIT = 32767  # characters per cell
NUMBERS_ROW_LIMIT = 65535  # rows per table, header included

DEFAULT_MAX_COLUMN_WIDTH = 20
TRUNCATION_MARKER = "..."

TARGET_ENCODING = "utf-8-sig"  # UTF-8 with BOM, API envelope only
OUTPUT_LINE_TERMINATOR = "\n"

LOG_LEVEL_ENV = "CSVTIDY_LOG_LEVEL"

# csv module field size ceiling; the largest value a C long holds everywhere
CSV_FIELD_SIZE_LIMIT = 2**31 - 1
