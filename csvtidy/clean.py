"""
Rectangularization of ragged rows.

Responsibilities:
- canonical column count (last non-empty cell across all rows)
- trailing empty row trimming
- Excel per-cell and Numbers per-file limits
- verbose diagnostics, one per structural change
"""

from __future__ import annotations

import base64
import hashlib
import logging
from typing import IO, Callable, Iterator, List, Optional, Sequence, Tuple

from .models import CleanDiagnostic, CleanOptions
from .reader import Row, RowWriter, read_rows, rows_to_csv_text
from .rules import EXCEL_CELL_CHAR_LIMIT, NUMBERS_ROW_LIMIT, TARGET_ENCODING
from .widths import fit_row, last_non_empty_index

logger = logging.getLogger(__name__)

DiagnosticHandler = Callable[[CleanDiagnostic], None]


def measure_rows(rows: Sequence[Sequence[str]]) -> Tuple[int, Optional[int]]:
    """
    Return ``(canonical_width, trim_cutoff)`` in a single pass.

    ``trim_cutoff`` is the index where the trailing run of fully-empty rows
    starts, or None when the last row has content.
    """
    num_columns = 0
    trim_from: Optional[int] = None

    for i, row in enumerate(rows):
        last = last_non_empty_index(row)
        if last > -1:
            trim_from = None
        elif trim_from is None:
            trim_from = i
        num_columns = max(num_columns, last + 1)

    return num_columns, trim_from


def clean_rows(
    rows: Sequence[Sequence[str]],
    options: Optional[CleanOptions] = None,
    on_diagnostic: Optional[DiagnosticHandler] = None,
) -> Iterator[Row]:
    """
    Yield every row fitted to the canonical width, in order.

    Each yielded row is a new list. Cells past the canonical width are dropped
    without checking that they are empty.
    """
    options = options or CleanOptions()
    num_columns, trim_from = measure_rows(rows)
    logger.debug("Canonical width %d, trim cutoff %s", num_columns, trim_from)

    def report(row: Optional[int], column: Optional[int], message: str) -> None:
        if options.verbose and on_diagnostic is not None:
            on_diagnostic(CleanDiagnostic(row=row, column=column, message=message))

    for i, row in enumerate(rows):
        if options.numbers and i >= NUMBERS_ROW_LIMIT:
            report(i, None, f"Numbers row limit exceeded. Removing last {len(rows) - NUMBERS_ROW_LIMIT} rows.")
            break
        if not options.no_trim and trim_from is not None and i >= trim_from:
            report(i, None, f"Trimming {len(rows) - trim_from} trailing empty rows.")
            break

        if len(row) < num_columns:
            report(i, None, f"Padding with {num_columns - len(row)} cells.")
        elif len(row) > num_columns:
            report(i, None, f"Trimming {len(row) - num_columns} trailing empty cells.")
        fixed = fit_row(row, num_columns)

        if options.excel:
            for j, cell in enumerate(fixed):
                if len(cell) > EXCEL_CELL_CHAR_LIMIT:
                    fixed[j] = cell[:EXCEL_CELL_CHAR_LIMIT]
                    report(
                        i,
                        j,
                        "Excel cell character limit exceeded. "
                        f"Removing {len(cell) - EXCEL_CELL_CHAR_LIMIT} characters from cell.",
                    )

        yield fixed


def clean_to_stream(
    rows: Sequence[Sequence[str]],
    stream: IO[str],
    options: Optional[CleanOptions] = None,
    on_diagnostic: Optional[DiagnosticHandler] = None,
) -> int:
    """Write cleaned rows to ``stream`` as they are produced. Returns the row count."""
    writer = RowWriter(stream)
    return writer.write_all(clean_rows(rows, options, on_diagnostic))


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def clean_csv_bytes(raw: bytes, options: Optional[CleanOptions] = None) -> dict:
    """
    Clean an uploaded file.
    Returns a dict matching the API's response envelope.
    """
    options = options or CleanOptions()
    rows = read_rows(raw)

    diagnostics: List[CleanDiagnostic] = []
    cleaned = list(clean_rows(rows, options, diagnostics.append))
    num_columns, _ = measure_rows(rows)

    normalized = rows_to_csv_text(cleaned).encode(TARGET_ENCODING)
    return {
        "normalized_csv": {
            "sha256": _sha256_hex(normalized),
            "encoding": TARGET_ENCODING,
            "content_b64": base64.b64encode(normalized).decode("ascii"),
        },
        "report": {
            "summary": {
                "rows_in": len(rows),
                "rows_out": len(cleaned),
                "columns": num_columns,
                "diagnostics": len(diagnostics),
            },
            "options": options.model_dump(),
            "diagnostics": [d.model_dump() for d in diagnostics],
        },
    }
