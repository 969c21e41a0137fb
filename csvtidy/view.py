"""Fixed-width table rendering."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence

from .models import ViewOptions
from .reader import read_rows
from .rules import TRUNCATION_MARKER
from .widths import display_width, first_line, fit_row

logger = logging.getLogger(__name__)


def rows_to_show(num_data_rows: int, max_rows: int) -> int:
    if max_rows > 0:
        return min(max_rows, num_data_rows)
    return num_data_rows


def column_widths(header: Sequence[str], data_rows: Sequence[Sequence[str]], max_width: int) -> List[int]:
    """
    Display width of every header column, capped at ``max_width``.

    Widths only grow. Columns already at the cap are not re-checked and cells
    beyond the header are ignored.
    """
    widths = [0] * len(header)
    for row in [header, *data_rows]:
        for j, cell in enumerate(row[: len(widths)]):
            if widths[j] == max_width:
                continue
            widths[j] = max(widths[j], min(display_width(cell), max_width))
    return widths


def format_cell(cell: str, width: int) -> str:
    """First line of ``cell`` padded or truncated to ``width``.

    Widths below the marker length give a result longer than ``width``.
    """
    line = first_line(cell)
    if len(line) == width:
        return line
    if len(line) < width:
        return line.ljust(width)
    return line[: max(width - len(TRUNCATION_MARKER), 0)] + TRUNCATION_MARKER


def row_separator(widths: Sequence[int]) -> str:
    return "+-" + "-+-".join("-" * w for w in widths) + "-+"


def format_row(row: Sequence[str], widths: Sequence[int]) -> str:
    cells = [format_cell(cell, w) for cell, w in zip(fit_row(row, len(widths)), widths)]
    return "| " + " | ".join(cells) + " |"


def render_lines(rows: Sequence[Sequence[str]], options: Optional[ViewOptions] = None) -> Iterator[str]:
    """Yield the table line by line. An empty dataset renders nothing."""
    options = options or ViewOptions()
    if not rows:
        return

    header, data_rows = rows[0], rows[1:]
    shown = data_rows[: rows_to_show(len(data_rows), options.max_rows)]
    widths = column_widths(header, shown, options.max_width)
    logger.debug("Rendering %d of %d rows, widths %s", len(shown), len(data_rows), widths)

    separator = row_separator(widths)
    yield separator
    yield format_row(header, widths)
    yield separator
    for row in shown:
        yield format_row(row, widths)
        yield separator


def render_table(rows: Sequence[Sequence[str]], options: Optional[ViewOptions] = None) -> str:
    return "".join(line + "\n" for line in render_lines(rows, options))


def view_csv_bytes(raw: bytes, options: Optional[ViewOptions] = None) -> dict:
    options = options or ViewOptions()
    rows = read_rows(raw)
    num_data_rows = max(len(rows) - 1, 0)
    return {
        "table": render_table(rows, options),
        "columns": len(rows[0]) if rows else 0,
        "rows_shown": rows_to_show(num_data_rows, options.max_rows),
        "rows_total": num_data_rows,
    }
