from __future__ import annotations

from typing import List, Sequence


def last_non_empty_index(row: Sequence[str]) -> int:
    """Index of the last non-empty cell, or -1 for a fully-empty row."""
    for j in range(len(row) - 1, -1, -1):
        if row[j] != "":
            return j
    return -1


def fit_row(row: Sequence[str], width: int) -> List[str]:
    """Return a new row padded with empty cells or truncated to ``width``."""
    if len(row) >= width:
        return list(row[:width])
    return list(row) + [""] * (width - len(row))


def first_line(cell: str) -> str:
    index = cell.find("\n")
    if index > -1:
        return cell[:index]
    return cell


def display_width(cell: str) -> int:
    return len(first_line(cell))
