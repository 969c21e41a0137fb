"""
Delimited text reading and writing.

Responsibilities:
- decode input bytes (UTF-8 first, charset-normalizer guess otherwise)
- newline normalization
- lenient row parsing (ragged rows, loose quoting)
- row-at-a-time serialization with a flush after every row
"""

from __future__ import annotations

import csv
import io
import logging
from typing import IO, Iterable, List, Union

from charset_normalizer import from_bytes

from .errors import ParseFailure
from .rules import CSV_FIELD_SIZE_LIMIT, OUTPUT_LINE_TERMINATOR

logger = logging.getLogger(__name__)

Row = List[str]


def decode_bytes(raw: bytes) -> str:
    """
    Decode raw input into text with LF line endings.

    Rules:
    - Valid UTF-8 (with or without BOM) is decoded as such.
    - Otherwise use charset-normalizer's best guess.
    - If nothing decodes the bytes, raise ParseFailure.
    """
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        match = from_bytes(raw).best()
        if match is None:
            raise ParseFailure("Unable to detect input encoding")
        logger.debug("Input is not UTF-8, decoding as %s", match.encoding)
        try:
            text = raw.decode(match.encoding)
        except (UnicodeDecodeError, LookupError) as exc:
            raise ParseFailure(f"Unable to decode input as {match.encoding}: {exc}") from exc

    # CRLF/CR -> LF, including inside quoted cells
    return text.replace("\r\n", "\n").replace("\r", "\n")


def read_rows(source: Union[bytes, str]) -> List[Row]:
    """Parse the whole input into rows. Blank lines produce no record."""
    text = decode_bytes(source) if isinstance(source, bytes) else source

    # stdlib default is 131072 characters; oversized cells must reach clean --excel
    csv.field_size_limit(CSV_FIELD_SIZE_LIMIT)
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=",", strict=False)
    try:
        rows = [row for row in reader if row]
    except csv.Error as exc:
        raise ParseFailure(f"Line {reader.line_num}: {exc}") from exc

    logger.debug("Read %d rows", len(rows))
    return rows


class RowWriter:
    """Writes one row at a time and flushes after each one."""

    def __init__(self, stream: IO[str]):
        self.stream = stream
        self._writer = csv.writer(stream, delimiter=",", lineterminator=OUTPUT_LINE_TERMINATOR)
        self.rows_written = 0

    def write(self, row: Row) -> None:
        self._writer.writerow(row)
        self.stream.flush()
        self.rows_written += 1

    def write_all(self, rows: Iterable[Row]) -> int:
        for row in rows:
            self.write(row)
        return self.rows_written


def rows_to_csv_text(rows: Iterable[Row]) -> str:
    outp = io.StringIO(newline="")
    RowWriter(outp).write_all(rows)
    return outp.getvalue()
