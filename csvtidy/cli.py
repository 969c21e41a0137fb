"""Command line interface for csvtidy."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import IO, List, Optional

from .clean import clean_to_stream
from .errors import ArgumentError, CsvTidyError, ResourceError
from .models import CleanDiagnostic, CleanOptions, ViewOptions
from .reader import Row, read_rows
from .rules import DEFAULT_MAX_COLUMN_WIDTH, LOG_LEVEL_ENV
from .view import render_lines

logger = logging.getLogger(__name__)


class CsvTidyArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        raise ArgumentError(message)


def _read_input(paths: List[str], too_many: str, stdin: IO[bytes]) -> List[Row]:
    if len(paths) > 1:
        raise ArgumentError(too_many)
    if not paths:
        return read_rows(stdin.read())
    try:
        with open(paths[0], "rb") as handle:
            raw = handle.read()
    except OSError as exc:
        raise ResourceError(f"Unable to open {paths[0]}: {exc.strerror or exc}") from exc
    return read_rows(raw)


def cmd_clean(args: argparse.Namespace, stdin: IO[bytes], stdout: IO[str], stderr: IO[str]) -> int:
    rows = _read_input(args.files, "Can only clean one file", stdin)
    options = CleanOptions(no_trim=args.no_trim, excel=args.excel, numbers=args.numbers, verbose=args.verbose)

    def print_diagnostic(diagnostic: CleanDiagnostic) -> None:
        print(diagnostic.format(), file=stderr)

    written = clean_to_stream(rows, stdout, options, print_diagnostic)
    logger.debug("Wrote %d of %d rows", written, len(rows))
    return 0


def cmd_view(args: argparse.Namespace, stdin: IO[bytes], stdout: IO[str], stderr: IO[str]) -> int:
    if args.max_width < 1:
        raise ArgumentError("Invalid argument --max-width")
    options = ViewOptions(max_width=args.max_width, max_rows=max(args.max_rows, 0))
    rows = _read_input(args.files, "Can only view one table", stdin)
    for line in render_lines(rows, options):
        print(line, file=stdout)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = CsvTidyArgumentParser(prog="csvtidy", description="Clean and view delimited text tables.")
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True, parser_class=CsvTidyArgumentParser)

    clean = sub.add_parser("clean", help="Rectangularize rows and enforce spreadsheet limits")
    clean.add_argument("--no-trim", action="store_true", help="Don't trim end of file of empty rows")
    clean.add_argument("--excel", action="store_true", help="Clean for use in Excel")
    clean.add_argument("--numbers", action="store_true", help="Clean for use in Numbers")
    clean.add_argument("--verbose", action="store_true", help="Print messages when cleaning")
    clean.add_argument("files", nargs="*", metavar="file")
    clean.set_defaults(func=cmd_clean)

    view = sub.add_parser("view", help="Render a fixed-width table")
    view.add_argument(
        "--max-width", "-w", type=int, default=DEFAULT_MAX_COLUMN_WIDTH, help="Maximum width per column"
    )
    view.add_argument("-n", dest="max_rows", type=int, default=0, help="Number of rows to display")
    view.add_argument("files", nargs="*", metavar="file")
    view.set_defaults(func=cmd_view)

    return parser


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[IO[bytes]] = None,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
) -> int:
    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    try:
        args = build_parser().parse_args(argv)
        level = logging.getLevelName(str(args.log_level).upper())
        if not isinstance(level, int):
            raise ArgumentError(f"Invalid log level {args.log_level!r}")
        logging.basicConfig(
            level=level,
            stream=stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )
        return args.func(args, stdin, stdout, stderr)
    except CsvTidyError as exc:
        print(str(exc), file=stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
