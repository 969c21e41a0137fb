"""csvtidy error types."""


class CsvTidyError(Exception):
    """Base error for csvtidy. Every subclass aborts the whole run."""


class ParseFailure(CsvTidyError):
    """Raised when input cannot be decoded into rows."""


class ArgumentError(CsvTidyError):
    """Raised for invalid command line arguments."""


class ResourceError(CsvTidyError):
    """Raised when an input file cannot be opened."""
