from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field

from .rules import DEFAULT_MAX_COLUMN_WIDTH, TARGET_ENCODING


class CleanOptions(BaseModel):
    no_trim: bool = False
    excel: bool = False
    numbers: bool = False
    verbose: bool = False


class ViewOptions(BaseModel):
    max_width: int = Field(default=DEFAULT_MAX_COLUMN_WIDTH, ge=1)
    # 0 means every row
    max_rows: int = Field(default=0, ge=0)


class CleanDiagnostic(BaseModel):
    """One structural change made while cleaning.

    ``row`` and ``column`` are 0-based; ``None`` means the change is not tied
    to a single row or cell.
    """

    row: Optional[int] = None
    column: Optional[int] = None
    message: str

    def location(self) -> str:
        parts = []
        if self.row is not None:
            parts.append("Header" if self.row == 0 else f"Row {self.row}")
        if self.column is not None:
            parts.append(f"Column {self.column + 1}")
        return ", ".join(parts)

    def format(self) -> str:
        prelude = self.location()
        if prelude:
            return f"{prelude}: {self.message}"
        return self.message


class NormalizedCsv(BaseModel):
    sha256: str
    encoding: str = Field(default=TARGET_ENCODING)
    content_b64: str


class ReportSummary(BaseModel):
    rows_in: int = 0
    rows_out: int = 0
    columns: int = 0
    diagnostics: int = 0


class CleanReport(BaseModel):
    summary: ReportSummary
    options: CleanOptions
    diagnostics: List[CleanDiagnostic] = Field(default_factory=list)


class CleanResponse(BaseModel):
    normalized_csv: NormalizedCsv
    report: CleanReport


class ViewResponse(BaseModel):
    table: str
    columns: int = 0
    rows_shown: int = 0
    rows_total: int = 0


class HealthResponse(BaseModel):
    ok: bool = True
