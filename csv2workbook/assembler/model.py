from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from csv2workbook.fieldsplitter.api import DEFAULT_COLUMN_DELIMITER, DEFAULT_LINE_DELIMITER
from csv2workbook.workbookio.api import WorkbookFormat

DEFAULT_ENCODING = "utf-8-sig"
DEFAULT_TEMPLATE_SHEET = 0
DEFAULT_TEMPLATE_EXAMPLE_ROW = 1
TEMPLATE_SKIP_ROWS = 1


@dataclass(frozen=True)
class ConversionOptions:
    input_path: Path
    output_path: Path
    output_format: WorkbookFormat = WorkbookFormat.XLSX
    column_delimiter: str = DEFAULT_COLUMN_DELIMITER
    line_delimiter: str = DEFAULT_LINE_DELIMITER
    honor_quotes: bool = True
    force_text: bool = False
    resize_columns: bool = False
    template_path: Optional[Path] = None
    template_sheet: int = DEFAULT_TEMPLATE_SHEET
    template_example_row: int = DEFAULT_TEMPLATE_EXAMPLE_ROW
    skip_rows: Optional[int] = None  # None -> 0, or 1 with a template
    encoding: str = DEFAULT_ENCODING


@dataclass(frozen=True)
class ConversionResult:
    output_path: str
    sheet_name: str
    format: WorkbookFormat
    rows_written: int
    records_skipped: int
    template_used: bool
