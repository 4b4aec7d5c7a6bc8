from __future__ import annotations

from pathlib import Path
from typing import Dict

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from .model import DEFAULT_SHEET_NAME, OpenedWorkbook, WorkbookFormat
from .workbookio import WorkbookIO, WorkbookIOError


def create_workbook(fmt: WorkbookFormat, sheet_name: str = DEFAULT_SHEET_NAME) -> OpenedWorkbook:
    """Public API (WorkbookIO): fresh in-memory workbook with a single sheet."""
    return WorkbookIO().create(fmt, sheet_name)


def open_template(path: Path, sheet_index: int = 0) -> OpenedWorkbook:
    """Public API (WorkbookIO)

    Contract:
    - .xlsx/.xlsm via openpyxl, .xls via xlrd (formatting_info) converted in memory.
    - Select sheet by 0-based index; out of range -> WorkbookIOError.
    """
    return WorkbookIO().open_template(Path(path), sheet_index)


def save_workbook(wb: Workbook, path: Path, fmt: WorkbookFormat) -> None:
    """Public API (WorkbookIO)

    Contract:
    - Whole workbook written in one operation (openpyxl for xlsx, xlwt for xls).
    - Parent directory is created when missing.
    """
    WorkbookIO().save(wb, Path(path), fmt)


def autosize_columns(ws: Worksheet) -> Dict[str, float]:
    """Public API (WorkbookIO): fit used column widths to their longest value."""
    return WorkbookIO().autosize_columns(ws)
