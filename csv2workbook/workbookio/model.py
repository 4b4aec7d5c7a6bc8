from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

DEFAULT_SHEET_NAME = "Sheet1"

XLS_MAX_ROWS = 65536
XLS_MAX_COLUMNS = 256


class WorkbookFormat(str, Enum):
    XLS = "xls"
    XLSX = "xlsx"

    @property
    def extension(self) -> str:
        return "." + self.value

    @classmethod
    def from_name(cls, name: str) -> "WorkbookFormat":
        return cls(name.strip().lower())

    @classmethod
    def from_suffix(cls, suffix: str) -> Optional["WorkbookFormat"]:
        return _SUFFIXES.get(suffix.lower())


_SUFFIXES = {
    ".xls": WorkbookFormat.XLS,
    ".xlsx": WorkbookFormat.XLSX,
    ".xlsm": WorkbookFormat.XLSX,
}


@dataclass(frozen=True)
class OpenedWorkbook:
    workbook: Workbook
    sheet: Worksheet
    source_format: WorkbookFormat
