from __future__ import annotations

import logging

from openpyxl.cell.cell import Cell
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError

from csv2workbook.typeinference.api import CellValue, infer, parse_number
from .model import DestinationRow, WriteMode

logger = logging.getLogger(__name__)

NUMERIC_DATA_TYPES = ("n", "d")


class CellWriteError(RuntimeError):
    pass


class TemplateShapeError(CellWriteError):
    pass


class CellWriter:
    def write_cell(self, row: DestinationRow, col_index: int, field: str, mode: WriteMode) -> None:
        if col_index < 0:
            raise CellWriteError(f"negative column index: {col_index}")
        if mode is WriteMode.TEMPLATE_COPY and row.width is None:
            raise CellWriteError(f"row {row.index} was not prepared from a template example row")
        if row.width is not None and col_index >= row.width:
            raise TemplateShapeError(
                f"input row {row.index} has a value in column {col_index + 1} "
                f"({get_column_letter(col_index + 1)}) but the template example row "
                f"only has {row.width} column(s)"
            )

        cell = row.sheet.cell(row=row.index + 1, column=col_index + 1)
        if mode is WriteMode.TEMPLATE_COPY:
            value = self._template_value(cell, field)
        else:
            value = infer(field, force_text=mode is WriteMode.FORCED_TEXT)
        self._store(cell, value)

    def _template_value(self, cell: Cell, field: str) -> CellValue:
        if not self._is_numeric(cell):
            return CellValue.text(field)
        number = parse_number(field)
        if number is None:
            logger.debug("%s: numeric template cell, keeping %r as text", cell.coordinate, field)
            return CellValue.text(field)
        return CellValue.numeric(number)

    def _is_numeric(self, cell: Cell) -> bool:
        return cell.value is not None and cell.data_type in NUMERIC_DATA_TYPES

    def _store(self, cell: Cell, value: CellValue) -> None:
        try:
            cell.value = value.value
        except IllegalCharacterError as e:
            raise CellWriteError(f"{cell.coordinate}: text contains characters not allowed in a workbook") from e
        if not value.is_numeric:
            # "=..." stays literal text, never a formula
            cell.data_type = "s"
