from __future__ import annotations

import logging
from copy import copy

from openpyxl.cell.cell import Cell
from openpyxl.worksheet.worksheet import Worksheet

from csv2workbook.cellwriter.api import DestinationRow

logger = logging.getLogger(__name__)


class TemplateCopyError(RuntimeError):
    pass


class TemplateRowCopier:
    def prepare_row(self, sheet: Worksheet, example_row_index: int, destination_row_index: int) -> DestinationRow:
        if example_row_index < 0:
            raise TemplateCopyError(f"invalid template example row: {example_row_index}")
        if destination_row_index <= example_row_index:
            raise TemplateCopyError(
                f"destination row {destination_row_index} must come after example row {example_row_index}"
            )

        width = self.example_width(sheet, example_row_index)
        if width == 0:
            raise TemplateCopyError(f"template example row {example_row_index} of sheet {sheet.title!r} is empty")

        src_row = example_row_index + 1
        dst_row = destination_row_index + 1
        for col in range(1, width + 1):
            self._clone_cell(sheet.cell(row=src_row, column=col), sheet.cell(row=dst_row, column=col))
        self._clear_tail(sheet, dst_row, width)

        height = sheet.row_dimensions[src_row].height
        if height is not None:
            sheet.row_dimensions[dst_row].height = height

        return DestinationRow(sheet=sheet, index=destination_row_index, width=width)

    def example_width(self, sheet: Worksheet, example_row_index: int) -> int:
        row = example_row_index + 1
        if row > sheet.max_row:
            return 0
        width = 0
        for cells in sheet.iter_rows(min_row=row, max_row=row):
            for cell in cells:
                if cell.value is not None or cell.has_style:
                    width = cell.column
        return width

    def finalize(self, sheet: Worksheet, example_row_index: int, last_written_row_index: int) -> None:
        if example_row_index < 0:
            raise TemplateCopyError(f"invalid template example row: {example_row_index}")
        removed = example_row_index + 1
        sheet.delete_rows(removed)
        self._shift_row_dimensions(sheet, removed)
        data_rows = max(0, last_written_row_index - example_row_index)
        logger.debug(
            "removed example row %d from %r; %d data row(s) now start at row %d",
            example_row_index, sheet.title, data_rows, example_row_index,
        )

    def _clone_cell(self, src: Cell, dst: Cell) -> None:
        dst.value = src.value
        dst.data_type = src.data_type
        dst.font = copy(src.font)
        dst.fill = copy(src.fill)
        dst.border = copy(src.border)
        dst.alignment = copy(src.alignment)
        dst.protection = copy(src.protection)
        dst.number_format = src.number_format

    def _clear_tail(self, sheet: Worksheet, row: int, width: int) -> None:
        for col in range(width + 1, sheet.max_column + 1):
            cell = sheet.cell(row=row, column=col)
            if cell.value is not None or cell.has_style:
                cell.value = None
                cell.style = "Normal"

    def clear_unfilled(self, row: DestinationRow, filled_columns: int) -> None:
        if row.width is None:
            raise TemplateCopyError(f"row {row.index} was not prepared from a template")
        for col in range(max(filled_columns, 0) + 1, row.width + 1):
            cell = row.sheet.cell(row=row.index + 1, column=col)
            # keeps the cloned style, drops the example value
            cell.value = None

    def _shift_row_dimensions(self, sheet: Worksheet, removed: int) -> None:
        # delete_rows moves cells but leaves row dimensions in place
        dims = sheet.row_dimensions
        later = sorted(r for r in dims.keys() if r > removed)
        dims.pop(removed, None)
        for r in later:
            moved = copy(dims.pop(r))
            moved.index = r - 1
            dims[r - 1] = moved
