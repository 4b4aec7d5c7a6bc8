from __future__ import annotations

from openpyxl.worksheet.worksheet import Worksheet

from csv2workbook.cellwriter.api import DestinationRow
from .templatecopier import TemplateCopyError, TemplateRowCopier


def prepare_row(sheet: Worksheet, example_row_index: int, destination_row_index: int) -> DestinationRow:
    """Public API (TemplateRowCopier)

    Contract:
    - Replace destination row with a clone of the example row (values, types,
      number format, font, fill, border, alignment, protection, height).
    - Returned row width = columns of the example row holding a value or style.
    - Indices are 0-based; destination must come after the example row.
    """
    return TemplateRowCopier().prepare_row(sheet, example_row_index, destination_row_index)


def finalize(sheet: Worksheet, example_row_index: int, last_written_row_index: int) -> None:
    """Public API (TemplateRowCopier)

    Contract:
    - Called once after all data rows are written.
    - Delete the example row; every later row moves up exactly one position.
    """
    TemplateRowCopier().finalize(sheet, example_row_index, last_written_row_index)


def example_width(sheet: Worksheet, example_row_index: int) -> int:
    """Public API (TemplateRowCopier): number of columns in the example row."""
    return TemplateRowCopier().example_width(sheet, example_row_index)


def clear_unfilled(row: DestinationRow, filled_columns: int) -> None:
    """Public API (TemplateRowCopier)

    Contract:
    - For a row returned by prepare_row, clear the value of every cloned cell
      at column index >= filled_columns.
    - Cleared cells keep the example row's formatting.
    """
    TemplateRowCopier().clear_unfilled(row, filled_columns)
