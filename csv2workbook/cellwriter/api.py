from __future__ import annotations

from .cellwriter import CellWriteError, CellWriter, TemplateShapeError
from .model import DestinationRow, WriteMode


def write_cell(row: DestinationRow, col_index: int, field: str, mode: WriteMode) -> None:
    """Public API (CellWriter)

    Contract:
    - PLAIN: new cell, Numeric if the field parses, else Text.
    - FORCED_TEXT: new cell, always Text.
    - TEMPLATE_COPY: cell cloned from the example row; numeric cells take the
      parsed number (Text on failure), every other type takes Text.
    - Called once per field, left to right, from column 0.
    - Any mode on a template-prepared row: a column beyond the example row
      width -> TemplateShapeError.
    """
    CellWriter().write_cell(row, col_index, field, mode)
