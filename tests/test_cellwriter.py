from datetime import datetime

import pytest
from openpyxl import Workbook

from csv2workbook.cellwriter.api import (
    CellWriteError,
    DestinationRow,
    TemplateShapeError,
    WriteMode,
    write_cell,
)


def _sheet():
    return Workbook().active


def test_plain_mode_infers_types():
    ws = _sheet()
    row = DestinationRow(sheet=ws, index=0)
    write_cell(row, 0, "a", WriteMode.PLAIN)
    write_cell(row, 1, "1", WriteMode.PLAIN)
    assert ws["A1"].value == "a"
    assert ws["A1"].data_type == "s"
    assert ws["B1"].value == 1.0
    assert ws["B1"].data_type == "n"


def test_forced_text_mode():
    ws = _sheet()
    row = DestinationRow(sheet=ws, index=2)
    write_cell(row, 0, "1", WriteMode.FORCED_TEXT)
    assert ws["A3"].value == "1"
    assert ws["A3"].data_type == "s"


def test_formula_like_text_stays_text():
    ws = _sheet()
    write_cell(DestinationRow(sheet=ws, index=0), 0, "=SUM(A2)", WriteMode.PLAIN)
    assert ws["A1"].value == "=SUM(A2)"
    assert ws["A1"].data_type == "s"


def test_template_copy_follows_existing_cell_types():
    ws = _sheet()
    ws.append([0, "t"])
    row = DestinationRow(sheet=ws, index=0, width=2)
    write_cell(row, 0, "9", WriteMode.TEMPLATE_COPY)
    write_cell(row, 1, "9", WriteMode.TEMPLATE_COPY)
    assert ws["A1"].value == 9.0
    assert ws["A1"].data_type == "n"
    assert ws["B1"].value == "9"
    assert ws["B1"].data_type == "s"


def test_template_copy_numeric_cell_falls_back_to_text():
    ws = _sheet()
    ws.append([0])
    write_cell(DestinationRow(sheet=ws, index=0, width=1), 0, "n/a", WriteMode.TEMPLATE_COPY)
    assert ws["A1"].value == "n/a"
    assert ws["A1"].data_type == "s"


def test_template_copy_empty_cell_is_text():
    ws = _sheet()
    ws["A1"].number_format = "0.00"
    write_cell(DestinationRow(sheet=ws, index=0, width=1), 0, "5", WriteMode.TEMPLATE_COPY)
    assert ws["A1"].value == "5"


def test_template_copy_date_cell_takes_serial_number():
    ws = _sheet()
    ws["A1"].value = datetime(2020, 1, 1)
    fmt = ws["A1"].number_format
    write_cell(DestinationRow(sheet=ws, index=0, width=1), 0, "43831", WriteMode.TEMPLATE_COPY)
    assert ws["A1"].value == 43831.0
    assert ws["A1"].number_format == fmt


def test_template_shape_mismatch():
    ws = _sheet()
    ws.append([0, "t"])
    with pytest.raises(TemplateShapeError, match="only has 2 column"):
        write_cell(DestinationRow(sheet=ws, index=0, width=2), 2, "x", WriteMode.TEMPLATE_COPY)


def test_template_copy_requires_prepared_row():
    with pytest.raises(CellWriteError):
        write_cell(DestinationRow(sheet=_sheet(), index=0), 0, "x", WriteMode.TEMPLATE_COPY)
