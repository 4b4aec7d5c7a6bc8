import pytest
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from csv2workbook.cellwriter.api import DestinationRow, WriteMode, write_cell
from csv2workbook.templatecopier.api import TemplateCopyError, clear_unfilled, example_width, finalize, prepare_row


def _template():
    wb = Workbook()
    ws = wb.active
    ws.append(["H0a", "H0b"])
    ws.append([1, "ex"])
    ws.append(["R1a", "R1b", "R1c"])
    ws.append(["R2a", "R2b"])
    ws["A2"].font = Font(bold=True)
    ws["A2"].number_format = "0.00"
    ws.row_dimensions[2].height = 25
    return ws


def _values(ws):
    return [list(r) for r in ws.iter_rows(values_only=True)]


def test_prepare_row_clones_example_row():
    ws = _template()
    row = prepare_row(ws, 1, 2)
    assert row.index == 2
    assert row.width == 2
    assert ws["A3"].value == 1
    assert ws["A3"].font.b is True
    assert ws["A3"].number_format == "0.00"
    assert ws["B3"].value == "ex"
    assert ws["C3"].value is None
    assert ws.row_dimensions[3].height == 25


def test_finalize_removes_example_row():
    ws = _template()
    for i, record in enumerate([["10", "d1"], ["20", "d2"]]):
        row = prepare_row(ws, 1, 2 + i)
        for col, field in enumerate(record):
            write_cell(row, col, field, WriteMode.TEMPLATE_COPY)
    finalize(ws, 1, 3)

    assert ws.max_row == 3
    assert [r[:2] for r in _values(ws)] == [["H0a", "H0b"], [10.0, "d1"], [20.0, "d2"]]
    assert ws["A2"].number_format == "0.00"


def test_finalize_shifts_later_template_rows_up():
    ws = _template()
    ws.append(["R3a", "R3b"])
    row = prepare_row(ws, 1, 2)
    write_cell(row, 0, "5", WriteMode.TEMPLATE_COPY)
    write_cell(row, 1, "d1", WriteMode.TEMPLATE_COPY)
    finalize(ws, 1, 2)

    assert [r[:2] for r in _values(ws)] == [["H0a", "H0b"], [5.0, "d1"], ["R2a", "R2b"], ["R3a", "R3b"]]


def test_finalize_without_data_rows_moves_heights():
    ws = _template()
    ws.row_dimensions[4].height = 30
    finalize(ws, 1, 1)
    assert ws["A2"].value == "R1a"
    assert ws.row_dimensions[3].height == 30


def test_finalize_moves_whole_row_dimensions():
    ws = _template()
    ws.row_dimensions[4].height = 30
    ws.row_dimensions[4].hidden = True
    ws.row_dimensions[4].outlineLevel = 2
    finalize(ws, 1, 1)

    assert 2 not in ws.row_dimensions
    assert 4 not in ws.row_dimensions
    moved = ws.row_dimensions[3]
    assert moved.index == 3
    assert moved.height == 30
    assert moved.hidden is True
    assert moved.outlineLevel == 2


def test_clear_unfilled_drops_example_values_keeps_style():
    ws = _template()
    ws["B2"].font = Font(italic=True)
    row = prepare_row(ws, 1, 2)
    write_cell(row, 0, "5", WriteMode.TEMPLATE_COPY)
    clear_unfilled(row, 1)

    assert ws["A3"].value == 5.0
    assert ws["B3"].value is None
    assert ws["B3"].font.i is True


def test_clear_unfilled_needs_template_row():
    ws = _template()
    with pytest.raises(TemplateCopyError):
        clear_unfilled(DestinationRow(sheet=ws, index=2), 0)


def test_example_width_counts_styled_blank_cells():
    ws = _template()
    ws["C2"].fill = PatternFill("solid", fgColor="FFFF00")
    assert example_width(ws, 1) == 3


def test_empty_example_row():
    ws = Workbook().active
    ws.append(["header"])
    with pytest.raises(TemplateCopyError):
        prepare_row(ws, 1, 2)


def test_destination_must_follow_example_row():
    with pytest.raises(TemplateCopyError):
        prepare_row(_template(), 1, 1)
