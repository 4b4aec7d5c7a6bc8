import pytest

from csv2workbook.typeinference.api import CellKind, CellValue, infer, parse_number


@pytest.mark.parametrize("field,expected", [
    ("1", 1.0),
    ("1.5", 1.5),
    ("-3e2", -300.0),
    ("+.5", 0.5),
    ("5.", 5.0),
    (" 42 ", 42.0),
    ("007", 7.0),
])
def test_numeric_fields(field, expected):
    value = infer(field, False)
    assert value.kind is CellKind.NUMERIC
    assert value.value == pytest.approx(expected)


@pytest.mark.parametrize("field", ["", "abc", "1.2.3", "12a", "inf", "nan", "1_000", "1e400", "1,5", "--1"])
def test_non_numeric_fields_fall_back_to_text(field):
    assert infer(field, False) == CellValue.text(field)


def test_force_text_keeps_numbers_as_text():
    assert infer("1", True) == CellValue.text("1")
    assert infer("abc", True) == CellValue.text("abc")


def test_parse_number():
    assert parse_number("2.25") == 2.25
    assert parse_number("x") is None


@pytest.mark.parametrize("field", ["١٢", "１２", "٣.٥"])
def test_non_ascii_digits_stay_text(field):
    assert infer(field, False) == CellValue.text(field)
    assert parse_number(field) is None
