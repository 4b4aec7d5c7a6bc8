import pytest

from csv2workbook.fieldsplitter.api import FieldSplitError, split_records


def test_split_lines_and_columns():
    assert split_records("a,1\nb,2\n") == [["a", "1"], ["b", "2"]]
    assert split_records("a,1\r\nb,2") == [["a", "1"], ["b", "2"]]


def test_quoted_fields():
    assert split_records('"x,y",z\n') == [["x,y", "z"]]
    assert split_records('"he said ""hi""",1') == [['he said "hi"', "1"]]
    assert split_records('"line1\nline2",x') == [["line1\nline2", "x"]]
    assert split_records(' "x" ,y') == [["x", "y"]]


def test_quotes_literal_when_disabled():
    assert split_records('"a",b', honor_quotes=False) == [['"a"', "b"]]


def test_multi_character_delimiters():
    assert split_records("a||b;;c||d", column_delimiter="||", line_delimiter=";;") == [["a", "b"], ["c", "d"]]


def test_custom_line_delimiter_keeps_newlines_in_fields():
    assert split_records("a\nb;c", line_delimiter=";") == [["a\nb"], ["c"]]


def test_tab_delimiter_and_trimming():
    assert split_records("a\tb\n") == [["a\tb"]]
    assert split_records("a\tb\n", column_delimiter="\t") == [["a", "b"]]
    assert split_records(" a , b ") == [["a", "b"]]


def test_blank_records_skipped_and_trailing_delimiter():
    assert split_records("a\n\n  \nb") == [["a"], ["b"]]
    assert split_records("a,\n") == [["a", ""]]
    assert split_records("") == []


def test_records_of_empty_fields_are_kept():
    assert split_records("a,1\n,\nb,2") == [["a", "1"], ["", ""], ["b", "2"]]
    assert split_records("x\n,,\ny") == [["x"], ["", "", ""], ["y"]]
    assert split_records('x\n"",""\ny') == [["x"], ["", ""], ["y"]]
    assert split_records('x\n""\ny') == [["x"], [""], ["y"]]


def test_line_delimiter_wins_over_shorter_column_delimiter():
    assert split_records("a;b;;c;d", column_delimiter=";", line_delimiter=";;") == [["a", "b"], ["c", "d"]]
    assert split_records("a;;b;c", column_delimiter=";;", line_delimiter=";") == [["a", "b"], ["c"]]


def test_unterminated_quote():
    with pytest.raises(FieldSplitError, match="record 2"):
        split_records('a\n"abc')


def test_text_after_closing_quote():
    with pytest.raises(FieldSplitError):
        split_records('"a"x,b')


def test_empty_column_delimiter():
    with pytest.raises(FieldSplitError):
        split_records("a", column_delimiter="")
