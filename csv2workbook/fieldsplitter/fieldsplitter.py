from __future__ import annotations

from typing import Iterator, List, Tuple

from .model import DEFAULT_LINE_DELIMITER, SplitOptions


QUOTE = '"'
FIELD_WHITESPACE = " \t"

_COLUMN = "column"
_LINE = "line"
_EOF = "eof"


class FieldSplitError(RuntimeError):
    pass


class FieldSplitter:
    """Quote-aware splitter for multi-character column and line delimiters."""

    def __init__(self, options: SplitOptions) -> None:
        if not options.column_delimiter:
            raise FieldSplitError("column delimiter must not be empty")
        if not options.line_delimiter:
            raise FieldSplitError("line delimiter must not be empty")
        if options.column_delimiter == options.line_delimiter:
            raise FieldSplitError("column and line delimiter must differ")
        self.options = options
        if options.line_delimiter == DEFAULT_LINE_DELIMITER:
            self._line_ends = ["\r\n", "\n", "\r"]
        else:
            self._line_ends = [options.line_delimiter]

    def split(self, text: str) -> List[List[str]]:
        return list(self.iter_records(text))

    def iter_records(self, text: str) -> Iterator[List[str]]:
        pos = 0
        record_start = 0
        record_number = 1
        fields: List[str] = []
        while True:
            field, pos, term = self._read_field(text, pos, record_number)
            fields.append(field)
            if term == _COLUMN:
                continue
            if not self._is_blank_line(fields, text[record_start:pos]):
                yield fields
            fields = []
            record_start = pos
            record_number += 1
            if term == _EOF:
                return

    def _read_field(self, text: str, pos: int, record_number: int) -> Tuple[str, int, str]:
        n = len(text)
        start = self._skip_whitespace(text, pos)
        if self.options.honor_quotes and start < n and text[start] == QUOTE:
            return self._read_quoted(text, start + 1, record_number)

        i = pos
        while i < n:
            term, width = self._terminator_at(text, i)
            if term:
                return text[pos:i].strip(FIELD_WHITESPACE), i + width, term
            i += 1
        return text[pos:].strip(FIELD_WHITESPACE), n, _EOF

    def _read_quoted(self, text: str, pos: int, record_number: int) -> Tuple[str, int, str]:
        parts: List[str] = []
        segment_start = pos
        while True:
            q = text.find(QUOTE, pos)
            if q == -1:
                raise FieldSplitError(f"unterminated quoted field in record {record_number}")
            if text.startswith(QUOTE * 2, q):
                parts.append(text[segment_start:q + 1])
                pos = q + 2
                segment_start = pos
                continue
            parts.append(text[segment_start:q])
            pos = q + 1
            break

        value = "".join(parts)
        pos = self._skip_whitespace(text, pos)
        if pos >= len(text):
            return value, len(text), _EOF
        term, width = self._terminator_at(text, pos)
        if not term:
            raise FieldSplitError(
                f"unexpected character {text[pos]!r} after closing quote in record {record_number}"
            )
        return value, pos + width, term

    def _is_blank_line(self, fields: List[str], raw: str) -> bool:
        # a line of empty fields such as "," or '""' is still a record
        return len(fields) == 1 and not fields[0] and QUOTE not in raw

    def _skip_whitespace(self, text: str, pos: int) -> int:
        n = len(text)
        while (
            pos < n
            and text[pos] in FIELD_WHITESPACE
            and not text.startswith(self.options.column_delimiter, pos)
            and not self._line_end_width(text, pos)
        ):
            pos += 1
        return pos

    def _terminator_at(self, text: str, pos: int) -> Tuple[str, int]:
        column = self.options.column_delimiter
        column_width = len(column) if text.startswith(column, pos) else 0
        line_width = self._line_end_width(text, pos)
        # the longer match wins, so ";" and ";;" can be told apart
        if line_width and line_width >= column_width:
            return _LINE, line_width
        if column_width:
            return _COLUMN, column_width
        return "", 0

    def _line_end_width(self, text: str, pos: int) -> int:
        for end in self._line_ends:
            if text.startswith(end, pos):
                return len(end)
        return 0
