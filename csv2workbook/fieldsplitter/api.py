from __future__ import annotations

from typing import Iterator, List

from .fieldsplitter import FieldSplitError, FieldSplitter
from .model import DEFAULT_COLUMN_DELIMITER, DEFAULT_LINE_DELIMITER, SplitOptions


def split_records(
    text: str,
    column_delimiter: str = DEFAULT_COLUMN_DELIMITER,
    line_delimiter: str = DEFAULT_LINE_DELIMITER,
    honor_quotes: bool = True,
) -> List[List[str]]:
    """Public API (FieldSplitter)

    Contract:
    - Records end at line_delimiter ("\\r\\n" default also accepts lone "\\n"/"\\r").
    - Fields end at column_delimiter; both may be multi-character, the longer
      match wins where both apply.
    - honor_quotes: "..." fields may contain delimiters, "" is a literal quote.
    - Unquoted fields are trimmed of spaces/tabs.
    - Blank lines are skipped; "," or '"",""' yield a record of empty fields.
    - Unterminated quote -> FieldSplitError.
    """
    options = SplitOptions(column_delimiter, line_delimiter, honor_quotes)
    return FieldSplitter(options).split(text)


def iter_records(text: str, options: SplitOptions) -> Iterator[List[str]]:
    """Public API (FieldSplitter): lazy variant of split_records."""
    return FieldSplitter(options).iter_records(text)
