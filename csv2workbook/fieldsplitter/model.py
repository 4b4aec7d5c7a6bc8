from dataclasses import dataclass

DEFAULT_COLUMN_DELIMITER = ","
DEFAULT_LINE_DELIMITER = "\r\n"


@dataclass(frozen=True)
class SplitOptions:
    column_delimiter: str = DEFAULT_COLUMN_DELIMITER
    line_delimiter: str = DEFAULT_LINE_DELIMITER
    honor_quotes: bool = True
