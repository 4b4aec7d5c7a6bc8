from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from openpyxl.worksheet.worksheet import Worksheet


class WriteMode(str, Enum):
    PLAIN = "plain"
    FORCED_TEXT = "forced_text"
    TEMPLATE_COPY = "template_copy"


@dataclass(frozen=True)
class DestinationRow:
    sheet: Worksheet
    index: int  # 0-based
    width: Optional[int] = None  # columns cloned from the template example row
