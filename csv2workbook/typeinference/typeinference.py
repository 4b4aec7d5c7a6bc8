from __future__ import annotations

import math
import re
from typing import Optional

from .model import CellValue


class TypeInference:
    # sign, digits with optional fraction (or a bare fraction), optional exponent
    _number_re = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$", re.ASCII)

    def parse_number(self, field: str) -> Optional[float]:
        candidate = field.strip()
        if not self._number_re.match(candidate):
            return None
        value = float(candidate)
        if not math.isfinite(value):
            return None
        return value

    def infer(self, field: str, force_text: bool) -> CellValue:
        if force_text:
            return CellValue.text(field)
        number = self.parse_number(field)
        if number is None:
            return CellValue.text(field)
        return CellValue.numeric(number)
