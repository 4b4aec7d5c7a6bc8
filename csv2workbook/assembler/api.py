from __future__ import annotations

from .assembler import Assembler, AssemblerError
from .model import ConversionOptions, ConversionResult


def convert(options: ConversionOptions) -> ConversionResult:
    """Public API (Assembler)

    Contract:
    - Open template (sheet by index) or create a fresh single-sheet workbook.
    - Skip leading records (default 0, or 1 with a template; explicit value wins).
    - One destination row per record, fields left to right from column 0.
    - Template mode: rows start after the example row, which is removed at the end.
    - Pre-existing output is deleted; workbook written once at the end.
    """
    return Assembler().convert(options)
