from __future__ import annotations

from typing import Optional

from .model import CellKind, CellValue
from .typeinference import TypeInference


def infer(field: str, force_text: bool = False) -> CellValue:
    """Public API (TypeInference)

    Contract:
    - force_text -> Text(field), always.
    - Locale-invariant float parse: sign, decimal point, exponent.
    - Parse failure is not an error -> Text(field).
    - Zero-padded codes ("007") become Numeric(7.0).
    """
    return TypeInference().infer(field, force_text)


def parse_number(field: str) -> Optional[float]:
    """Public API (TypeInference): finite float or None."""
    return TypeInference().parse_number(field)
