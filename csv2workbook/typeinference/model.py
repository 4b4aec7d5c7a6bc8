from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class CellKind(str, Enum):
    NUMERIC = "numeric"
    TEXT = "text"


@dataclass(frozen=True)
class CellValue:
    kind: CellKind
    value: Union[float, str]

    @classmethod
    def numeric(cls, value: float) -> "CellValue":
        return cls(kind=CellKind.NUMERIC, value=float(value))

    @classmethod
    def text(cls, value: str) -> "CellValue":
        return cls(kind=CellKind.TEXT, value=value)

    @property
    def is_numeric(self) -> bool:
        return self.kind is CellKind.NUMERIC
