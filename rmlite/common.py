"""Column references, typed values, conditions and set clauses."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

from rmlite.defs import ColType
from rmlite.errors import InternalError, StringOverflowError

__all__ = ["TabCol", "Value", "CompOp", "Condition", "SetClause"]

_INT = struct.Struct("<i")
_FLOAT = struct.Struct("<f")


@dataclass(frozen=True, order=True)
class TabCol:
    """A column qualified by its table; ordered by (table, column)."""

    tab_name: str
    col_name: str


@dataclass
class Value:
    """A typed literal together with its optional fixed-length raw encoding."""

    type: ColType | None = None
    int_val: int = 0
    float_val: float = 0.0
    str_val: str = ""
    raw: bytes | None = None

    def set_int(self, value: int) -> None:
        self.type = ColType.TYPE_INT
        self.int_val = value

    def set_float(self, value: float) -> None:
        self.type = ColType.TYPE_FLOAT
        self.float_val = value

    def set_str(self, value: str) -> None:
        self.type = ColType.TYPE_STRING
        self.str_val = value

    def init_raw(self, length: int) -> None:
        """Encode the value into a raw buffer of exactly ``length`` bytes."""
        if self.raw is not None:
            raise InternalError("raw buffer already initialised")
        if self.type == ColType.TYPE_INT:
            if length != _INT.size:
                raise InternalError(f"INT value needs {_INT.size} bytes, got {length}")
            self.raw = _INT.pack(self.int_val)
        elif self.type == ColType.TYPE_FLOAT:
            if length != _FLOAT.size:
                raise InternalError(f"FLOAT value needs {_FLOAT.size} bytes, got {length}")
            self.raw = _FLOAT.pack(self.float_val)
        elif self.type == ColType.TYPE_STRING:
            encoded = self.str_val.encode("utf-8")
            if length < len(encoded):
                raise StringOverflowError()
            self.raw = encoded.ljust(length, b"\x00")
        else:
            raise InternalError("value has no type")


class CompOp(IntEnum):
    OP_EQ = 0
    OP_NE = 1
    OP_LT = 2
    OP_GT = 3
    OP_LE = 4
    OP_GE = 5


@dataclass
class Condition:
    """``lhs_col op rhs``, where the right side is a column or a value."""

    lhs_col: TabCol
    op: CompOp
    is_rhs_val: bool = False
    rhs_col: TabCol = field(default_factory=lambda: TabCol("", ""))
    rhs_val: Value = field(default_factory=Value)


@dataclass
class SetClause:
    lhs: TabCol
    rhs: Value