"""
reckon - Runtime Values
The two numeric kinds, the assignment result, and the promotion rule that
brings a pair of numbers to one kind.
"""

import math
import struct
from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple, Union

INT32_MIN = -2**31
INT32_MAX = 2**31 - 1


def wrap_i32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range (two's complement)."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value > INT32_MAX else value


def to_f32(value: float) -> float:
    """Round a float to the nearest 32-bit float; out-of-range values become +/-inf."""
    try:
        return struct.unpack('f', struct.pack('f', value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


class NumericKind(Enum):
    INTEGER = auto()
    FLOAT   = auto()


@dataclass(frozen=True)
class Value:
    """Base class for evaluation results."""


@dataclass(frozen=True)
class Integer(Value):
    value: int

    kind = NumericKind.INTEGER

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Float(Value):
    value: float

    kind = NumericKind.FLOAT

    def __post_init__(self):
        object.__setattr__(self, "value", to_f32(self.value))

    def __str__(self):
        if math.isnan(self.value):
            return "NaN"
        if math.isinf(self.value):
            return "inf" if self.value > 0 else "-inf"
        # shortest decimal that reads back as the same 32-bit float
        for digits in range(1, 10):
            text = f"{self.value:.{digits}g}"
            if to_f32(float(text)) == self.value:
                return repr(float(text))
        return repr(self.value)


@dataclass(frozen=True)
class Unit(Value):
    """Result of an assignment statement; prints as nothing."""

    def __str__(self):
        return ""


UNIT = Unit()

Number = Union[Integer, Float]


def promote(left: Number, right: Number) -> Tuple[NumericKind, Union[int, float], Union[int, float]]:
    """
    Bring two numbers to a common kind.

    Same-kind pairs are returned unchanged; a mixed pair converts the
    integer side to the nearest 32-bit float.
    """
    if left.kind is right.kind:
        return left.kind, left.value, right.value
    return NumericKind.FLOAT, to_f32(float(left.value)), to_f32(float(right.value))


def make_number(kind: NumericKind, raw: Union[int, float]) -> Number:
    if kind is NumericKind.INTEGER:
        return Integer(wrap_i32(raw))
    return Float(raw)
