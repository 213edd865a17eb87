"""
reckon - AST Node Definitions
Operators, their precedence relation, and the expression tree built by the parser.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum, auto


class Operator(Enum):
    SENTINEL = auto()   # operator-stack bottom / scope marker, never in a tree
    ASSIGN   = auto()   # =
    PLUS     = auto()   # +
    MINUS    = auto()   # -
    MULTIPLY = auto()   # *
    DIVIDE   = auto()   # /
    NEGATE   = auto()   # unary -
    POWER    = auto()   # ^

    @property
    def arity(self) -> int:
        if self is Operator.SENTINEL:
            return 0
        return 1 if self is Operator.NEGATE else 2

    @property
    def left_associative(self) -> bool:
        return self is not Operator.ASSIGN

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


class Ordering(IntEnum):
    LESS    = -1
    EQUAL   = 0
    GREATER = 1


# Higher rank binds tighter; equal ranks reduce left to right.
PRECEDENCE = {
    Operator.SENTINEL: 0,
    Operator.ASSIGN:   1,
    Operator.PLUS:     2,
    Operator.MINUS:    2,
    Operator.MULTIPLY: 3,
    Operator.DIVIDE:   3,
    Operator.NEGATE:   4,
    Operator.POWER:    5,
}

_SYMBOLS = {
    Operator.SENTINEL: '<sentinel>',
    Operator.ASSIGN:   '=',
    Operator.PLUS:     '+',
    Operator.MINUS:    '-',
    Operator.MULTIPLY: '*',
    Operator.DIVIDE:   '/',
    Operator.NEGATE:   '-',
    Operator.POWER:    '^',
}


def compare(a: Operator, b: Operator) -> Ordering:
    """Order two operators by precedence. Total over every pair, sentinel included."""
    rank_a, rank_b = PRECEDENCE[a], PRECEDENCE[b]
    if rank_a < rank_b:
        return Ordering.LESS
    if rank_a > rank_b:
        return Ordering.GREATER
    return Ordering.EQUAL


@dataclass
class ASTNode:
    """Base class for all AST nodes."""


@dataclass
class IdentifierNode(ASTNode):
    """A variable reference (or the target of an assignment)."""
    name: str


@dataclass
class IntegerNode(ASTNode):
    """A 32-bit integer literal."""
    value: int


@dataclass
class FloatNode(ASTNode):
    """A floating-point literal."""
    value: float


@dataclass
class UnaryOpNode(ASTNode):
    """-operand"""
    op: Operator
    operand: ASTNode


@dataclass
class BinaryOpNode(ASTNode):
    """left op right"""
    op: Operator
    left: ASTNode
    right: ASTNode

    def __post_init__(self):
        if self.op is Operator.ASSIGN and not isinstance(self.left, IdentifierNode):
            raise ValueError(
                f"Assignment target must be an identifier, got {type(self.left).__name__}"
            )
