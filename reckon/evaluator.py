"""
reckon - Tree-walking Evaluator
Evaluates one statement's AST against an Environment:
  - literals become Integer / Float values
  - identifiers are read from the environment
  - arithmetic promotes mixed operands to float
  - an assignment at the statement root writes the environment and yields Unit
"""

import math
from .ast_nodes import (
    Operator, IdentifierNode, IntegerNode, FloatNode,
    BinaryOpNode, UnaryOpNode, ASTNode
)
from .environment import Environment
from .values import (
    Value, Integer, Float, Number, NumericKind, UNIT,
    promote, make_number, wrap_i32, to_f32
)


class EvaluationError(Exception):
    def __init__(self, message: str):
        super().__init__(f"[EvaluationError] {message}")


class UninitializedVariable(EvaluationError):
    def __init__(self, name: str):
        super().__init__(f"Variable {name!r} used before assignment")
        self.name = name


class DivisionByZero(EvaluationError):
    def __init__(self):
        super().__init__("Integer division by zero")


class InvalidAssignmentTarget(EvaluationError):
    """
    Assignment whose target is not an identifier.

    BinaryOpNode rejects such targets when it is built, so this only fires
    for a tree whose target was replaced after construction.
    """


class UnexpectedOperatorInPosition(EvaluationError):
    def __init__(self, op: Operator, position: str):
        super().__init__(f"Operator {op.symbol!r} cannot appear {position}")
        self.op = op


ARITHMETIC_OPERATORS = {
    Operator.PLUS, Operator.MINUS, Operator.MULTIPLY, Operator.DIVIDE, Operator.POWER,
}


class Evaluator:
    def __init__(self, environment: Environment):
        self._env = environment

    def evaluate(self, node: ASTNode) -> Value:
        """Evaluate a statement root. Only here may an assignment appear."""
        if isinstance(node, BinaryOpNode) and node.op is Operator.ASSIGN:
            return self._assign(node)
        return self._visit(node)

    # ------------------------------------------------------------------ visitor

    def _visit(self, node: ASTNode) -> Number:
        method = f"_visit_{type(node).__name__}"
        visitor = getattr(self, method, None)
        if visitor is None:
            raise TypeError(f"Cannot evaluate node of type {type(node).__name__}")
        return visitor(node)

    def _visit_IntegerNode(self, node: IntegerNode) -> Number:
        return Integer(wrap_i32(node.value))

    def _visit_FloatNode(self, node: FloatNode) -> Number:
        return Float(node.value)

    def _visit_IdentifierNode(self, node: IdentifierNode) -> Number:
        value = self._env.lookup(node.name)
        if value is None:
            raise UninitializedVariable(node.name)
        return value

    def _visit_UnaryOpNode(self, node: UnaryOpNode) -> Number:
        if node.op is not Operator.NEGATE:
            raise UnexpectedOperatorInPosition(node.op, "as a unary operator")
        inner = self._visit(node.operand)
        if isinstance(inner, Integer):
            return Integer(wrap_i32(-inner.value))
        return Float(-inner.value)

    def _visit_BinaryOpNode(self, node: BinaryOpNode) -> Number:
        if node.op is Operator.ASSIGN:
            # An assignment yields Unit, which no operand position accepts
            raise UnexpectedOperatorInPosition(node.op, "inside an expression")
        if node.op not in ARITHMETIC_OPERATORS:
            raise UnexpectedOperatorInPosition(node.op, "as a binary operator")

        left = self._visit(node.left)
        right = self._visit(node.right)
        return apply_binary(node.op, left, right)

    # ------------------------------------------------------------------ assignment

    def _assign(self, node: BinaryOpNode) -> Value:
        if not isinstance(node.left, IdentifierNode):
            raise InvalidAssignmentTarget(
                f"Cannot assign to {type(node.left).__name__}"
            )
        # The write happens only after the right side evaluated cleanly
        value = self._visit(node.right)
        self._env.assign(node.left.name, value)
        return UNIT


def evaluate(node: ASTNode, environment: Environment) -> Value:
    return Evaluator(environment).evaluate(node)


# ── Arithmetic ────────────────────────────────────────────────────────────────

def apply_binary(op: Operator, left: Number, right: Number) -> Number:
    if op is Operator.POWER:
        return _power(left, right)

    kind, a, b = promote(left, right)
    if op is Operator.PLUS:
        return make_number(kind, a + b)
    if op is Operator.MINUS:
        return make_number(kind, a - b)
    if op is Operator.MULTIPLY:
        return make_number(kind, a * b)
    if op is Operator.DIVIDE:
        if kind is NumericKind.INTEGER:
            return Integer(_int_div(a, b))
        return Float(_float_div(a, b))
    raise UnexpectedOperatorInPosition(op, "as a binary operator")


def _int_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    if b == 0:
        raise DivisionByZero()
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return wrap_i32(quotient)


def _float_div(a: float, b: float) -> float:
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    # Sign of the infinity follows both operands, including a signed zero divisor
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _power(left: Number, right: Number) -> Number:
    kind, base, exponent = promote(left, right)
    if kind is NumericKind.INTEGER:
        if exponent >= 0:
            return Integer(wrap_i32(pow(base, exponent, 2**32)))
        # Negative integer exponents fall back to float power
        base, exponent = to_f32(float(base)), to_f32(float(exponent))
    return Float(_float_pow(base, exponent))


def _float_pow(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0.0:
            # 0.0 ^ negative
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        # negative base with a fractional exponent
        return math.nan


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and int(x) % 2 == 1
