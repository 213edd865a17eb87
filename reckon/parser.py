"""
reckon - Operator Precedence Parser
Converts a token stream into a single expression tree using an operator
stack and an operand stack.

Grammar:
    Expr    ::= Primary { BinOp Primary }
    Primary ::= Identifier | "let" Identifier | Integer | Float
              | "(" Expr ")" | "-" Primary
    BinOp   ::= "+" | "-" | "*" | "/" | "^" | "="
"""

from typing import List, Optional
from .lexer import Token, TokenType
from .values import INT32_MAX, to_f32
from .ast_nodes import (
    Operator, Ordering, compare,
    IdentifierNode, IntegerNode, FloatNode,
    BinaryOpNode, UnaryOpNode, ASTNode
)


class ParseError(Exception):
    def __init__(self, message: str, column: Optional[int] = None):
        where = f" Col {column}:" if column is not None else ""
        super().__init__(f"[ParseError]{where} {message}")
        self.column = column


class UnexpectedToken(ParseError):
    def __init__(self, token: Optional[Token]):
        if token is None:
            super().__init__("Expected an operand but reached end of input")
        else:
            super().__init__(
                f"Unexpected token {token.type.name} ({token.value!r})", token.column
            )
        self.token = token


class ExpectedClosingParen(ParseError):
    def __init__(self, token: Optional[Token]):
        if token is None:
            super().__init__("Expected ')' but reached end of input")
        else:
            super().__init__(f"Expected ')' but got {token.value!r}", token.column)
        self.token = token


class ExpectedIdentifier(ParseError):
    pass


class TrailingTokens(ParseError):
    def __init__(self, token: Token):
        super().__init__(f"Unexpected trailing input starting at {token.value!r}", token.column)
        self.token = token


class IncompleteReduction(ParseError):
    """Operator/operand stacks ended in a shape the grammar cannot produce."""

    def __init__(self, message: str):
        super().__init__(f"Internal parser error: {message}")


BINARY_OPERATORS = {
    TokenType.PLUS:   Operator.PLUS,
    TokenType.MINUS:  Operator.MINUS,
    TokenType.STAR:   Operator.MULTIPLY,
    TokenType.SLASH:  Operator.DIVIDE,
    TokenType.CARET:  Operator.POWER,
    TokenType.ASSIGN: Operator.ASSIGN,
}


class Parser:
    def __init__(self, tokens: List[Token]):
        self._tokens = tokens
        self._pos = 0
        self._operators: List[Operator] = [Operator.SENTINEL]
        self._operands: List[ASTNode] = []

    # ------------------------------------------------------------------ helpers

    def _peek(self) -> Optional[Token]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _match(self, *types: TokenType) -> bool:
        tok = self._peek()
        return tok is not None and tok.type in types

    # ------------------------------------------------------------------ public

    def parse(self) -> Optional[ASTNode]:
        """Parse the whole token list. Returns None for an empty statement."""
        if not self._tokens:
            return None

        self._parse_expression()

        tok = self._peek()
        if tok is not None:
            raise TrailingTokens(tok)

        if len(self._operands) != 1 or self._operators != [Operator.SENTINEL]:
            raise IncompleteReduction(
                f"{len(self._operands)} operands and {len(self._operators) - 1} "
                f"operators left after parsing"
            )
        return self._operands.pop()

    # ------------------------------------------------------------------ grammar

    def _parse_expression(self) -> None:
        self._parse_primary()

        while True:
            tok = self._peek()
            if tok is None or tok.type not in BINARY_OPERATORS:
                # ')' or anything else ends this expression; the caller decides
                break
            self._advance()
            self._push_operator(BINARY_OPERATORS[tok.type])
            self._parse_primary()

        self._unwind()

    def _parse_primary(self, negated: bool = False) -> None:
        tok = self._peek()
        if tok is None:
            raise UnexpectedToken(None)

        if tok.type == TokenType.LET:
            self._advance()
            if not self._match(TokenType.IDENTIFIER):
                nxt = self._peek()
                raise ExpectedIdentifier(
                    "Expected identifier after 'let'",
                    nxt.column if nxt is not None else tok.column
                )
            self._operands.append(IdentifierNode(name=self._advance().value))
            return

        if tok.type == TokenType.IDENTIFIER:
            self._operands.append(IdentifierNode(name=self._advance().value))
            return

        if tok.type == TokenType.INTEGER:
            value = int(tok.value)
            if value > INT32_MAX and not negated:
                # 2**31 only exists as the magnitude of the smallest int32
                raise ParseError(f"Integer literal out of range: {tok.value}", tok.column)
            self._advance()
            self._operands.append(IntegerNode(value=value))
            return

        if tok.type == TokenType.FLOAT:
            self._operands.append(FloatNode(value=to_f32(float(self._advance().value))))
            return

        # Parenthesised expression: its own sentinel bounds the reduction
        if tok.type == TokenType.LPAREN:
            self._advance()
            self._operators.append(Operator.SENTINEL)
            self._parse_expression()
            if not self._match(TokenType.RPAREN):
                raise ExpectedClosingParen(self._peek())
            self._advance()
            self._operators.pop()
            return

        # Prefix minus is pushed without reducing: nothing on the stack can
        # complete before its operand exists.
        if tok.type == TokenType.MINUS:
            self._advance()
            self._operators.append(Operator.NEGATE)
            self._parse_primary(negated=True)
            return

        raise UnexpectedToken(tok)

    # ------------------------------------------------------------------ stacks

    def _push_operator(self, op: Operator) -> None:
        while self._should_reduce(self._operators[-1], op):
            self._pop_operator()
        self._operators.append(op)

    @staticmethod
    def _should_reduce(top: Operator, incoming: Operator) -> bool:
        order = compare(top, incoming)
        if order is Ordering.EQUAL:
            # equal ranks reduce left to right, except right-binding "="
            return incoming.left_associative
        return order is Ordering.GREATER

    def _unwind(self) -> None:
        while self._operators[-1] is not Operator.SENTINEL:
            self._pop_operator()

    def _pop_operator(self) -> None:
        op = self._operators.pop()
        if op is Operator.SENTINEL:
            raise IncompleteReduction("attempted to reduce past a sentinel")
        if len(self._operands) < op.arity:
            raise IncompleteReduction(
                f"operator {op.name} needs {op.arity} operands, "
                f"{len(self._operands)} available"
            )

        if op.arity == 1:
            self._operands.append(UnaryOpNode(op=op, operand=self._operands.pop()))
            return

        right = self._operands.pop()
        left = self._operands.pop()
        if op is Operator.ASSIGN and not isinstance(left, IdentifierNode):
            raise ExpectedIdentifier("Left side of '=' must be an identifier")
        self._operands.append(BinaryOpNode(op=op, left=left, right=right))


def parse(tokens: List[Token]) -> Optional[ASTNode]:
    """Parse one statement's tokens into an AST root (None if there are no tokens)."""
    return Parser(tokens).parse()
